# furniture_store/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating the default admin and finishing
half-applied role changes on startup.
"""
import logging
from furniture_store.config import settings
from furniture_store.models.admin import Admin
from furniture_store.core.security import hash_password
from furniture_store.services.accounts import reconcile_role_changes

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> Admin | None:
    """
    If no admin exists in the database, create a default admin from settings.
    Only takes effect under the following conditions:
      - Currently no admin account
      - And ADMIN_PASSWORD is set (to avoid using default weak password)
    Environment variables:
      ADMIN_NAME     (default: "admin")
      ADMIN_EMAIL    (default: "admin@example.com")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    if await Admin.all().exists():
        return None  # Skip creation if admin already exists

    if not settings.admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return None

    admin = await Admin.create(
        name=settings.admin_name,
        email=settings.admin_email.strip().lower(),
        password_hash=hash_password(settings.admin_password),  # Hash password before storing
    )
    logger.warning("[bootstrap] Created default admin -> name=%s email=%s id=%s",
                   admin.name, admin.email, admin.id)
    return admin

async def run_startup_tasks() -> None:
    await ensure_default_admin()
    await reconcile_role_changes()
