# furniture_store/services/accounts.py
"""
Account operations shared by the auth and users routers:
registration, login, token responses and user -> admin promotion.
"""
import datetime as dt
import logging

from tortoise.exceptions import BaseORMException

from furniture_store.core.errors import InvalidCredential, NotFound, ValidationFailed
from furniture_store.core.ids import parse_uuid
from furniture_store.core.principals import Principal, find_by_email
from furniture_store.core.security import TokenCodec, hash_password, verify_password
from furniture_store.models.admin import Admin
from furniture_store.models.role_change_repair import RoleChangeRepair
from furniture_store.models.user import User

logger = logging.getLogger("uvicorn.error")


class UserNotFound(NotFound):
    code = "USER_NOT_FOUND"
    message = "User not found"


def principal_summary(p: Principal) -> dict:
    """Public view of an account; never includes the password hash."""
    return {"_id": str(p.id), "name": p.name, "email": p.email, "role": p.role}


def token_response(p: Principal, codec: TokenCodec) -> dict:
    access, refresh = codec.issue_pair(p)
    return {**principal_summary(p), "accessToken": access, "refreshToken": refresh}


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user(user_id) -> User:
    uid = parse_uuid(user_id)
    user = await User.get_or_none(id=uid) if uid else None
    if user is None:
        raise UserNotFound()
    return user


async def register_user(name: str, email: str, password: str) -> User:
    email = normalize_email(email)
    if await User.filter(email=email).exists():
        raise ValidationFailed("User already registered", code="EMAIL_EXISTS")
    return await User.create(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role="user",
    )


async def register_admin(name: str, email: str, password: str) -> Admin:
    email = normalize_email(email)
    if await Admin.filter(email=email).exists():
        raise ValidationFailed("Admin already registered", code="ADMIN_EMAIL_EXISTS")
    return await Admin.create(
        name=name,
        email=email,
        password_hash=hash_password(password),
    )


async def authenticate(email: str, password: str) -> Principal:
    """
    Check login credentials.

    Admin accounts are looked up before user accounts. Unknown email and
    wrong password produce the same error.
    """
    principal = await find_by_email(normalize_email(email))
    if principal is None or not verify_password(password, principal.password_hash):
        logger.info("[auth] failed login for %s", email)
        raise InvalidCredential("Invalid email or password", code="AUTH_INVALID_CREDENTIALS")
    return principal


async def update_user(user_id, name: str, email: str, password: str | None = None) -> User:
    user = await get_user(user_id)
    email = normalize_email(email)
    if email != user.email and await User.filter(email=email).exclude(id=user.id).exists():
        raise ValidationFailed("Email already registered", code="EMAIL_EXISTS")
    user.name = name
    user.email = email
    if password:
        user.password_hash = hash_password(password)
    await user.save()
    return user


async def change_user_role(user_id, role: str) -> dict:
    """
    Change a user's role; "admin" promotes the account into the admins table.

    Promotion is two writes against different tables and is not atomic:
      1. create the Admin (same id, name, email, password hash) and re-read it
      2. delete the User row
    If step 2 fails both rows exist. The failure is recorded as a
    RoleChangeRepair so reconcile_role_changes() can finish the move later.

    Returns:
        Summary of the account after the change
    """
    user = await get_user(user_id)

    if role != "admin":
        user.role = role
        await user.save()
        return principal_summary(user)

    if await Admin.filter(email=user.email).exists():
        raise ValidationFailed("An admin with this email already exists", code="ADMIN_EMAIL_EXISTS")

    await Admin.create(
        id=user.id,
        name=user.name,
        email=user.email,
        password_hash=user.password_hash,
    )
    admin = await Admin.get_or_none(id=user.id)
    if admin is None:
        # The user row is untouched, so nothing to repair
        raise ValidationFailed("Could not create admin account", code="ROLE_CHANGE_FAILED")

    try:
        await user.delete()
    except BaseORMException as exc:
        logger.error("[auth] promoted %s to admin but could not delete user row: %s", user.id, exc)
        await RoleChangeRepair.create(principal_id=user.id, email=user.email, reason=str(exc))
    else:
        logger.info("[auth] promoted user %s to admin", user.id)
    return principal_summary(admin)


async def reconcile_role_changes() -> int:
    """
    Finish promotions recorded in RoleChangeRepair.

    For every unresolved record whose admin row exists, delete the leftover
    user row and mark the record resolved. Records whose admin row is gone
    are left for manual inspection.

    Returns:
        Number of records resolved
    """
    resolved = 0
    for repair in await RoleChangeRepair.filter(resolved_at=None):
        if not await Admin.filter(id=repair.principal_id).exists():
            logger.warning("[auth] repair %s: admin %s missing, leaving as is", repair.id, repair.principal_id)
            continue
        await User.filter(id=repair.principal_id).delete()
        repair.resolved_at = dt.datetime.now(dt.timezone.utc)
        await repair.save()
        resolved += 1
    if resolved:
        logger.info("[auth] reconciled %d half-applied promotions", resolved)
    return resolved
