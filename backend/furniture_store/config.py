# furniture_store/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Furniture Store API"
    env: str = os.getenv("ENV", "dev")
    api_prefix: str = os.getenv("API_URL", "/api/v1")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = _env_list("CORS_ORIGINS", [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])

    # Database (Tortoise connection URL)
    database_url: str = os.getenv("DATABASE_URL", "sqlite://./furniture_store.db")

    # JWT settings: each token kind has its own signing secret
    # JWT_PRIVATE_KEY / JWT_REFRESH_KEY are the names older deployments used
    access_token_secret: str = os.getenv("ACCESS_TOKEN_SECRET", os.getenv("JWT_PRIVATE_KEY", "dev-access-secret"))
    refresh_token_secret: str = os.getenv("REFRESH_TOKEN_SECRET", os.getenv("JWT_REFRESH_KEY", "dev-refresh-secret"))
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "50"))
    refresh_token_expire_days: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")

    # Uploaded catalog images live in <media_root>/<upload_dir> and are served under /<upload_dir>
    media_root: str = os.getenv("MEDIA_ROOT", ".")
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")

    # Default admin created on first startup (skipped when no password is set)
    admin_name: str = os.getenv("ADMIN_NAME", "admin")
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")

settings = Settings()  # Instantiate configuration
