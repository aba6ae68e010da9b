# furniture_store/core/errors.py
"""
Application error taxonomy.

Every domain error carries an HTTP status, a stable machine-readable code and
a human message. Routers and services raise them; a single exception handler
registered in main.py renders them as {"detail": {"code": ..., "message": ...}}.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Unexpected error"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.message
        self.code = code or self.code
        super().__init__(self.message)

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class Unauthenticated(AppError):
    """No credential was supplied."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_REQUIRED"
    message = "Access denied. No token provided"


class ExpiredCredential(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_TOKEN_EXPIRED"
    message = "Token expired. Please log in again"


class InvalidCredential(AppError):
    """Bad signature, malformed token, or a principal that no longer exists."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_INVALID_TOKEN"
    message = "Invalid token"


class RoleMismatch(InvalidCredential):
    code = "AUTH_ROLE_MISMATCH"
    message = "Token role does not match the account role"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN_ADMIN_ONLY"
    message = "Access denied. Admin rights required"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "Not found"


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_FAILED"
    message = "Invalid request"


class Unexpected(AppError):
    pass
