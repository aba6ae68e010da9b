# furniture_store/schemas/auth.py
"""
Pydantic schemas for authentication and account endpoints.
Field limits: name 3-50 chars, email 5-255 chars, password 5-255 chars.
"""
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


class _EmailLength(BaseModel):
    @field_validator("email", check_fields=False)
    @classmethod
    def _email_length(cls, v: str) -> str:
        if not 5 <= len(v) <= 255:
            raise ValueError("email must be 5-255 characters")
        return v


class RegisterIn(_EmailLength):
    """
    Request model for user (and admin) registration.
    """
    name: str = Field(min_length=3, max_length=50)  # Display name
    email: EmailStr  # Login email (unique per account table)
    password: str = Field(min_length=5, max_length=255)  # Plain text, hashed server-side


class LoginIn(_EmailLength):
    """
    Request model for login. Admin and user accounts share this endpoint.
    """
    email: EmailStr
    password: str = Field(min_length=1, max_length=255)


class RoleUpdateIn(BaseModel):
    role: Literal["user", "admin"]  # "admin" moves the account into the admins table


class UserUpdateIn(_EmailLength):
    """
    Request model for admin edits of a user account.
    Password is optional; when omitted the current hash is kept.
    """
    name: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: Optional[str] = Field(default=None, min_length=5, max_length=255)


class PrincipalOut(BaseModel):
    """
    Account summary returned by auth and user endpoints (no password hash).
    """
    id: str = Field(alias="_id")  # Account unique identifier
    name: str
    email: str
    role: Literal["user", "admin"]

    class Config:
        """Pydantic configuration: allow both field name and alias for population."""
        populate_by_name = True


class TokenOut(PrincipalOut):
    """
    Account summary plus a freshly issued token pair.
    """
    accessToken: str  # Short-lived JWT for API calls
    refreshToken: str  # Long-lived JWT accepted only by /auth/refresh
