# furniture_store/core/security.py
"""
Security module for authentication.
Handles password hashing and the signing/verification of the two JWT kinds
(access and refresh) issued to users and admins.
"""
import datetime as dt
import enum
from typing import Any, Callable, Optional

import jwt  # PyJWT
from passlib.context import CryptContext
from pydantic import BaseModel

from furniture_store.config import settings

# Password hashing context
# Argon2 is a modern, salted, memory-hard password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain, hashed)


# ------------------------------------------------------------------------------
# Tokens
# ------------------------------------------------------------------------------
class TokenKind(str, enum.Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenError(Exception):
    """Base class for token verification failures."""


class ExpiredToken(TokenError):
    """Signature is valid but the token is past its expiry."""


class InvalidToken(TokenError):
    """Signature mismatch, wrong secret, wrong token kind or unparseable token."""


class TokenConfig(BaseModel):
    """
    Signing secrets and lifetimes for both token kinds.
    Passed explicitly to TokenCodec so tests can use deterministic values.
    """
    access_secret: str
    refresh_secret: str
    access_ttl: dt.timedelta = dt.timedelta(minutes=50)
    refresh_ttl: dt.timedelta = dt.timedelta(days=7)
    algorithm: str = "HS256"

    @classmethod
    def from_settings(cls, s=settings) -> "TokenConfig":
        return cls(
            access_secret=s.access_token_secret,
            refresh_secret=s.refresh_token_secret,
            access_ttl=dt.timedelta(minutes=s.access_token_expire_minutes),
            refresh_ttl=dt.timedelta(days=s.refresh_token_expire_days),
            algorithm=s.jwt_algorithm,
        )

    def secret_for(self, kind: TokenKind) -> str:
        return self.access_secret if kind is TokenKind.ACCESS else self.refresh_secret

    def ttl_for(self, kind: TokenKind) -> dt.timedelta:
        return self.access_ttl if kind is TokenKind.ACCESS else self.refresh_ttl


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class TokenCodec:
    """
    Issues and verifies access/refresh tokens.

    Token payload:
        - sub: principal id
        - name, email, role: principal identity used by the guards
        - type: "access" or "refresh"
        - iat / exp: issue and expiry timestamps (seconds)

    The clock is injectable; expiry is always evaluated against it rather
    than against PyJWT's own wall clock.
    """

    def __init__(self, config: TokenConfig, clock: Optional[Callable[[], dt.datetime]] = None):
        self.config = config
        self._clock = clock or utc_now

    def _now_ts(self) -> int:
        return int(self._clock().timestamp())

    def issue(self, principal: Any, kind: TokenKind) -> str:
        """
        Sign a token of the given kind for a user or admin record.

        Args:
            principal: Object exposing id, name, email and role
            kind: TokenKind.ACCESS or TokenKind.REFRESH

        Returns:
            Encoded JWT string
        """
        now = self._now_ts()
        payload = {
            "sub": str(principal.id),
            "name": principal.name,
            "email": principal.email,
            "role": principal.role,
            "type": kind.value,
            "iat": now,
            "exp": now + int(self.config.ttl_for(kind).total_seconds()),
        }
        return jwt.encode(payload, self.config.secret_for(kind), algorithm=self.config.algorithm)

    def issue_pair(self, principal: Any) -> tuple[str, str]:
        return self.issue(principal, TokenKind.ACCESS), self.issue(principal, TokenKind.REFRESH)

    def verify(self, token: str, kind: TokenKind) -> dict:
        """
        Decode and validate a token of the given kind.

        Raises:
            InvalidToken: bad signature, wrong secret, wrong kind, missing claims
            ExpiredToken: the signature is fine but the clock is past "exp"

        Signature is checked first, so a token signed under another secret is
        reported as invalid even when it is also expired.
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret_for(kind),
                algorithms=[self.config.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp", "role"]},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(str(exc)) from exc

        if payload.get("type") != kind.value:
            raise InvalidToken(f"expected {kind.value} token")
        if self._now_ts() > int(payload["exp"]):
            raise ExpiredToken("token expired")
        return payload


# Process-wide codec, built once from settings
token_codec = TokenCodec(TokenConfig.from_settings())
