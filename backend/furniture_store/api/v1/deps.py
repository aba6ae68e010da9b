# furniture_store/api/v1/deps.py
import logging

from fastapi import Depends, Header, Request

from furniture_store.core.errors import ExpiredCredential, Forbidden, InvalidCredential, Unauthenticated
from furniture_store.core.principals import Principal, PrincipalKind, resolve
from furniture_store.core.security import ExpiredToken, InvalidToken, TokenCodec, TokenKind, token_codec
from furniture_store.services.images import ImageStore, image_store

logger = logging.getLogger("uvicorn.error")


def get_token_codec() -> TokenCodec:
    """Process-wide codec; tests swap it through app.dependency_overrides."""
    return token_codec


def get_image_store() -> ImageStore:
    return image_store


def bearer_token(authorization: str | None) -> str | None:
    """Extract <token> from "Bearer <token>"; anything else counts as no token."""
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        return token or None
    return None


async def _authenticate(
    request: Request,
    authorization: str | None,
    codec: TokenCodec,
    kind: TokenKind,
) -> Principal:
    token = bearer_token(authorization)
    if not token:
        raise Unauthenticated()

    try:
        payload = codec.verify(token, kind)
    except ExpiredToken:
        logger.debug("[auth] rejected expired %s token", kind.value)
        raise ExpiredCredential()
    except InvalidToken as exc:
        logger.debug("[auth] rejected invalid %s token: %s", kind.value, exc)
        raise InvalidCredential()

    # Refresh tokens must still match the account's current role
    principal = await resolve(payload, check_role=kind is TokenKind.REFRESH)
    request.state.principal = principal
    return principal


async def get_current_principal(
    request: Request,
    authorization: str | None = Header(default=None),
    codec: TokenCodec = Depends(get_token_codec),
) -> Principal:
    """
    FastAPI dependency guarding routes with the access token.

    Reads "Authorization: Bearer <accessToken>", verifies it with the access
    secret and loads the user or admin it names. The account is also attached
    to request.state.principal.

    Raises:
        Unauthenticated (401): no bearer token (AUTH_REQUIRED)
        ExpiredCredential (401): token past its expiry (AUTH_TOKEN_EXPIRED)
        InvalidCredential (401): bad token or account gone (AUTH_INVALID_TOKEN / AUTH_USER_NOT_FOUND)

    Usage:
        @router.get("/protected")
        async def protected_route(principal: Principal = Depends(get_current_principal)):
            ...
    """
    return await _authenticate(request, authorization, codec, TokenKind.ACCESS)


async def get_refresh_principal(
    request: Request,
    authorization: str | None = Header(default=None),
    codec: TokenCodec = Depends(get_token_codec),
) -> Principal:
    """
    Same as get_current_principal but for "Authorization: Bearer <refreshToken>".
    Only used by POST /auth/refresh. Additionally fails with RoleMismatch (401)
    when the account's role changed since the token was issued.
    """
    return await _authenticate(request, authorization, codec, TokenKind.REFRESH)


async def require_admin(current: Principal = Depends(get_current_principal)) -> Principal:
    """
    FastAPI dependency to ensure the current principal is an administrator.

    Raises:
        Forbidden (403): authenticated, but not an admin account (FORBIDDEN_ADMIN_ONLY)
    """
    if PrincipalKind.of(current) is not PrincipalKind.ADMIN:
        raise Forbidden()
    return current
