# furniture_store/api/v1/routers/auth.py
from fastapi import APIRouter, Depends, Response, status

from furniture_store.api.v1.deps import get_current_principal, get_refresh_principal, get_token_codec, require_admin
from furniture_store.core.principals import Principal
from furniture_store.core.security import TokenCodec
from furniture_store.models.user import User
from furniture_store.schemas.auth import LoginIn, PrincipalOut, RegisterIn, RoleUpdateIn, TokenOut
from furniture_store.services import accounts

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_token_headers(response: Response, body: dict) -> None:
    # Tokens are mirrored into headers for clients that read them from there
    response.headers["x-auth-token"] = body["accessToken"]
    response.headers["x-refresh-token"] = body["refreshToken"]


@router.post("/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterIn, response: Response, codec: TokenCodec = Depends(get_token_codec)):
    """
    Register a new user account and log it in.

    The password is hashed before storage; email must be unique among users.

    Returns:
        TokenOut: {_id, name, email, role, accessToken, refreshToken}; the
        tokens are also sent as x-auth-token / x-refresh-token headers.

    Error codes:
        - VALIDATION_FAILED (400): malformed body
        - EMAIL_EXISTS (400): email already registered
    """
    user = await accounts.register_user(body.name, body.email, body.password)
    out = accounts.token_response(user, codec)
    _set_token_headers(response, out)
    return out


@router.post("/login", response_model=TokenOut)
async def login(body: LoginIn, response: Response, codec: TokenCodec = Depends(get_token_codec)):
    """
    Authenticate a user or admin by email and password.

    Admin accounts are checked first. Returns the same shape as /register.

    Raises:
        InvalidCredential (401): unknown email or wrong password (AUTH_INVALID_CREDENTIALS)
    """
    principal = await accounts.authenticate(body.email, body.password)
    out = accounts.token_response(principal, codec)
    _set_token_headers(response, out)
    return out


@router.post("/refresh", response_model=TokenOut)
async def refresh(
    response: Response,
    principal: Principal = Depends(get_refresh_principal),
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    Exchange a refresh token (Authorization: Bearer <refreshToken>) for a new pair.

    Raises:
        401: missing, expired or invalid refresh token, or the account's role
        changed since the token was issued
    """
    out = accounts.token_response(principal, codec)
    _set_token_headers(response, out)
    return out


@router.get("/me", response_model=PrincipalOut)
async def me(principal: Principal = Depends(get_current_principal)):
    return accounts.principal_summary(principal)


@router.post(
    "/register-admin",
    response_model=PrincipalOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def register_admin(body: RegisterIn, response: Response, codec: TokenCodec = Depends(get_token_codec)):
    """
    Create another admin account (admin only).

    The body only carries the new admin's summary; its tokens are returned in
    the x-auth-token / x-refresh-token headers.
    """
    admin = await accounts.register_admin(body.name, body.email, body.password)
    _set_token_headers(response, accounts.token_response(admin, codec))
    return accounts.principal_summary(admin)


@router.patch("/users/{user_id}", response_model=PrincipalOut, dependencies=[Depends(require_admin)])
async def change_role(user_id: str, body: RoleUpdateIn):
    """
    Change a user's role (admin only).

    Setting role "admin" moves the account into the admins table under the
    same id; afterwards it logs in as an admin and its old user tokens stop
    working.

    Raises:
        NotFound (404): no user with that id (USER_NOT_FOUND)
        ValidationFailed (400): an admin already uses the email (ADMIN_EMAIL_EXISTS)
    """
    return await accounts.change_user_role(user_id, body.role)


@router.get("/admin/users", response_model=list[PrincipalOut], dependencies=[Depends(require_admin)])
async def list_users_for_admin():
    users = await User.all().order_by("-created_at")
    return [accounts.principal_summary(u) for u in users]
