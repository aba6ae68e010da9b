# furniture_store/api/v1/routers/users.py
from fastapi import APIRouter, Depends

from furniture_store.api.v1.deps import require_admin
from furniture_store.models.user import User
from furniture_store.schemas.auth import PrincipalOut, UserUpdateIn
from furniture_store.services import accounts

# Every user-management route is admin only
router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[PrincipalOut])
async def list_users():
    """
    List all user accounts, newest first. Admin accounts are not included.
    """
    users = await User.all().order_by("-created_at")
    return [accounts.principal_summary(u) for u in users]


@router.get("/{user_id}", response_model=PrincipalOut)
async def get_user(user_id: str):
    user = await accounts.get_user(user_id)
    return accounts.principal_summary(user)


@router.put("/{user_id}", response_model=PrincipalOut)
async def update_user(user_id: str, body: UserUpdateIn):
    """
    Replace a user's name and email, and optionally set a new password.

    Raises:
        NotFound (404): USER_NOT_FOUND
        ValidationFailed (400): EMAIL_EXISTS when another user has the email
    """
    user = await accounts.update_user(user_id, body.name, body.email, body.password)
    return accounts.principal_summary(user)


@router.delete("/{user_id}", response_model=PrincipalOut)
async def delete_user(user_id: str):
    """Delete a user account and return what was removed."""
    user = await accounts.get_user(user_id)
    summary = accounts.principal_summary(user)
    await user.delete()
    return summary
