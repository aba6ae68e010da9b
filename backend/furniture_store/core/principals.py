# furniture_store/core/principals.py
"""
Principal resolution.

A principal is either a User or an Admin record. The role claim of a token
decides which table is consulted; PrincipalKind keeps that mapping in one place.
"""
import enum
from typing import Union

from furniture_store.core.errors import InvalidCredential, RoleMismatch
from furniture_store.core.ids import parse_uuid
from furniture_store.models.admin import Admin
from furniture_store.models.user import User

Principal = Union[User, Admin]


class PrincipalKind(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def from_role(cls, role: str | None) -> "PrincipalKind":
        return cls.ADMIN if role == cls.ADMIN.value else cls.USER

    @classmethod
    def of(cls, principal: Principal) -> "PrincipalKind":
        return cls.ADMIN if isinstance(principal, Admin) else cls.USER

    @property
    def model(self) -> type[Principal]:
        return Admin if self is PrincipalKind.ADMIN else User


class PrincipalNotFound(InvalidCredential):
    code = "AUTH_USER_NOT_FOUND"
    message = "Account for this token no longer exists"


async def resolve(payload: dict, check_role: bool = False) -> Principal:
    """
    Look up the account a decoded token refers to.

    Args:
        payload: Verified token payload (needs "sub" and "role")
        check_role: Also require the stored role to equal the token's role.
            Used for refresh tokens so a token minted before a role change
            cannot be exchanged for a new pair.

    Raises:
        PrincipalNotFound: no record with that id in the role's table
        RoleMismatch: check_role is set and the roles differ
    """
    kind = PrincipalKind.from_role(payload.get("role"))
    principal_id = parse_uuid(payload.get("sub"))
    principal = await kind.model.get_or_none(id=principal_id) if principal_id else None
    if principal is None:
        raise PrincipalNotFound()
    if check_role and principal.role != payload.get("role"):
        raise RoleMismatch()
    return principal


async def find_by_email(email: str) -> Principal | None:
    """Admins take precedence over users sharing the same email."""
    admin = await Admin.get_or_none(email=email)
    if admin is not None:
        return admin
    return await User.get_or_none(email=email)
