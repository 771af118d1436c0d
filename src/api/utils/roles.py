"""
Role Guard

Restricts endpoints to a set of user roles taken from the access token.
"""

from fastapi import Depends, status

from src.api.error import ClientError
from src.app.result import Error
from src.depends import get_current_user
from src.domain.entities import UserRole


def require_roles(*roles: UserRole):
    """
    Dependency factory: the authenticated user's role must be one of `roles`.

    Usage:
        @router.post("/", dependencies=[Depends(require_roles(UserRole.manager))])

    Raises:
        ClientError: 403 if the role is missing or not allowed
    """
    allowed = {UserRole(role).value for role in roles}

    async def verify_role(current_user: dict = Depends(get_current_user)) -> dict:
        role = current_user.get("role") if current_user else None
        if role not in allowed:
            raise ClientError(
                Error("FORBIDDEN", "Insufficient role for this operation"),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return current_user

    return verify_role
