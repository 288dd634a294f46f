from typing import Optional

from fastapi import Depends, Header, HTTPException, Security
from fastapi.security import APIKeyHeader

from ops_dashboard.config import get_settings
from ops_dashboard.db.repositories.user_repo import get_user
from ops_dashboard.models.enums import Role
from ops_dashboard.services.user_service import check_user_permission

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(api_key: str = Security(_api_key_header)) -> str:
    expected = get_settings().api_key
    if not expected:
        raise HTTPException(500, "Server configuration error: API_KEY not set")
    if not api_key or api_key != expected:
        raise HTTPException(401, "Unauthorized: Invalid or missing API key")
    return api_key


async def current_user(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> dict:
    """The acting user, identified upstream and passed in X-User-Id."""
    if not x_user_id:
        raise HTTPException(401, "Not authenticated")
    user = get_user(x_user_id)
    if user is None:
        raise HTTPException(401, "Unknown user")
    return user


def require_role(role: Role):
    async def _check(user: dict = Depends(current_user)) -> dict:
        if not check_user_permission(user.get("role"), role.value):
            raise HTTPException(403, "Insufficient permissions")
        return user

    return _check
