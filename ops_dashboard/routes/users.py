from typing import Optional

from fastapi import APIRouter, Depends, Query, Security

from ops_dashboard.models.enums import Role
from ops_dashboard.models.user import (
    ProfileUpdateRequest,
    RoleStats,
    RoleUpdateRequest,
    User,
    UserCreateRequest,
    UserPage,
)
from ops_dashboard.routes._auth import current_user, require_role, verify_api_key
from ops_dashboard.services import user_service as svc

router = APIRouter(prefix="/api/users", tags=["Users"])

_admin = require_role(Role.ADMIN)


@router.post(
    "",
    response_model=User,
    status_code=201,
    dependencies=[Security(verify_api_key)],
)
async def create_user_route(req: UserCreateRequest):
    """Provision a user after upstream sign-in. The first user becomes admin."""
    return svc.create_user(req)


@router.get("/me", response_model=User)
async def me_route(user: dict = Depends(current_user)):
    return svc.me(user)


@router.patch("/me", response_model=User)
async def update_profile_route(
    req: ProfileUpdateRequest, user: dict = Depends(current_user)
):
    """Update name, phone or image. Blank values are ignored."""
    return svc.update_profile(user, req)


@router.get("", response_model=UserPage, dependencies=[Depends(_admin)])
async def list_users_route(
    cursor: Optional[str] = Query(None),
    num_items: int = Query(svc.DEFAULT_PAGE_SIZE, ge=1, le=100),
):
    """All users, newest first."""
    return svc.list_users(cursor, num_items)


@router.get("/search", response_model=list[User], dependencies=[Depends(_admin)])
async def search_users_route(term: str = Query("")):
    return svc.search_users(term)


@router.get("/count", dependencies=[Depends(_admin)])
async def user_count_route():
    return {"count": svc.get_user_count()}


@router.get("/role-stats", response_model=RoleStats, dependencies=[Depends(_admin)])
async def role_stats_route():
    return svc.get_role_stats()


@router.get("/filtered", response_model=UserPage, dependencies=[Depends(_admin)])
async def filtered_users_route(
    search: Optional[str] = Query(None),
    roles: Optional[list[str]] = Query(None),
    cursor: Optional[str] = Query(None),
    num_items: int = Query(svc.DEFAULT_PAGE_SIZE, ge=1, le=100),
):
    """Search plus role filter, paginated."""
    return svc.get_filtered_users(search, roles, cursor, num_items)


@router.patch("/{user_id}/role", response_model=User)
async def update_role_route(
    user_id: str, req: RoleUpdateRequest, user: dict = Depends(current_user)
):
    return svc.update_role(user, user_id, req.role)
