import logging
from typing import Iterable, Optional

from fastapi import HTTPException

from ops_dashboard.db.repositories.user_repo import (
    count_users,
    get_all_users,
    get_user,
    get_user_by_email,
    insert_user,
    update_user,
)
from ops_dashboard.models.enums import ROLE_HIERARCHY, Role
from ops_dashboard.models.user import (
    ProfileUpdateRequest,
    RoleStats,
    User,
    UserCreateRequest,
    UserPage,
)

log = logging.getLogger(__name__)

MAX_SEARCH_RESULTS = 50
DEFAULT_PAGE_SIZE = 20


def check_user_permission(user_role: Optional[str], required_role: str) -> bool:
    """True when user_role sits at or above required_role. No role means no access."""
    if not user_role:
        return False
    return ROLE_HIERARCHY.get(user_role, 0) >= ROLE_HIERARCHY.get(required_role, 0)


def _effective_role(user: dict) -> str:
    return user.get("role") or Role.VIEWER.value


def _paginate(rows: list[dict], cursor: Optional[str], num_items: int) -> UserPage:
    """Offset cursor: the cursor string is the index of the next row."""
    try:
        start = max(int(cursor), 0) if cursor else 0
    except ValueError:
        start = 0
    num_items = max(num_items, 1)
    end = start + num_items
    return UserPage(
        page=[User(**r) for r in rows[start:end]],
        is_done=end >= len(rows),
        continue_cursor=str(end) if end < len(rows) else None,
    )


def _matches(user: dict, term: str) -> bool:
    return term in (user.get("email") or "").lower() or term in (
        user.get("name") or ""
    ).lower()


def create_user(req: UserCreateRequest) -> User:
    if get_user_by_email(req.email):
        raise HTTPException(409, f"User with email {req.email} already exists")
    user = insert_user(req.name.strip() if req.name else None, req.email)
    log.info("User created: id=%s role=%s", user["id"], user["role"])
    return User(**user)


def me(user: dict) -> User:
    return User(**user)


def list_users(cursor: Optional[str] = None, num_items: int = DEFAULT_PAGE_SIZE) -> UserPage:
    return _paginate(get_all_users(), cursor, num_items)


def search_users(term: str) -> list[User]:
    term = (term or "").strip().lower()
    if not term:
        return []
    hits = [u for u in get_all_users() if _matches(u, term)]
    return [User(**u) for u in hits[:MAX_SEARCH_RESULTS]]


def update_role(actor: dict, user_id: str, role: Role) -> User:
    if not check_user_permission(actor.get("role"), Role.ADMIN.value):
        raise HTTPException(403, "Insufficient permissions")
    if actor["id"] == user_id:
        raise HTTPException(400, "Cannot change your own role")
    target = get_user(user_id)
    if target is None:
        raise HTTPException(404, f"User {user_id} not found")

    update_user(user_id, {"role": role.value})
    log.info("Role changed: user=%s %s -> %s by %s",
             user_id, target.get("role"), role.value, actor["id"])
    target["role"] = role.value
    return User(**target)


def get_user_count() -> int:
    return count_users()


def get_role_stats() -> RoleStats:
    stats = RoleStats()
    for user in get_all_users():
        stats.total += 1
        role = _effective_role(user)
        if role in ROLE_HIERARCHY:
            setattr(stats, role, getattr(stats, role) + 1)
    return stats


def get_filtered_users(
    search: Optional[str] = None,
    roles: Optional[Iterable[str]] = None,
    cursor: Optional[str] = None,
    num_items: int = DEFAULT_PAGE_SIZE,
) -> UserPage:
    rows = get_all_users()
    term = (search or "").strip().lower()
    if term:
        rows = [u for u in rows if _matches(u, term)]
    role_set = {r for r in (roles or []) if r}
    if role_set:
        rows = [u for u in rows if _effective_role(u) in role_set]
    return _paginate(rows, cursor, num_items)


def update_profile(actor: dict, req: ProfileUpdateRequest) -> User:
    changes = req.changes()
    if changes:
        update_user(actor["id"], changes)
        log.info("Profile updated: user=%s fields=%s", actor["id"], sorted(changes))
    return User(**{**actor, **changes})
