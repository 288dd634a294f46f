import logging

from fastapi import APIRouter, Depends

from ops_dashboard.db.seed import reset_all
from ops_dashboard.models.enums import Role
from ops_dashboard.models.seed import ResetReport
from ops_dashboard.routes._auth import require_role

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/reset", response_model=ResetReport)
async def reset_route(user: dict = Depends(require_role(Role.ADMIN))):
    """Wipe and regenerate all synthetic data."""
    log.info("Full data reset requested by %s", user["id"])
    return await reset_all()
