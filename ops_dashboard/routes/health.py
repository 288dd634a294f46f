from fastapi import APIRouter

from ops_dashboard.config import get_settings

router = APIRouter()


def _status() -> dict:
    return {"status": "healthy", "service": get_settings().app_name}


@router.get("/health", tags=["Health"])
async def health():
    return _status()


@router.get("/api/health", tags=["Health"])
async def api_health():
    return _status()


@router.get("/api/config", tags=["Health"])
async def client_config():
    """Public keys the dashboard front end needs at load time."""
    s = get_settings()
    return {
        "mapbox_token": s.mapbox_token,
        "ag_charts_license": s.ag_charts_license,
    }
