from fastapi import APIRouter, Depends, Security

from ops_dashboard.models.carrier_call import CarrierCallAnalytics, CarrierCallFilters
from ops_dashboard.routes._auth import verify_api_key
from ops_dashboard.routes._filters import carrier_call_filters
from ops_dashboard.services.carrier_call_service import get_agents, get_analytics

router = APIRouter(prefix="/api/carrier-calls", tags=["Carrier Calls"])


@router.get(
    "/analytics",
    response_model=CarrierCallAnalytics,
    dependencies=[Security(verify_api_key)],
)
async def analytics_route(filters: CarrierCallFilters = Depends(carrier_call_filters)):
    """Calls, KPIs, daily series and lane stats for the legacy dashboard."""
    return get_analytics(filters)


@router.get(
    "/agents",
    response_model=list[str],
    dependencies=[Security(verify_api_key)],
)
async def agents_route():
    return get_agents()
