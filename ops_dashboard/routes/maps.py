from fastapi import APIRouter, Depends, Security

from ops_dashboard.models.call_metric import CallMetricFilters
from ops_dashboard.models.location import LoadRoute, MapFeatureCollection
from ops_dashboard.routes._auth import verify_api_key
from ops_dashboard.routes._filters import call_metric_filters
from ops_dashboard.services.map_service import get_loads_routes, get_map_points

router = APIRouter(prefix="/api/map", tags=["Map"])


@router.get(
    "/points",
    response_model=MapFeatureCollection,
    dependencies=[Security(verify_api_key)],
)
async def map_points_route(filters: CallMetricFilters = Depends(call_metric_filters)):
    """Won calls as a GeoJSON FeatureCollection, positioned at the load origin."""
    return get_map_points(filters)


@router.get(
    "/routes",
    response_model=list[LoadRoute],
    dependencies=[Security(verify_api_key)],
)
async def load_routes_route(filters: CallMetricFilters = Depends(call_metric_filters)):
    return get_loads_routes(filters)
