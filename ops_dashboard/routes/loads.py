from typing import Optional

from fastapi import APIRouter, Query, Security

from ops_dashboard.models.enums import LoadSortField, SortOrder
from ops_dashboard.models.load import LoadFilters, LoadListQuery, LoadListResponse
from ops_dashboard.routes._auth import verify_api_key
from ops_dashboard.services.load_service import DEFAULT_LIMIT, list_loads

router = APIRouter(tags=["Loads"])


def _to_int(raw: Optional[str]) -> Optional[int]:
    try:
        return int(raw) if raw not in (None, "") else None
    except ValueError:
        return None


def _to_float(raw: Optional[str]) -> Optional[float]:
    try:
        return float(raw) if raw not in (None, "") else None
    except ValueError:
        return None


def _to_enum(enum_cls, raw: Optional[str], default):
    try:
        return enum_cls(raw.lower()) if raw else default
    except ValueError:
        return default


@router.get(
    "/loads",
    response_model=LoadListResponse,
    dependencies=[Security(verify_api_key)],
)
async def list_loads_route(
    load_id: Optional[str] = Query(None, description="Exact load id"),
    origin: Optional[str] = Query(None, description="Origin (partial, case-insensitive)"),
    destination: Optional[str] = Query(
        None, description="Destination (partial, case-insensitive)"
    ),
    equipment_type: Optional[str] = Query(
        None, description="Equipment type (partial, case-insensitive)"
    ),
    pickup_from: Optional[str] = Query(None, description="ISO 8601, inclusive"),
    pickup_to: Optional[str] = Query(None, description="ISO 8601, inclusive"),
    delivery_from: Optional[str] = Query(None, description="ISO 8601, inclusive"),
    delivery_to: Optional[str] = Query(None, description="ISO 8601, inclusive"),
    min_rate: Optional[str] = Query(None, description="Minimum loadboard rate"),
    max_rate: Optional[str] = Query(None, description="Maximum loadboard rate"),
    limit: Optional[str] = Query(None, description="Page size, default 5, max 100"),
    offset: Optional[str] = Query(None, description="Rows to skip"),
    sort_by: Optional[str] = Query(None, description="pickup_datetime or loadboard_rate"),
    sort_order: Optional[str] = Query(None, description="asc or desc"),
):
    """
    List available loads.
    Values that do not parse (numbers, dates, sort options) are ignored
    rather than rejected.
    """
    filters = LoadFilters(
        load_id=load_id or None,
        origin=origin or None,
        destination=destination or None,
        equipment_type=equipment_type or None,
        pickup_from=pickup_from or None,
        pickup_to=pickup_to or None,
        delivery_from=delivery_from or None,
        delivery_to=delivery_to or None,
        min_rate=_to_float(min_rate),
        max_rate=_to_float(max_rate),
    )
    parsed_limit = _to_int(limit)
    parsed_offset = _to_int(offset)
    query = LoadListQuery(
        filters=filters,
        # Zero or negative limits fall back to the default page size
        limit=parsed_limit if parsed_limit and parsed_limit > 0 else DEFAULT_LIMIT,
        offset=parsed_offset if parsed_offset is not None else 0,
        sort_by=_to_enum(LoadSortField, sort_by, LoadSortField.PICKUP_DATETIME),
        sort_order=_to_enum(SortOrder, sort_order, SortOrder.ASC),
    )
    return list_loads(query)
