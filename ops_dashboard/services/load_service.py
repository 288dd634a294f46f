import logging

from ops_dashboard.db.repositories.load_repo import get_loads_paginated
from ops_dashboard.models.load import Load, LoadListQuery, LoadListResponse
from ops_dashboard.utils.period import iso_utc, parse_iso

log = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
MAX_LIMIT = 100

_DATE_FILTERS = ("pickup_from", "pickup_to", "delivery_from", "delivery_to")


def _normalise_filters(query: LoadListQuery) -> dict:
    """Rewrite datetime bounds into the stored ISO shape, dropping unparseable ones."""
    filters = query.filters.model_dump()
    for key in _DATE_FILTERS:
        raw = filters.get(key)
        if raw is None:
            continue
        parsed = parse_iso(raw)
        if parsed is None:
            log.debug("Ignoring unparseable %s=%r", key, raw)
        filters[key] = iso_utc(parsed) if parsed else None
    return filters


def list_loads(query: LoadListQuery) -> LoadListResponse:
    limit = min(max(query.limit, 1), MAX_LIMIT)
    offset = max(query.offset, 0)

    rows, total = get_loads_paginated(
        _normalise_filters(query),
        limit=limit,
        offset=offset,
        sort_by=query.sort_by.value,
        sort_order=query.sort_order.value,
    )
    return LoadListResponse(
        items=[Load(**r) for r in rows],
        total=total,
        limit=limit,
        offset=offset,
    )
