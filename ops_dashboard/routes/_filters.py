from typing import Optional

from fastapi import Query

from ops_dashboard.models.call_metric import CallMetricFilters
from ops_dashboard.models.carrier_call import CarrierCallFilters
from ops_dashboard.utils.period import DateRange, date_range_bounds


def _bounds(
    date_range: Optional[DateRange],
    start_date: Optional[str],
    end_date: Optional[str],
) -> tuple[Optional[str], Optional[str]]:
    """Explicit dates win over the preset."""
    start, end = (None, None)
    if date_range is not None:
        start, end = date_range_bounds(date_range.value)
    return start_date or start, end_date or end


async def call_metric_filters(
    date_range: Optional[DateRange] = Query(
        None, description="today, last7, thisWeek, last30 or allTime"
    ),
    start_date: Optional[str] = Query(None, description="ISO start, inclusive"),
    end_date: Optional[str] = Query(None, description="ISO end, inclusive"),
    equipment_type: Optional[str] = Query(None, description="Equipment type or 'all'"),
    agent_name: Optional[str] = Query(None, description="Agent name or 'all'"),
    outcome_tag: Optional[str] = Query(None, description="Outcome tag or 'all'"),
) -> CallMetricFilters:
    start, end = _bounds(date_range, start_date, end_date)
    return CallMetricFilters(
        start_date=start,
        end_date=end,
        equipment_type=equipment_type,
        agent_name=agent_name,
        outcome_tag=outcome_tag,
    )


async def carrier_call_filters(
    date_range: Optional[DateRange] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    equipment_type: Optional[str] = Query(None),
    agent_name: Optional[str] = Query(None),
    outcome: Optional[str] = Query(None),
) -> CarrierCallFilters:
    start, end = _bounds(date_range, start_date, end_date)
    return CarrierCallFilters(
        start_date=start,
        end_date=end,
        equipment_type=equipment_type,
        agent_name=agent_name,
        outcome=outcome,
    )
