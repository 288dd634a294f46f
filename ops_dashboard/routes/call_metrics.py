from fastapi import APIRouter, Depends, Security

from ops_dashboard.models.call_metric import (
    AgentMetric,
    CallMetricCreateRequest,
    CallMetricCreateResponse,
    CallMetricFilters,
    CallMetricsSummary,
    NoFitBreakdown,
    OutcomeBreakdown,
    PriceDisagreementBreakdown,
    WinsSegmented,
)
from ops_dashboard.routes._auth import verify_api_key
from ops_dashboard.routes._filters import call_metric_filters
from ops_dashboard.services import call_metric_service as svc

router = APIRouter(tags=["Call Metrics"], dependencies=[Security(verify_api_key)])


@router.post(
    "/call-metrics",
    response_model=CallMetricCreateResponse,
    status_code=201,
)
async def create_call_metric_route(req: CallMetricCreateRequest):
    """Record the outcome of a carrier call. The timestamp is set server-side."""
    return svc.create_call_metric(req)


@router.get("/api/call-metrics/summary", response_model=CallMetricsSummary)
async def summary_route(filters: CallMetricFilters = Depends(call_metric_filters)):
    """Headline KPIs for the filtered calls."""
    return svc.get_summary(filters)


@router.get("/api/call-metrics/agents", response_model=list[str])
async def agents_route():
    return svc.get_agents()


@router.get("/api/call-metrics/outcome-breakdown", response_model=OutcomeBreakdown)
async def outcome_breakdown_route(
    filters: CallMetricFilters = Depends(call_metric_filters),
):
    return svc.get_outcome_breakdown(filters)


@router.get("/api/call-metrics/wins-segmented", response_model=WinsSegmented)
async def wins_segmented_route(
    filters: CallMetricFilters = Depends(call_metric_filters),
):
    return svc.get_wins_segmented(filters)


@router.get(
    "/api/call-metrics/price-disagreement-breakdown",
    response_model=PriceDisagreementBreakdown,
)
async def price_disagreement_route(
    filters: CallMetricFilters = Depends(call_metric_filters),
):
    return svc.get_price_disagreement_breakdown(filters)


@router.get("/api/call-metrics/no-fit-breakdown", response_model=NoFitBreakdown)
async def no_fit_route(filters: CallMetricFilters = Depends(call_metric_filters)):
    return svc.get_no_fit_breakdown(filters)


@router.get("/api/call-metrics/agent-metrics", response_model=list[AgentMetric])
async def agent_metrics_route(
    filters: CallMetricFilters = Depends(call_metric_filters),
):
    """Per-agent KPIs using the summary formulas."""
    return svc.get_agent_metrics(filters)
