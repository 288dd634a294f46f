import logging

from ops_dashboard.db.repositories.call_metric_repo import (
    get_agent_names,
    get_call_metrics,
    insert_call_metric,
)
from ops_dashboard.models.call_metric import (
    AgentMetric,
    CallMetric,
    CallMetricCreateRequest,
    CallMetricCreateResponse,
    CallMetricFilters,
    CallMetricsSummary,
    NoFitBreakdown,
    OutcomeBreakdown,
    PriceDisagreementBreakdown,
    WinsSegmented,
)
from ops_dashboard.models.enums import SENTIMENT_SCORES, OutcomeTag
from ops_dashboard.services.map_service import update_map_point_for_call

log = logging.getLogger(__name__)

WON = OutcomeTag.WON_TRANSFERRED.value
PRICE_LOSS = OutcomeTag.NO_AGREEMENT_PRICE.value
NO_FIT = OutcomeTag.NO_FIT_FOUND.value

# Per-call uplift above this counts as a high-uplift win
HIGH_UPLIFT_THRESHOLD = 0.10
# Carrier ask vs listed rate gap bands for price losses
SMALL_GAP_MAX = 0.05
MEDIUM_GAP_MAX = 0.10


# ── Pure aggregation ─────────────────────────────────────────────────────────

def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def uplift(listed: float, final: float) -> float:
    """(final - listed) / listed, 0 when nothing was listed."""
    return (final - listed) / listed if listed > 0 else 0.0


def summarize(calls: list[dict]) -> CallMetricsSummary:
    """
    KPI block for a filtered set of call metrics.

    Listed and final averages are both taken over the won subset (calls with a
    final rate) so the uplift compares like with like.
    """
    total = len(calls)
    if total == 0:
        return CallMetricsSummary()

    won = sum(1 for c in calls if c["outcome_tag"] == WON)
    price_losses = sum(1 for c in calls if c["outcome_tag"] == PRICE_LOSS)
    no_fit = sum(1 for c in calls if c["outcome_tag"] == NO_FIT)

    avg_rounds = _mean([c["negotiation_rounds"] for c in calls])

    # Scale -2..+2 down to -1..+1
    avg_sentiment = _mean([SENTIMENT_SCORES[c["sentiment_tag"]] for c in calls])
    sentiment_score = avg_sentiment / 2

    with_final = [c for c in calls if c.get("final_rate") is not None]
    avg_listed = _mean([c["loadboard_rate"] for c in with_final])
    avg_final = _mean([c["final_rate"] for c in with_final])

    return CallMetricsSummary(
        total_calls=total,
        win_rate=won / total,
        avg_negotiation_rounds=avg_rounds,
        pct_no_agreement_price=price_losses / total,
        pct_no_fit_found=no_fit / total,
        sentiment_score=sentiment_score,
        avg_listed=avg_listed,
        avg_final=avg_final,
        avg_uplift_pct=uplift(avg_listed, avg_final),
    )


def outcome_breakdown(calls: list[dict]) -> OutcomeBreakdown:
    counts = {WON: 0, PRICE_LOSS: 0, NO_FIT: 0}
    for c in calls:
        if c["outcome_tag"] in counts:
            counts[c["outcome_tag"]] += 1
    return OutcomeBreakdown(**counts, total=len(calls))


def wins_segmented(calls: list[dict]) -> WinsSegmented:
    wins = [
        c for c in calls
        if c["outcome_tag"] == WON and c.get("final_rate") is not None
    ]
    high = sum(
        1 for c in wins
        if uplift(c["loadboard_rate"], c["final_rate"]) > HIGH_UPLIFT_THRESHOLD
    )
    return WinsSegmented(
        low_uplift_wins=len(wins) - high,
        high_uplift_wins=high,
        total_wins=len(wins),
    )


def price_disagreement_breakdown(calls: list[dict]) -> PriceDisagreementBreakdown:
    result = PriceDisagreementBreakdown()
    for c in calls:
        if c["outcome_tag"] != PRICE_LOSS:
            continue
        result.total += 1
        rejected = c.get("rejected_rate")
        if rejected is None or c["loadboard_rate"] <= 0:
            result.unknown_gap += 1
            continue
        gap = abs(rejected - c["loadboard_rate"]) / c["loadboard_rate"]
        if gap <= SMALL_GAP_MAX:
            result.small_gap += 1
        elif gap <= MEDIUM_GAP_MAX:
            result.medium_gap += 1
        else:
            result.large_gap += 1
    return result


def no_fit_breakdown(calls: list[dict]) -> NoFitBreakdown:
    result = NoFitBreakdown()
    for c in calls:
        if c["outcome_tag"] != NO_FIT:
            continue
        result.total += 1
        offered = c.get("loads_offered") or 0
        if offered <= 2:
            result.few_loads += 1
        elif offered <= 5:
            result.multiple_loads += 1
        else:
            result.many_loads += 1
    return result


def agent_metrics(calls: list[dict]) -> list[AgentMetric]:
    by_agent: dict[str, list[dict]] = {}
    for c in calls:
        by_agent.setdefault(c["agent_name"], []).append(c)

    metrics = []
    for agent in sorted(by_agent):
        s = summarize(by_agent[agent])
        metrics.append(
            AgentMetric(
                agent_name=agent,
                total_calls=s.total_calls,
                win_rate=s.win_rate,
                avg_negotiation_rounds=s.avg_negotiation_rounds,
                avg_sentiment_score=s.sentiment_score,
                avg_uplift_pct=s.avg_uplift_pct,
            )
        )
    return metrics


# ── Query entry points ───────────────────────────────────────────────────────

def _fetch(filters: CallMetricFilters) -> list[dict]:
    return get_call_metrics(**filters.model_dump())


def get_summary(filters: CallMetricFilters) -> CallMetricsSummary:
    return summarize(_fetch(filters))


def get_outcome_breakdown(filters: CallMetricFilters) -> OutcomeBreakdown:
    return outcome_breakdown(_fetch(filters))


def get_wins_segmented(filters: CallMetricFilters) -> WinsSegmented:
    return wins_segmented(_fetch(filters))


def get_price_disagreement_breakdown(
    filters: CallMetricFilters,
) -> PriceDisagreementBreakdown:
    return price_disagreement_breakdown(_fetch(filters))


def get_no_fit_breakdown(filters: CallMetricFilters) -> NoFitBreakdown:
    return no_fit_breakdown(_fetch(filters))


def get_agent_metrics(filters: CallMetricFilters) -> list[AgentMetric]:
    return agent_metrics(_fetch(filters))


def get_agents() -> list[str]:
    return get_agent_names()


def create_call_metric(req: CallMetricCreateRequest) -> CallMetricCreateResponse:
    log.info(
        "POST /call-metrics received: agent=%s outcome=%s load_id=%s",
        req.agent_name, req.outcome_tag, req.related_load_id,
    )
    data = req.model_dump()
    if not data.get("related_load_id"):
        data["related_load_id"] = None
    metric = CallMetric(**insert_call_metric(data))
    log.info("Call metric inserted: id=%s timestamp=%s",
             metric.id, metric.timestamp_utc)

    # Keep the precomputed map layer in step with new wins
    if metric.outcome_tag == WON and metric.related_load_id:
        update_map_point_for_call(metric.model_dump())

    return CallMetricCreateResponse(id=metric.id)
