from collections import Counter, defaultdict

from ops_dashboard.db.repositories.carrier_call_repo import (
    get_agent_names,
    get_carrier_calls,
)
from ops_dashboard.models.carrier_call import (
    CarrierCall,
    CarrierCallAnalytics,
    CarrierCallFilters,
    CarrierCallKpis,
    DailyOutcomes,
    DailySentiment,
    LaneStat,
)
from ops_dashboard.models.enums import OutcomeTag

_OUTCOMES = [o.value for o in OutcomeTag]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _day(call_date: str) -> str:
    return call_date[:10]


def compute_kpis(calls: list[dict]) -> CarrierCallKpis:
    total = len(calls)
    if total == 0:
        return CarrierCallKpis()

    outcomes = Counter(c["outcome"] for c in calls)
    priced = [
        c for c in calls
        if c.get("listed_rate") is not None and c.get("final_rate") is not None
    ]
    avg_listed = _mean([c["listed_rate"] for c in priced])
    avg_final = _mean([c["final_rate"] for c in priced])

    return CarrierCallKpis(
        total_calls=total,
        win_rate=outcomes[OutcomeTag.WON_TRANSFERRED.value] / total,
        avg_negotiation_rounds=_mean([c["negotiation_rounds"] for c in calls]),
        pct_no_agreement_price=outcomes[OutcomeTag.NO_AGREEMENT_PRICE.value] / total,
        pct_no_fit_found=outcomes[OutcomeTag.NO_FIT_FOUND.value] / total,
        avg_sentiment_score=_mean([c["sentiment_score"] for c in calls]),
        avg_listed=avg_listed,
        avg_final=avg_final,
        avg_uplift_pct=(avg_final - avg_listed) / avg_listed if avg_listed > 0 else 0.0,
    )


def daily_outcomes(calls: list[dict]) -> list[DailyOutcomes]:
    by_day: dict[str, Counter] = defaultdict(Counter)
    for c in calls:
        by_day[_day(c["call_date"])][c["outcome"]] += 1

    series = []
    for day in sorted(by_day):
        counter = by_day[day]
        total = sum(counter.values())
        counts = {o: counter.get(o, 0) for o in _OUTCOMES}
        series.append(
            DailyOutcomes(
                date=day,
                total=total,
                counts=counts,
                percentages={o: n / total * 100 for o, n in counts.items()},
            )
        )
    return series


def daily_sentiment(calls: list[dict]) -> list[DailySentiment]:
    by_day: dict[str, list[float]] = defaultdict(list)
    for c in calls:
        by_day[_day(c["call_date"])].append(c["sentiment_score"])
    return [
        DailySentiment(date=day, avg_sentiment=_mean(scores), count=len(scores))
        for day, scores in sorted(by_day.items())
    ]


def lane_stats(calls: list[dict]) -> list[LaneStat]:
    """Per origin -> destination pair, busiest lane first."""
    lanes: dict[tuple[str, str], list[int]] = {}
    for c in calls:
        origin = f"{c['origin_city']}, {c['origin_state']}"
        destination = f"{c['destination_city']}, {c['destination_state']}"
        stats = lanes.setdefault((origin, destination), [0, 0])
        stats[0] += 1
        if c["outcome"] == OutcomeTag.WON_TRANSFERRED.value:
            stats[1] += 1

    result = [
        LaneStat(
            lane=f"{origin} → {destination}",
            origin=origin,
            destination=destination,
            calls=n,
            wins=wins,
            win_rate=wins / n,
        )
        for (origin, destination), (n, wins) in lanes.items()
    ]
    result.sort(key=lambda s: (-s.calls, s.lane))
    return result


def get_analytics(filters: CarrierCallFilters) -> CarrierCallAnalytics:
    calls = get_carrier_calls(**filters.model_dump())
    return CarrierCallAnalytics(
        calls=[CarrierCall(**c) for c in calls],
        kpis=compute_kpis(calls),
        daily_outcomes=daily_outcomes(calls),
        daily_sentiment=daily_sentiment(calls),
        lanes=lane_stats(calls),
    )


def get_agents() -> list[str]:
    return get_agent_names()
