import pytest

from conftest import AUTH
from ops_dashboard.db.repositories.carrier_call_repo import insert_carrier_calls
from ops_dashboard.models.carrier_call import CarrierCallFilters
from ops_dashboard.services.carrier_call_service import (
    compute_kpis,
    daily_outcomes,
    daily_sentiment,
    get_analytics,
    lane_stats,
)


def _call(n, outcome="won_transferred", day="2024-09-01", **overrides):
    call = {
        "id": f"CC-{n:05d}",
        "call_date": f"{day}T10:00:00.000Z",
        "agent_name": "Marcus",
        "equipment_type": "reefer",
        "origin_city": "Chicago",
        "origin_state": "IL",
        "destination_city": "Dallas",
        "destination_state": "TX",
        "outcome": outcome,
        "negotiation_rounds": 2,
        "listed_rate": 1000.0,
        "final_rate": 1100.0 if outcome == "won_transferred" else None,
        "sentiment_score": 1.0,
        "call_duration_seconds": 300,
    }
    call.update(overrides)
    return call


@pytest.fixture
def calls():
    return [
        _call(1),
        _call(2, "no_agreement_price", sentiment_score=-1.5),
        _call(3, "ineligible", day="2024-09-02", origin_city="Atlanta",
              origin_state="GA", destination_city="Miami", destination_state="FL"),
        _call(4, "no_fit_found", day="2024-09-02", sentiment_score=0.0),
    ]


def test_kpis(calls):
    k = compute_kpis(calls)
    assert k.total_calls == 4
    assert k.win_rate == pytest.approx(0.25)
    assert k.pct_no_agreement_price == pytest.approx(0.25)
    assert k.pct_no_fit_found == pytest.approx(0.25)
    assert k.avg_sentiment_score == pytest.approx(0.125)
    assert k.avg_listed == pytest.approx(1000)
    assert k.avg_uplift_pct == pytest.approx(0.1)


def test_kpis_empty():
    assert compute_kpis([]).total_calls == 0
    assert compute_kpis([]).avg_uplift_pct == 0


def test_daily_series(calls):
    outcomes = daily_outcomes(calls)
    assert [d.date for d in outcomes] == ["2024-09-01", "2024-09-02"]
    assert outcomes[0].counts["won_transferred"] == 1
    assert outcomes[0].percentages["won_transferred"] == pytest.approx(50)
    assert outcomes[1].counts["ineligible"] == 1
    assert sum(outcomes[1].percentages.values()) == pytest.approx(100)

    sentiment = daily_sentiment(calls)
    assert sentiment[0].avg_sentiment == pytest.approx(-0.25)
    assert sentiment[1].count == 2


def test_lanes_busiest_first(calls):
    lanes = lane_stats(calls)
    assert lanes[0].origin == "Chicago, IL"
    assert lanes[0].calls == 3
    assert lanes[0].wins == 1
    assert lanes[1].destination == "Miami, FL"
    assert lanes[1].win_rate == 0


def test_analytics_filters(db, calls):
    insert_carrier_calls(calls)
    result = get_analytics(CarrierCallFilters(start_date="2024-09-02", outcome="all"))
    assert result.kpis.total_calls == 2
    assert len(result.calls) == 2


def test_analytics_endpoint(client, calls):
    insert_carrier_calls(calls)
    resp = client.get(
        "/api/carrier-calls/analytics", params={"outcome": "won_transferred"}, headers=AUTH
    )
    assert resp.status_code == 200
    assert resp.json()["kpis"]["total_calls"] == 1
    assert client.get("/api/carrier-calls/agents", headers=AUTH).json() == ["Marcus"]
