import asyncio

import pytest

from conftest import AUTH, make_load
from ops_dashboard.db.repositories.call_metric_repo import get_call_metric
from ops_dashboard.db.repositories.load_repo import insert_loads
from ops_dashboard.db.repositories.map_point_repo import get_map_point
from ops_dashboard.services.map_service import seed_geo_points_from_loads


def _body(**overrides):
    body = {
        "agent_name": "  Pablo ",
        "equipment_type": "dry_van",
        "outcome_tag": "won_transferred",
        "sentiment_tag": "positive",
        "negotiation_rounds": 2,
        "loadboard_rate": 1500,
        "final_rate": 1600,
    }
    body.update(overrides)
    return body


class TestCreate:
    def test_created_with_server_timestamp(self, client):
        resp = client.post("/call-metrics", json=_body(), headers=AUTH)
        assert resp.status_code == 201
        data = resp.json()
        assert data["message"] == "Call metric created successfully"

        stored = get_call_metric(data["id"])
        assert stored["agent_name"] == "Pablo"
        assert stored["timestamp_utc"].endswith("Z")
        assert stored["final_rate"] == 1600

    def test_requires_api_key(self, client):
        resp = client.post("/call-metrics", json=_body())
        assert resp.status_code == 401

    def test_missing_field_reported(self, client):
        body = _body()
        del body["agent_name"]
        resp = client.post("/call-metrics", json=body, headers=AUTH)
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "Validation error",
            "details": "Missing required field: agent_name",
        }

    def test_unknown_outcome(self, client):
        resp = client.post(
            "/call-metrics", json=_body(outcome_tag="ineligible"), headers=AUTH
        )
        assert resp.status_code == 400
        assert resp.json()["details"].startswith("Invalid outcome_tag. Must be one of:")

    def test_unknown_sentiment(self, client):
        resp = client.post(
            "/call-metrics", json=_body(sentiment_tag="ecstatic"), headers=AUTH
        )
        assert resp.status_code == 400
        assert "sentiment_tag" in resp.json()["details"]

    def test_won_without_final_rate(self, client):
        resp = client.post("/call-metrics", json=_body(final_rate=None), headers=AUTH)
        assert resp.status_code == 400
        assert resp.json()["details"] == (
            "final_rate must be provided when outcome_tag is 'won_transferred'"
        )

    def test_loss_with_final_rate(self, client):
        resp = client.post(
            "/call-metrics",
            json=_body(outcome_tag="no_fit_found", sentiment_tag="neutral"),
            headers=AUTH,
        )
        assert resp.status_code == 400
        assert resp.json()["details"] == (
            "final_rate must be null when outcome_tag is not 'won_transferred'"
        )

    def test_loss_without_final_rate_accepted(self, client):
        resp = client.post(
            "/call-metrics",
            json=_body(
                outcome_tag="no_agreement_price",
                sentiment_tag="negative",
                final_rate=None,
                rejected_rate=1800,
            ),
            headers=AUTH,
        )
        assert resp.status_code == 201

    def test_malformed_json(self, client):
        resp = client.post(
            "/call-metrics",
            content=b"{not json",
            headers={**AUTH, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Validation error"


class TestMapPointSync:
    @pytest.fixture
    def with_geo(self, client):
        insert_loads([make_load("LOAD-001")])
        asyncio.run(seed_geo_points_from_loads())
        return client

    def test_won_call_gets_map_point(self, with_geo):
        resp = with_geo.post(
            "/call-metrics", json=_body(related_load_id="LOAD-001"), headers=AUTH
        )
        point = get_map_point(resp.json()["id"])
        assert point is not None
        assert point["load_id"] == "LOAD-001"
        assert point["origin_city"] == "Chicago"
        assert point["lat"] == pytest.approx(41.8781)

    def test_unknown_load_creates_no_point(self, with_geo):
        resp = with_geo.post(
            "/call-metrics", json=_body(related_load_id="LOAD-999"), headers=AUTH
        )
        assert resp.status_code == 201
        assert get_map_point(resp.json()["id"]) is None


class TestQueryEndpoints:
    def test_summary_reflects_created_calls(self, client):
        client.post("/call-metrics", json=_body(), headers=AUTH)
        client.post(
            "/call-metrics",
            json=_body(outcome_tag="no_fit_found", sentiment_tag="neutral",
                       final_rate=None, loads_offered=1),
            headers=AUTH,
        )
        s = client.get(
            "/api/call-metrics/summary", params={"date_range": "today"}, headers=AUTH
        ).json()
        assert s["total_calls"] == 2
        assert s["win_rate"] == pytest.approx(0.5)

        nf = client.get("/api/call-metrics/no-fit-breakdown", headers=AUTH).json()
        assert nf["few_loads"] == 1

        agents = client.get("/api/call-metrics/agents", headers=AUTH).json()
        assert agents == ["Pablo"]

    def test_breakdown_endpoints_empty(self, client):
        for path in (
            "outcome-breakdown",
            "wins-segmented",
            "price-disagreement-breakdown",
            "no-fit-breakdown",
        ):
            resp = client.get(f"/api/call-metrics/{path}", headers=AUTH)
            assert resp.status_code == 200
        assert client.get("/api/call-metrics/agent-metrics", headers=AUTH).json() == []

    def test_bad_date_range_rejected(self, client):
        resp = client.get(
            "/api/call-metrics/summary", params={"date_range": "fortnight"}, headers=AUTH
        )
        assert resp.status_code == 400
