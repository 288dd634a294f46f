import asyncio

from conftest import AUTH
from ops_dashboard.db.city_data import HUB_CITIES, LOAD_CITIES
from ops_dashboard.db.repositories.call_metric_repo import get_call_metrics
from ops_dashboard.db.repositories.carrier_call_repo import get_carrier_calls
from ops_dashboard.db.repositories.load_repo import get_all_loads, get_load_ids
from ops_dashboard.db.seed import reset_all, seed_call_metrics, seed_loads
from ops_dashboard.models.enums import PRIMARY_OUTCOMES


class TestLoads:
    def test_hundred_unique_routes(self, db):
        assert seed_loads() == 100
        loads = get_all_loads()
        pairs = {(load["origin"], load["destination"]) for load in loads}
        assert len(pairs) == 100
        assert all(o != d for o, d in pairs)
        assert all(o in LOAD_CITIES and d in LOAD_CITIES for o, d in pairs)
        assert loads[0]["load_id"] == "LOAD-001"
        assert any(o in HUB_CITIES or d in HUB_CITIES for o, d in pairs)

    def test_shape_of_generated_loads(self, db):
        seed_loads()
        for load in get_all_loads():
            assert load["delivery_datetime"] > load["pickup_datetime"]
            assert 20000 <= load["weight"] <= 49999
            assert 20 <= load["num_of_pieces"] <= 119
            assert load["miles"] > 0
            if load["equipment_type"] == "flatbed":
                assert load["dimensions"] == "48ft flatbed"
                assert load["notes"].endswith("Oversized load")

    def test_populated_table_left_alone(self, db):
        seed_loads()
        assert seed_loads() == 0
        assert seed_loads(force=True) == 100


class TestCallMetrics:
    def test_outcome_invariants(self, db):
        seed_loads()
        seed_call_metrics()
        calls = get_call_metrics()
        load_ids = get_load_ids()

        # 60 days at 5-12 calls a day
        assert 300 <= len(calls) <= 720
        allowed = {o.value for o in PRIMARY_OUTCOMES}
        for c in calls:
            assert c["outcome_tag"] in allowed
            if c["outcome_tag"] == "won_transferred":
                assert c["final_rate"] is not None
                assert c["related_load_id"] in load_ids
                assert c["sentiment_tag"] in ("positive", "very_positive")
            else:
                assert c["final_rate"] is None
            if c["outcome_tag"] == "no_agreement_price":
                assert c["sentiment_tag"] in ("negative", "very_negative")
                assert c["rejected_rate"] > c["loadboard_rate"]


class TestResetAll:
    def test_report_and_contents(self, db):
        report = asyncio.run(reset_all())
        assert report.loads.seeded == 100
        assert report.geo_points.processed == 100
        assert report.geo_points.skipped == 0
        assert report.call_metrics.seeded > 0
        assert report.carrier_calls.seeded > 0
        assert report.map_points.errors == 0
        assert report.map_points.created == report.map_points.processed

        lanes = {(c["origin_city"], c["destination_city"]) for c in get_carrier_calls()}
        assert len(lanes) <= 8

    def test_reset_endpoint_is_admin_only(self, client):
        admin = client.post(
            "/api/users", json={"email": "ada@acme.test"}, headers=AUTH
        ).json()
        viewer = client.post(
            "/api/users", json={"email": "vic@acme.test"}, headers=AUTH
        ).json()

        denied = client.post("/api/admin/reset", headers={"X-User-Id": viewer["id"]})
        assert denied.status_code == 403

        resp = client.post("/api/admin/reset", headers={"X-User-Id": admin["id"]})
        assert resp.status_code == 200
        assert resp.json()["loads"]["seeded"] == 100
