"""
Shared fixtures: every test gets its own SQLite file and a fresh Settings.
"""

import pytest
from fastapi.testclient import TestClient

from ops_dashboard.config import get_settings
from ops_dashboard.db.schema import init_db

API_KEY = "test-api-key"
AUTH = {"X-API-Key": API_KEY}


@pytest.fixture
def settings_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "dashboard.db"))
    monkeypatch.setenv("API_KEY", API_KEY)
    monkeypatch.setenv("SEED_ON_STARTUP", "false")
    monkeypatch.setenv("SEED_RANDOM_SEED", "7")
    monkeypatch.setenv("GEOCODE_FALLBACK", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db(settings_env):
    init_db()


@pytest.fixture
def client(settings_env):
    from ops_dashboard.main import app

    with TestClient(app) as c:
        yield c


def make_call(**overrides) -> dict:
    """A call-metric row as the repository returns it."""
    call = {
        "id": "CM-test",
        "timestamp_utc": "2024-09-01T12:00:00.000Z",
        "agent_name": "Pablo",
        "equipment_type": "dry_van",
        "outcome_tag": "no_fit_found",
        "sentiment_tag": "neutral",
        "negotiation_rounds": 2,
        "loadboard_rate": 900.0,
        "final_rate": None,
        "related_load_id": None,
        "rejected_rate": None,
        "loads_offered": None,
    }
    call.update(overrides)
    return call


def won(final: float = 1000.0, listed: float = 900.0, **overrides) -> dict:
    return make_call(
        outcome_tag="won_transferred",
        sentiment_tag="positive",
        loadboard_rate=listed,
        final_rate=final,
        **overrides,
    )


def make_load(load_id: str, **overrides) -> dict:
    load = {
        "load_id": load_id,
        "origin": "Chicago, IL",
        "destination": "Dallas, TX",
        "pickup_datetime": "2024-09-01T08:00:00.000Z",
        "delivery_datetime": "2024-09-02T08:00:00.000Z",
        "equipment_type": "dry_van",
        "loadboard_rate": 1500.0,
        "notes": "",
        "weight": 30000,
        "commodity_type": "Electronics",
        "num_of_pieces": 40,
        "miles": 960,
        "dimensions": "48x102",
    }
    load.update(overrides)
    return load
