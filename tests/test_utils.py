import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from ops_dashboard.config import get_settings
from ops_dashboard.db.city_data import canonical_city, split_label
from ops_dashboard.utils import geo
from ops_dashboard.utils.geo import geohash, haversine_miles, resolve_city_static
from ops_dashboard.utils.period import date_range_bounds, iso_utc, parse_iso

# A Wednesday
NOW = datetime(2024, 9, 4, 15, 30, tzinfo=timezone.utc)


class TestPeriod:
    def test_iso_utc_shape(self):
        dt = datetime(2024, 9, 1, 8, 0, 5, 123456, tzinfo=timezone.utc)
        assert iso_utc(dt) == "2024-09-01T08:00:05.123Z"

    def test_parse_accepts_z_and_naive(self):
        assert parse_iso("2024-09-01T08:00:00Z") == datetime(2024, 9, 1, 8, tzinfo=timezone.utc)
        assert parse_iso("2024-09-01T08:00:00").tzinfo is not None
        assert parse_iso("yesterday") is None

    def test_all_time_is_unbounded(self):
        assert date_range_bounds("allTime", NOW) == (None, None)

    def test_today(self):
        start, end = date_range_bounds("today", NOW)
        assert start == "2024-09-04T00:00:00.000Z"
        assert end == "2024-09-04T23:59:59.999Z"

    def test_week_starts_sunday(self):
        start, _ = date_range_bounds("thisWeek", NOW)
        assert start == "2024-09-01T00:00:00.000Z"

    def test_last_days(self):
        assert date_range_bounds("last7", NOW)[0] == "2024-08-28T00:00:00.000Z"
        assert date_range_bounds("last30", NOW)[0] == "2024-08-05T00:00:00.000Z"


class TestCityResolution:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Chicago, IL", "Chicago, IL"),
            ("  chicago,   il ", "Chicago, IL"),
            ("nyc", "New York, NY"),
            ("Salt Lake Cty, UT", "Salt Lake City, UT"),
        ],
    )
    def test_resolves(self, raw, expected):
        label, lat, lng = resolve_city_static(raw)
        assert label == expected

    def test_unknown_and_blank(self):
        assert resolve_city_static("Xyzzy, QQ") is None
        assert resolve_city_static("   ") is None

    def test_canonical_is_exact_only(self):
        assert canonical_city("Salt Lake Cty, UT") is None

    def test_split_label(self):
        assert split_label("Salt Lake City, UT") == ("Salt Lake City", "UT")
        assert split_label("Nowhere") == ("Nowhere", "")


def test_geohash_is_alphanumeric():
    assert geohash(41.8781, -87.6298) == "418781876298"


def test_haversine_chicago_dallas():
    assert haversine_miles(41.8781, -87.6298, 32.7767, -96.7970) == pytest.approx(803, abs=5)


class TestGeocodeFallback:
    @pytest.fixture
    def nominatim(self, settings_env, monkeypatch):
        calls = []

        def handler(request):
            calls.append(request.url.params["q"])
            return httpx.Response(
                200, json=[{"lat": "39.7817", "lon": "-89.6501", "display_name": "Springfield"}]
            )

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            geo.httpx,
            "AsyncClient",
            lambda **kw: real_client(transport=httpx.MockTransport(handler), **kw),
        )
        geo._geocode_cache.clear()
        yield calls
        geo._geocode_cache.clear()

    def test_disabled_by_default(self, nominatim):
        assert asyncio.run(geo.resolve_city("Springfield, IL")) is None
        assert nominatim == []

    def test_enabled_hits_api_once(self, nominatim, monkeypatch):
        monkeypatch.setenv("GEOCODE_FALLBACK", "true")
        get_settings.cache_clear()

        first = asyncio.run(geo.resolve_city("Springfield, IL"))
        second = asyncio.run(geo.resolve_city("Springfield, IL"))

        assert first == ("Springfield, IL", 39.7817, -89.6501)
        assert second == first
        assert nominatim == ["Springfield, IL, USA"]
