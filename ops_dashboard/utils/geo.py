"""
Geolocation utilities: in-memory lookup first, Nominatim fallback for unknowns.
City resolution: alias → exact → fuzzy → geocode API (when enabled).
"""

import logging
import math

import httpx
from cachetools import TTLCache
from rapidfuzz import fuzz, process, utils

from ops_dashboard.config import get_settings
from ops_dashboard.db.city_data import CITY_COORDS, canonical_city

log = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
_geocode_cache: TTLCache = TTLCache(maxsize=512, ttl=86400)  # 24h

_ALL_CITY_KEYS = list(CITY_COORDS.keys())


def resolve_city_static(raw: str) -> tuple[str, float, float] | None:
    """In-memory lookup only. Returns (canonical_label, lat, lng) or None."""
    if not raw or not raw.strip():
        return None
    canonical = canonical_city(raw)
    if canonical is None:
        match = process.extractOne(
            raw.strip(),
            _ALL_CITY_KEYS,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            score_cutoff=88,
        )
        if match is None:
            return None
        canonical = match[0]
    coords = CITY_COORDS[canonical]
    return canonical, coords["lat"], coords["lng"]


async def _geocode_city(query: str) -> tuple[str, float, float] | None:
    """Fallback: call Nominatim API. Cached 24h."""
    if query in _geocode_cache:
        return _geocode_cache[query]
    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            resp = await client.get(
                NOMINATIM_URL,
                params={
                    "q": f"{query}, USA",
                    "format": "json",
                    "limit": 1,
                    "countrycodes": "us",
                },
                headers={"User-Agent": "AcmeOpsDashboard/1.0"},
            )
            if resp.status_code != 200:
                return None
            data = resp.json()
            if not data:
                return None
            r = data[0]
            result = (query, float(r["lat"]), float(r["lon"]))
            _geocode_cache[query] = result
            log.debug("Geocoded '%s' -> %s", query, r.get("display_name"))
            return result
    except (httpx.HTTPError, KeyError, ValueError) as exc:
        log.warning("Geocode failed for '%s': %s", query, exc)
        return None


async def resolve_city(raw: str) -> tuple[str, float, float] | None:
    """
    Resolve a "City, ST" label to (canonical_label, lat, lng).
    Falls back to Nominatim only when GEOCODE_FALLBACK is enabled.
    """
    result = resolve_city_static(raw)
    if result is not None:
        return result
    if not get_settings().geocode_fallback:
        return None
    return await _geocode_city(raw.strip())


def geohash(lat: float, lng: float) -> str:
    """Fixed-precision coordinate key, e.g. (41.8781, -87.6298) -> '418781876298'."""
    raw = f"{lat:.4f}_{lng:.4f}"
    return "".join(ch for ch in raw if ch.isalnum())


def haversine_miles(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Great-circle distance between two points in miles."""
    R = 3958.8
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    return R * 2 * math.asin(math.sqrt(a))
