"""
Map data: geo points for load endpoints, won-call routes and the
precomputed map-point layer.
"""

import logging

from ops_dashboard.db.city_data import split_label
from ops_dashboard.db.repositories.call_metric_repo import get_call_metrics
from ops_dashboard.db.repositories.geo_point_repo import (
    clear_points,
    get_point,
    get_points_for_entity_type,
    has_any_points,
    insert_geo_points,
)
from ops_dashboard.db.repositories.load_repo import get_all_loads
from ops_dashboard.db.repositories.map_point_repo import (
    clear_map_points,
    get_map_points as fetch_map_points,
    upsert_map_point,
)
from ops_dashboard.models.call_metric import CallMetricFilters
from ops_dashboard.models.enums import GeoRole, OutcomeTag
from ops_dashboard.models.location import (
    GeoPoint,
    GeoSeedReport,
    LoadRoute,
    MapFeature,
    MapFeatureCollection,
    MapPoint,
    MapRebuildReport,
    PointGeometry,
    RouteEndpoint,
)
from ops_dashboard.utils.geo import geohash, resolve_city

log = logging.getLogger(__name__)

WON = OutcomeTag.WON_TRANSFERRED.value
_MAX_MISSING_IDS = 20


# ── Geo points ───────────────────────────────────────────────────────────────

async def seed_geo_points_from_loads(force: bool = False) -> GeoSeedReport:
    """
    Create one origin and one destination point per load.

    Skips entirely when points already exist, unless force is set, in which
    case the existing load points are cleared first.
    """
    if has_any_points():
        if not force:
            log.info("Geo points already present, skipping seed")
            return GeoSeedReport()
        removed = clear_points("load")
        log.info("Cleared %d existing load geo points", removed)

    report = GeoSeedReport()
    points: list[GeoPoint] = []

    for load in get_all_loads():
        report.processed += 1
        extras = {
            "equipment_type": load["equipment_type"],
            "loadboard_rate": load["loadboard_rate"],
            "miles": load["miles"],
        }
        for role, label in (
            (GeoRole.ORIGIN.value, load["origin"]),
            (GeoRole.DESTINATION.value, load["destination"]),
        ):
            resolved = await resolve_city(label)
            if resolved is None:
                log.warning("Could not resolve %s '%s' for %s",
                            role, label, load["load_id"])
                report.skipped += 1
                continue
            canonical, lat, lng = resolved
            city, state = split_label(canonical)
            timestamp = (
                load["pickup_datetime"]
                if role == GeoRole.ORIGIN.value
                else load["delivery_datetime"]
            )
            points.append(
                GeoPoint(
                    entity_id=load["load_id"],
                    role=role,
                    lat=lat,
                    lng=lng,
                    geohash=geohash(lat, lng),
                    state=state,
                    city=city,
                    timestamp_utc=timestamp,
                    extras=extras,
                )
            )
            if role == GeoRole.ORIGIN.value:
                report.origin_points += 1
            else:
                report.destination_points += 1

    if points:
        insert_geo_points([p.model_dump() for p in points])
    log.info(
        "Geo points seeded: %d loads, %d origins, %d destinations, %d skipped",
        report.processed, report.origin_points,
        report.destination_points, report.skipped,
    )
    return report


# ── Routes ───────────────────────────────────────────────────────────────────

def get_loads_routes(filters: CallMetricFilters) -> list[LoadRoute]:
    """Origin/destination pairs for loads behind won calls."""
    # Routes only exist for wins
    if filters.outcome_tag and filters.outcome_tag != WON:
        return []

    calls = get_call_metrics(
        start_date=filters.start_date,
        end_date=filters.end_date,
        equipment_type=filters.equipment_type,
        agent_name=filters.agent_name,
        outcome_tag=WON,
        with_related_load=True,
    )
    load_ids = {c["related_load_id"] for c in calls}
    if not load_ids:
        return []

    # Hash join the load points by id
    origins: dict[str, dict] = {}
    destinations: dict[str, dict] = {}
    for p in get_points_for_entity_type("load"):
        if p["entity_id"] not in load_ids:
            continue
        target = origins if p["role"] == GeoRole.ORIGIN.value else destinations
        target.setdefault(p["entity_id"], p)

    routes = []
    for load_id in sorted(load_ids):
        o = origins.get(load_id)
        d = destinations.get(load_id)
        if o is None or d is None:
            continue
        extras = o.get("extras") or {}
        routes.append(
            LoadRoute(
                load_id=load_id,
                origin=RouteEndpoint(
                    lng=o["lng"], lat=o["lat"],
                    city=o.get("city") or "", state=o.get("state") or "",
                ),
                destination=RouteEndpoint(
                    lng=d["lng"], lat=d["lat"],
                    city=d.get("city") or "", state=d.get("state") or "",
                ),
                equipment_type=extras.get("equipment_type"),
                loadboard_rate=extras.get("loadboard_rate"),
                miles=extras.get("miles"),
            )
        )
    return routes


# ── Map points ───────────────────────────────────────────────────────────────

def _map_point_for(call: dict) -> MapPoint | None:
    origin = get_point(call["related_load_id"], GeoRole.ORIGIN.value)
    if origin is None:
        return None
    return MapPoint(
        call_id=call["id"],
        load_id=call["related_load_id"],
        lat=origin["lat"],
        lng=origin["lng"],
        equipment=call["equipment_type"],
        loadboard_rate=call["loadboard_rate"],
        final_rate=call.get("final_rate"),
        agent_name=call["agent_name"],
        timestamp_utc=call["timestamp_utc"],
        origin_city=origin.get("city"),
        origin_state=origin.get("state"),
    )


def update_map_point_for_call(call: dict) -> bool:
    """Upsert the map point of a won call. False when its load has no origin point."""
    if call.get("outcome_tag") != WON or not call.get("related_load_id"):
        return False
    point = _map_point_for(call)
    if point is None:
        log.warning("No origin point for load %s, map point not created",
                    call["related_load_id"])
        return False
    upsert_map_point(point.model_dump())
    log.debug("Map point upserted for call %s", call["id"])
    return True


def rebuild_map_points() -> MapRebuildReport:
    removed = clear_map_points()
    log.info("Cleared %d map points", removed)

    report = MapRebuildReport()
    missing: list[str] = []
    for call in get_call_metrics(outcome_tag=WON, with_related_load=True):
        report.processed += 1
        point = _map_point_for(call)
        if point is None:
            report.errors += 1
            load_id = call["related_load_id"]
            if load_id not in missing and len(missing) < _MAX_MISSING_IDS:
                missing.append(load_id)
            continue
        upsert_map_point(point.model_dump())
        report.created += 1

    report.missing_load_ids = missing
    log.info("Map points rebuilt: %d processed, %d created, %d errors",
             report.processed, report.created, report.errors)
    return report


def get_map_points(filters: CallMetricFilters) -> MapFeatureCollection:
    """GeoJSON of the precomputed won-call points."""
    if filters.outcome_tag and filters.outcome_tag != WON:
        return MapFeatureCollection(features=[])

    rows = fetch_map_points(
        start_date=filters.start_date,
        end_date=filters.end_date,
        equipment=filters.equipment_type,
        agent_name=filters.agent_name,
    )
    features = [
        MapFeature(
            properties={
                "call_id": r["call_id"],
                "load_id": r["load_id"],
                "equipment": r["equipment"],
                "loadboard_rate": r["loadboard_rate"],
                "final_rate": r["final_rate"],
                "agent_name": r["agent_name"],
                "timestamp_utc": r["timestamp_utc"],
                "origin_city": r["origin_city"],
                "origin_state": r["origin_state"],
            },
            geometry=PointGeometry(coordinates=(r["lng"], r["lat"])),
        )
        for r in rows
    ]
    return MapFeatureCollection(features=features)
