import logging
import random
from datetime import datetime, timedelta, timezone

from ops_dashboard.config import get_settings
from ops_dashboard.db.city_data import CITY_COORDS, HUB_CITIES, LOAD_CITIES
from ops_dashboard.db.repositories.call_metric_repo import (
    clear_call_metrics,
    count_call_metrics,
    insert_call_metrics,
    new_call_metric_id,
)
from ops_dashboard.db.repositories.carrier_call_repo import (
    clear_carrier_calls,
    count_carrier_calls,
    insert_carrier_calls,
)
from ops_dashboard.db.repositories.load_repo import (
    clear_loads,
    count_loads,
    get_load_ids,
    insert_loads,
)
from ops_dashboard.models.enums import EquipmentType, OutcomeTag
from ops_dashboard.models.seed import ResetReport, TableSeedReport
from ops_dashboard.services.map_service import (
    rebuild_map_points,
    seed_geo_points_from_loads,
)
from ops_dashboard.utils.geo import haversine_miles
from ops_dashboard.utils.period import iso_utc

log = logging.getLogger(__name__)

SEED_DAYS = 60
LOAD_COUNT = 100
HUB_SHARE = 0.4
# Straight-line to road miles
ROAD_FACTOR = 1.2
AVG_SPEED_MPH = 55

_EQUIPMENT = [e.value for e in EquipmentType]
_RATE_FACTOR = {"reefer": 1.5, "flatbed": 1.3}
_DIMENSIONS = {"flatbed": "48ft flatbed", "reefer": "53x102"}
_NOTES = {"reefer": "Temperature controlled", "flatbed": "Oversized load"}

COMMODITIES = [
    "Electronics", "Frozen Foods", "Steel Beams", "Furniture", "Pharmaceuticals",
    "Consumer Goods", "Paper Products", "Construction Materials", "Dairy Products",
    "Auto Parts", "Produce", "Industrial Equipment", "Appliances", "Fresh Produce",
    "Retail Goods", "Textiles", "Chemicals", "Machinery", "Food Products",
    "Building Supplies",
]

CALL_METRIC_AGENTS = ["Pablo", "Katya"]
# Weighted draw over the outcomes a live call can end with
CALL_METRIC_OUTCOMES = [
    (OutcomeTag.WON_TRANSFERRED.value, 0.45),
    (OutcomeTag.NO_AGREEMENT_PRICE.value, 0.30),
    (OutcomeTag.NO_FIT_FOUND.value, 0.25),
]

CARRIER_CALL_AGENTS = ["Pablo", "Katya", "Marcus", "Sofia"]
CARRIER_CALL_LANES = [
    ("Chicago", "IL", "Dallas", "TX"),
    ("Los Angeles", "CA", "Phoenix", "AZ"),
    ("Atlanta", "GA", "Miami", "FL"),
    ("New York", "NY", "Boston", "MA"),
    ("Seattle", "WA", "Portland", "OR"),
    ("Denver", "CO", "Salt Lake City", "UT"),
    ("Houston", "TX", "New Orleans", "LA"),
    ("Detroit", "MI", "Cleveland", "OH"),
]


def _rng() -> random.Random:
    return random.Random(get_settings().seed_random_seed)


def _random_instant(rng: random.Random, now: datetime, day: int) -> datetime:
    """A moment within the 24h window that ends `day` days before now."""
    return now - timedelta(days=day) - timedelta(seconds=rng.random() * 86400)


# ── Loads ────────────────────────────────────────────────────────────────────

def _pick_route(rng: random.Random, used: set[tuple[str, str]]) -> tuple[str, str]:
    while True:
        if rng.random() < HUB_SHARE:
            if rng.random() < 0.5:
                origin, destination = rng.choice(HUB_CITIES), rng.choice(LOAD_CITIES)
            else:
                origin, destination = rng.choice(LOAD_CITIES), rng.choice(HUB_CITIES)
        else:
            origin, destination = rng.choice(LOAD_CITIES), rng.choice(LOAD_CITIES)
        if origin != destination and (origin, destination) not in used:
            used.add((origin, destination))
            return origin, destination


def _make_seed_loads(rng: random.Random) -> list[dict]:
    now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
    used: set[tuple[str, str]] = set()
    loads: list[dict] = []

    for i in range(1, LOAD_COUNT + 1):
        origin, destination = _pick_route(rng, used)
        o, d = CITY_COORDS[origin], CITY_COORDS[destination]
        miles = round(haversine_miles(o["lat"], o["lng"], d["lat"], d["lng"]) * ROAD_FACTOR)

        equipment = rng.choice(_EQUIPMENT)
        commodity = rng.choice(COMMODITIES)
        base_rate = miles * _RATE_FACTOR.get(equipment, 1.0)
        rate = round(base_rate * (0.8 + rng.random() * 0.4))

        pickup = now - timedelta(days=rng.randrange(SEED_DAYS), hours=rng.randrange(24))
        delivery = pickup + timedelta(hours=miles / AVG_SPEED_MPH)

        loads.append({
            "load_id": f"LOAD-{i:03d}",
            "origin": origin,
            "destination": destination,
            "pickup_datetime": iso_utc(pickup),
            "delivery_datetime": iso_utc(delivery),
            "equipment_type": equipment,
            "loadboard_rate": float(rate),
            "notes": f"{commodity} - {_NOTES.get(equipment, 'Standard delivery')}",
            "weight": rng.randint(20000, 49999),
            "commodity_type": commodity,
            "num_of_pieces": rng.randint(20, 119),
            "miles": miles,
            "dimensions": _DIMENSIONS.get(equipment, "48x102"),
        })
    return loads


def seed_loads(force: bool = False) -> int:
    """Insert the synthetic load set. Skips a populated table unless force is set."""
    if count_loads() > 0:
        if not force:
            log.info("Loads already seeded, skipping")
            return 0
        clear_loads()
    loads = _make_seed_loads(_rng())
    insert_loads(loads)
    log.info("Seeded %d loads", len(loads))
    return len(loads)


# ── Call metrics ─────────────────────────────────────────────────────────────

def _sentiment_for(rng: random.Random, outcome: str) -> str:
    if outcome == OutcomeTag.WON_TRANSFERRED.value:
        return "positive" if rng.random() > 0.3 else "very_positive"
    if outcome == OutcomeTag.NO_AGREEMENT_PRICE.value:
        return "negative" if rng.random() > 0.5 else "very_negative"
    return "neutral"


def _make_seed_call_metrics(rng: random.Random, load_ids: list[str]) -> list[dict]:
    now = datetime.now(timezone.utc)
    outcomes = [o for o, _ in CALL_METRIC_OUTCOMES]
    weights = [w for _, w in CALL_METRIC_OUTCOMES]
    calls: list[dict] = []

    for day in range(SEED_DAYS):
        for _ in range(rng.randint(5, 12)):
            outcome = rng.choices(outcomes, weights=weights)[0]
            listed = rng.randint(500, 2499)
            won = outcome == OutcomeTag.WON_TRANSFERRED.value

            calls.append({
                "id": new_call_metric_id(),
                "timestamp_utc": iso_utc(_random_instant(rng, now, day)),
                "agent_name": rng.choice(CALL_METRIC_AGENTS),
                "equipment_type": rng.choice(_EQUIPMENT),
                "outcome_tag": outcome,
                "sentiment_tag": _sentiment_for(rng, outcome),
                "negotiation_rounds": rng.randint(1, 5),
                "loadboard_rate": float(listed),
                "final_rate": float(listed + rng.randint(-100, 99)) if won else None,
                "related_load_id": rng.choice(load_ids) if won and load_ids else None,
                "rejected_rate": (
                    float(round(listed * (1 + rng.uniform(0.01, 0.30))))
                    if outcome == OutcomeTag.NO_AGREEMENT_PRICE.value
                    else None
                ),
                "loads_offered": (
                    rng.randint(0, 6)
                    if outcome == OutcomeTag.NO_FIT_FOUND.value
                    else None
                ),
            })
    return calls


def seed_call_metrics(force: bool = False) -> int:
    if count_call_metrics() > 0:
        if not force:
            log.info("Call metrics already seeded, skipping")
            return 0
        clear_call_metrics()
    calls = _make_seed_call_metrics(_rng(), sorted(get_load_ids()))
    insert_call_metrics(calls)
    log.info("Seeded %d call metrics", len(calls))
    return len(calls)


# ── Carrier calls ────────────────────────────────────────────────────────────

def _make_seed_carrier_calls(rng: random.Random) -> list[dict]:
    now = datetime.now(timezone.utc)
    outcomes = [o.value for o in OutcomeTag]
    calls: list[dict] = []

    for day in range(SEED_DAYS):
        for _ in range(rng.randint(5, 12)):
            origin_city, origin_state, dest_city, dest_state = rng.choice(
                CARRIER_CALL_LANES
            )
            outcome = rng.choice(outcomes)
            listed = rng.randint(500, 2499)

            if outcome == OutcomeTag.WON_TRANSFERRED.value:
                sentiment = rng.random() * 2 - 0.5
            elif outcome == OutcomeTag.NO_AGREEMENT_PRICE.value:
                sentiment = rng.random() * 2 - 2
            else:
                sentiment = rng.random() * 2 - 1

            calls.append({
                "id": f"CC-{len(calls) + 1:05d}",
                "call_date": iso_utc(_random_instant(rng, now, day)),
                "agent_name": rng.choice(CARRIER_CALL_AGENTS),
                "equipment_type": rng.choice(_EQUIPMENT),
                "origin_city": origin_city,
                "origin_state": origin_state,
                "destination_city": dest_city,
                "destination_state": dest_state,
                "outcome": outcome,
                "negotiation_rounds": rng.randint(1, 5),
                "listed_rate": float(listed),
                "final_rate": (
                    float(listed + rng.randint(-100, 99))
                    if outcome == OutcomeTag.WON_TRANSFERRED.value
                    else None
                ),
                "sentiment_score": round(sentiment, 1),
                "call_duration_seconds": rng.randint(120, 719),
            })
    return calls


def seed_carrier_calls(force: bool = False) -> int:
    if count_carrier_calls() > 0:
        if not force:
            log.info("Carrier calls already seeded, skipping")
            return 0
        clear_carrier_calls()
    calls = _make_seed_carrier_calls(_rng())
    insert_carrier_calls(calls)
    log.info("Seeded %d carrier calls", len(calls))
    return len(calls)


# ── Orchestration ────────────────────────────────────────────────────────────

async def seed_if_empty() -> None:
    """Startup seeding: fill whichever tables are still empty."""
    seed_loads()
    await seed_geo_points_from_loads()
    seeded_calls = seed_call_metrics()
    seed_carrier_calls()
    if seeded_calls:
        rebuild_map_points()


async def reset_all() -> ResetReport:
    """Wipe and regenerate every dataset, loads first so calls can link to them."""
    log.info("Step 1/5: clearing and seeding loads")
    loads_cleared = clear_loads()
    loads_seeded = seed_loads()

    log.info("Step 2/5: seeding geo points from loads")
    geo = await seed_geo_points_from_loads(force=True)

    log.info("Step 3/5: clearing and seeding call metrics")
    calls_cleared = clear_call_metrics()
    calls_seeded = seed_call_metrics()

    log.info("Step 4/5: clearing and seeding carrier calls")
    carrier_cleared = clear_carrier_calls()
    carrier_seeded = seed_carrier_calls()

    log.info("Step 5/5: rebuilding map points")
    map_points = rebuild_map_points()
    if map_points.errors:
        log.warning("%d map point errors, missing loads: %s",
                    map_points.errors, ", ".join(map_points.missing_load_ids[:5]))

    log.info("Database reset complete")
    return ResetReport(
        loads=TableSeedReport(cleared=loads_cleared, seeded=loads_seeded),
        geo_points=geo,
        call_metrics=TableSeedReport(cleared=calls_cleared, seeded=calls_seeded),
        carrier_calls=TableSeedReport(cleared=carrier_cleared, seeded=carrier_seeded),
        map_points=map_points,
    )
