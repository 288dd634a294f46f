import json
from typing import Optional

from ops_dashboard.db.connection import get_db


def _row_to_dict(row) -> dict:
    d = dict(row)
    if d.get("extras"):
        try:
            d["extras"] = json.loads(d["extras"])
        except (json.JSONDecodeError, TypeError):
            d["extras"] = {}
    else:
        d["extras"] = {}
    return d


def insert_geo_points(points: list[dict]) -> None:
    with get_db() as conn:
        conn.executemany(
            """INSERT INTO geo_points
               (entity_type, entity_id, role, lat, lng, geohash,
                country, state, city, timestamp_utc, extras)
               VALUES (?,?,?,?,?,?,?,?,?,?,?)""",
            [
                (
                    p["entity_type"],
                    p["entity_id"],
                    p["role"],
                    p["lat"],
                    p["lng"],
                    p["geohash"],
                    p.get("country", "US"),
                    p.get("state"),
                    p.get("city"),
                    p.get("timestamp_utc"),
                    json.dumps(p.get("extras") or {}),
                )
                for p in points
            ],
        )


def get_points_for_entity_type(entity_type: str = "load") -> list[dict]:
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM geo_points WHERE entity_type = ? ORDER BY id",
            (entity_type,),
        ).fetchall()
    return [_row_to_dict(r) for r in rows]


def get_point(entity_id: str, role: str, entity_type: str = "load") -> Optional[dict]:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM geo_points "
            "WHERE entity_type = ? AND entity_id = ? AND role = ? "
            "ORDER BY id LIMIT 1",
            (entity_type, entity_id, role),
        ).fetchone()
    return _row_to_dict(row) if row else None


def has_any_points() -> bool:
    with get_db() as conn:
        return conn.execute("SELECT 1 FROM geo_points LIMIT 1").fetchone() is not None


def clear_points(entity_type: str = "load") -> int:
    with get_db() as conn:
        return conn.execute(
            "DELETE FROM geo_points WHERE entity_type = ?", (entity_type,)
        ).rowcount
