from typing import Optional

from ops_dashboard.db.connection import get_db

_COLUMNS = (
    "call_id",
    "load_id",
    "lat",
    "lng",
    "equipment",
    "loadboard_rate",
    "final_rate",
    "agent_name",
    "timestamp_utc",
    "origin_city",
    "origin_state",
)


def upsert_map_point(point: dict) -> None:
    placeholders = ",".join("?" for _ in _COLUMNS)
    updates = ", ".join(f"{c}=excluded.{c}" for c in _COLUMNS if c != "call_id")
    with get_db() as conn:
        conn.execute(
            f"INSERT INTO map_points ({', '.join(_COLUMNS)}) VALUES ({placeholders}) "
            f"ON CONFLICT(call_id) DO UPDATE SET {updates}",
            tuple(point.get(c) for c in _COLUMNS),
        )


def get_map_points(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    equipment: Optional[str] = None,
    agent_name: Optional[str] = None,
) -> list[dict]:
    clauses: list[str] = []
    params: list = []

    if start_date:
        clauses.append("timestamp_utc >= ?")
        params.append(start_date)
    if end_date:
        clauses.append("timestamp_utc <= ?")
        params.append(end_date)
    if equipment:
        clauses.append("equipment = ?")
        params.append(equipment)
    if agent_name:
        clauses.append("agent_name = ?")
        params.append(agent_name)

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

    with get_db() as conn:
        rows = conn.execute(
            f"SELECT * FROM map_points {where} ORDER BY timestamp_utc", params
        ).fetchall()
    return [dict(r) for r in rows]


def get_map_point(call_id: str) -> Optional[dict]:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM map_points WHERE call_id = ?", (call_id,)
        ).fetchone()
    return dict(row) if row else None


def clear_map_points() -> int:
    with get_db() as conn:
        return conn.execute("DELETE FROM map_points").rowcount
