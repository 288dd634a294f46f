from typing import Optional

from ops_dashboard.db.connection import get_db

_COLUMNS = (
    "id",
    "call_date",
    "agent_name",
    "equipment_type",
    "origin_city",
    "origin_state",
    "destination_city",
    "destination_state",
    "outcome",
    "negotiation_rounds",
    "listed_rate",
    "final_rate",
    "sentiment_score",
    "call_duration_seconds",
)


def insert_carrier_calls(calls: list[dict]) -> None:
    placeholders = ",".join("?" for _ in _COLUMNS)
    with get_db() as conn:
        conn.executemany(
            f"INSERT INTO carrier_calls ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            [tuple(c.get(col) for col in _COLUMNS) for c in calls],
        )


def get_carrier_calls(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    equipment_type: Optional[str] = None,
    agent_name: Optional[str] = None,
    outcome: Optional[str] = None,
) -> list[dict]:
    clauses: list[str] = []
    params: list = []

    if start_date:
        clauses.append("call_date >= ?")
        params.append(start_date)
    if end_date:
        clauses.append("call_date <= ?")
        params.append(end_date)
    if equipment_type:
        clauses.append("equipment_type = ?")
        params.append(equipment_type)
    if agent_name:
        clauses.append("agent_name = ?")
        params.append(agent_name)
    if outcome:
        clauses.append("outcome = ?")
        params.append(outcome)

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

    with get_db() as conn:
        rows = conn.execute(
            f"SELECT * FROM carrier_calls {where} ORDER BY call_date",
            params,
        ).fetchall()
    return [dict(r) for r in rows]


def get_agent_names() -> list[str]:
    with get_db() as conn:
        rows = conn.execute(
            "SELECT DISTINCT agent_name FROM carrier_calls ORDER BY agent_name"
        ).fetchall()
    return [r[0] for r in rows]


def count_carrier_calls() -> int:
    with get_db() as conn:
        return conn.execute("SELECT COUNT(*) FROM carrier_calls").fetchone()[0]


def clear_carrier_calls() -> int:
    with get_db() as conn:
        return conn.execute("DELETE FROM carrier_calls").rowcount
