import uuid
from datetime import datetime, timezone
from typing import Optional

from ops_dashboard.db.connection import get_db
from ops_dashboard.utils.period import iso_utc

_COLUMNS = (
    "id",
    "timestamp_utc",
    "agent_name",
    "equipment_type",
    "outcome_tag",
    "sentiment_tag",
    "negotiation_rounds",
    "loadboard_rate",
    "final_rate",
    "related_load_id",
    "rejected_rate",
    "loads_offered",
)


def new_call_metric_id() -> str:
    return f"CM-{uuid.uuid4().hex[:10]}"


def _row(metric: dict) -> tuple:
    return tuple(metric.get(c) for c in _COLUMNS)


def insert_call_metric(metric: dict) -> dict:
    metric.setdefault("id", new_call_metric_id())
    metric.setdefault("timestamp_utc", iso_utc(datetime.now(timezone.utc)))
    placeholders = ",".join("?" for _ in _COLUMNS)
    with get_db() as conn:
        conn.execute(
            f"INSERT INTO call_metrics ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            _row(metric),
        )
    return metric


def insert_call_metrics(metrics: list[dict]) -> None:
    placeholders = ",".join("?" for _ in _COLUMNS)
    with get_db() as conn:
        conn.executemany(
            f"INSERT INTO call_metrics ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            [_row(m) for m in metrics],
        )


def get_call_metric(metric_id: str) -> Optional[dict]:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM call_metrics WHERE id = ?", (metric_id,)
        ).fetchone()
    return dict(row) if row else None


def get_call_metrics(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    equipment_type: Optional[str] = None,
    agent_name: Optional[str] = None,
    outcome_tag: Optional[str] = None,
    with_related_load: bool = False,
) -> list[dict]:
    clauses: list[str] = []
    params: list = []

    # Inclusive string comparison on the ISO timestamp
    if start_date:
        clauses.append("timestamp_utc >= ?")
        params.append(start_date)
    if end_date:
        clauses.append("timestamp_utc <= ?")
        params.append(end_date)
    if equipment_type:
        clauses.append("equipment_type = ?")
        params.append(equipment_type)
    if agent_name:
        clauses.append("agent_name = ?")
        params.append(agent_name)
    if outcome_tag:
        clauses.append("outcome_tag = ?")
        params.append(outcome_tag)
    if with_related_load:
        clauses.append("related_load_id IS NOT NULL AND related_load_id != ''")

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

    with get_db() as conn:
        rows = conn.execute(
            f"SELECT * FROM call_metrics {where} ORDER BY timestamp_utc",
            params,
        ).fetchall()
    return [dict(r) for r in rows]


def get_agent_names() -> list[str]:
    with get_db() as conn:
        rows = conn.execute(
            "SELECT DISTINCT agent_name FROM call_metrics ORDER BY agent_name"
        ).fetchall()
    return [r[0] for r in rows]


def count_call_metrics() -> int:
    with get_db() as conn:
        return conn.execute("SELECT COUNT(*) FROM call_metrics").fetchone()[0]


def clear_call_metrics() -> int:
    with get_db() as conn:
        return conn.execute("DELETE FROM call_metrics").rowcount
