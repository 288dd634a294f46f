from ops_dashboard.db.connection import get_db

_ALLOWED_SORT_FIELDS = {"pickup_datetime", "loadboard_rate"}
_ALLOWED_ORDER = {"asc", "desc"}

_LOAD_COLUMNS = (
    "load_id",
    "origin",
    "destination",
    "pickup_datetime",
    "delivery_datetime",
    "equipment_type",
    "loadboard_rate",
    "notes",
    "weight",
    "commodity_type",
    "num_of_pieces",
    "miles",
    "dimensions",
)


def _build_order_clause(sort_by: str, sort_order: str) -> str:
    field = sort_by if sort_by in _ALLOWED_SORT_FIELDS else "pickup_datetime"
    order = sort_order.upper() if sort_order.lower() in _ALLOWED_ORDER else "ASC"
    # load_id keeps pages stable when the sort key ties
    return f"ORDER BY {field} {order}, load_id ASC"


def _build_where(filters: dict) -> tuple[str, list]:
    clauses: list[str] = []
    params: list = []

    if filters.get("load_id"):
        clauses.append("load_id = ?")
        params.append(filters["load_id"])
    # Text filters are case-insensitive literal substring matches
    for column in ("origin", "destination", "equipment_type"):
        if filters.get(column):
            clauses.append(f"instr(LOWER({column}), ?) > 0")
            params.append(filters[column].lower())
    if filters.get("pickup_from") is not None:
        clauses.append("pickup_datetime >= ?")
        params.append(filters["pickup_from"])
    if filters.get("pickup_to") is not None:
        clauses.append("pickup_datetime <= ?")
        params.append(filters["pickup_to"])
    if filters.get("delivery_from") is not None:
        clauses.append("delivery_datetime >= ?")
        params.append(filters["delivery_from"])
    if filters.get("delivery_to") is not None:
        clauses.append("delivery_datetime <= ?")
        params.append(filters["delivery_to"])
    if filters.get("min_rate") is not None:
        clauses.append("loadboard_rate >= ?")
        params.append(filters["min_rate"])
    if filters.get("max_rate") is not None:
        clauses.append("loadboard_rate <= ?")
        params.append(filters["max_rate"])

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


def get_loads_paginated(
    filters: dict,
    limit: int = 5,
    offset: int = 0,
    sort_by: str = "pickup_datetime",
    sort_order: str = "asc",
) -> tuple[list[dict], int]:
    where, params = _build_where(filters)
    order_clause = _build_order_clause(sort_by, sort_order)

    with get_db() as conn:
        total = conn.execute(
            f"SELECT COUNT(*) FROM loads {where}", params
        ).fetchone()[0]

        rows = conn.execute(
            f"SELECT * FROM loads {where} {order_clause} LIMIT ? OFFSET ?",
            params + [limit, offset],
        ).fetchall()

    return [dict(r) for r in rows], total


def get_all_loads() -> list[dict]:
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM loads ORDER BY load_id").fetchall()
        return [dict(r) for r in rows]


def get_load_ids() -> set[str]:
    with get_db() as conn:
        rows = conn.execute("SELECT load_id FROM loads").fetchall()
    return {r[0] for r in rows}


def count_loads() -> int:
    with get_db() as conn:
        return conn.execute("SELECT COUNT(*) FROM loads").fetchone()[0]


def insert_loads(loads: list[dict]) -> None:
    placeholders = ",".join("?" for _ in _LOAD_COLUMNS)
    with get_db() as conn:
        conn.executemany(
            f"INSERT INTO loads ({', '.join(_LOAD_COLUMNS)}) VALUES ({placeholders})",
            [tuple(load[c] for c in _LOAD_COLUMNS) for load in loads],
        )


def clear_loads() -> int:
    with get_db() as conn:
        return conn.execute("DELETE FROM loads").rowcount
