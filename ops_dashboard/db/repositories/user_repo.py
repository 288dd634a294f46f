import uuid
from datetime import datetime, timezone
from typing import Optional

from ops_dashboard.db.connection import get_db
from ops_dashboard.utils.period import iso_utc


def insert_user(name: Optional[str], email: str) -> dict:
    """Insert a user. The first user in an empty table becomes admin."""
    user = {
        "id": f"USR-{uuid.uuid4().hex[:10]}",
        "name": name,
        "email": email,
        "phone": None,
        "image": None,
        "created_at": iso_utc(datetime.now(timezone.utc)),
    }
    with get_db() as conn:
        existing = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        user["role"] = "admin" if existing == 0 else "viewer"
        conn.execute(
            """INSERT INTO users (id, name, email, phone, image, role, created_at)
               VALUES (?,?,?,?,?,?,?)""",
            (
                user["id"],
                user["name"],
                user["email"],
                user["phone"],
                user["image"],
                user["role"],
                user["created_at"],
            ),
        )
    return user


def get_user(user_id: str) -> Optional[dict]:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE id = ?", (user_id,)
        ).fetchone()
    return dict(row) if row else None


def get_user_by_email(email: str) -> Optional[dict]:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE LOWER(email) = ?", (email.lower(),)
        ).fetchone()
    return dict(row) if row else None


def get_all_users() -> list[dict]:
    """Newest first."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM users ORDER BY created_at DESC, rowid DESC"
        ).fetchall()
    return [dict(r) for r in rows]


def count_users() -> int:
    with get_db() as conn:
        return conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]


def update_user(user_id: str, fields: dict) -> None:
    if not fields:
        return
    assignments = ", ".join(f"{k} = ?" for k in fields)
    with get_db() as conn:
        conn.execute(
            f"UPDATE users SET {assignments} WHERE id = ?",
            list(fields.values()) + [user_id],
        )
