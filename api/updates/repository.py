"""
Updates feed persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db, sql

_COLUMNS = "id, topic, badge, message, author, created_at"

EDIT_COLUMNS = {
    "topic": "topic",
    "badge": "badge",
    "message": "message",
}


async def list_updates() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {_COLUMNS} FROM updates ORDER BY id DESC")


async def get_update(update_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {_COLUMNS} FROM updates WHERE id = $1", update_id)


async def create_update(*, topic: str, badge: str, message: str, author: str) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO updates (topic, badge, message, author)
        VALUES ($1, $2, $3, $4)
        RETURNING {_COLUMNS}
        """,
        topic,
        badge,
        message,
        author,
    )
    if row is None:
        raise RuntimeError("Failed to create update.")
    return row


async def edit_update(update_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = sql.build_set_clause(fields, EDIT_COLUMNS, start=2)
    if not assignments:
        return await get_update(update_id)
    return await db.fetch_one(
        f"UPDATE updates SET {assignments} WHERE id = $1 RETURNING {_COLUMNS}",
        update_id,
        *args,
    )


async def delete_update(update_id: int) -> bool:
    status = await db.execute("DELETE FROM updates WHERE id = $1", update_id)
    return db.affected_rows(status) > 0
