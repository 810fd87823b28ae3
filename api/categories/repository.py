"""
Category persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db, sql

_COLUMNS = "id, name, icon, created_at"

EDIT_COLUMNS = {
    "name": "name",
    "icon": "icon",
}


async def list_categories() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {_COLUMNS} FROM categories ORDER BY id")


async def get_category(category_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {_COLUMNS} FROM categories WHERE id = $1", category_id)


async def get_category_by_name(name: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_COLUMNS}
        FROM categories
        WHERE lower(name) = lower($1)
        ORDER BY id
        LIMIT 1
        """,
        (name or "").strip(),
    )


async def create_category(*, name: str, icon: str) -> dict[str, Any]:
    row = await db.fetch_one(
        f"INSERT INTO categories (name, icon) VALUES ($1, $2) RETURNING {_COLUMNS}",
        name,
        icon,
    )
    if row is None:
        raise RuntimeError("Failed to create category.")
    return row


async def edit_category(category_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = sql.build_set_clause(fields, EDIT_COLUMNS, start=2)
    if not assignments:
        return await get_category(category_id)
    return await db.fetch_one(
        f"UPDATE categories SET {assignments} WHERE id = $1 RETURNING {_COLUMNS}",
        category_id,
        *args,
    )


async def delete_category_cascade(category_id: int) -> tuple[bool, int]:
    """
    Delete a category and its info cards in one transaction.

    Returns (category_deleted, cards_deleted).
    """
    async with db.transaction() as conn:
        cards_status = await conn.execute("DELETE FROM info_cards WHERE category_id = $1", category_id)
        category_status = await conn.execute("DELETE FROM categories WHERE id = $1", category_id)
    return db.affected_rows(category_status) > 0, db.affected_rows(cards_status)
