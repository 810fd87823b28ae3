"""
Info card persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db, sql

_COLUMNS = "id, category_id, title, display_type, icon, image, link, created_at"

EDIT_COLUMNS = {
    "category_id": "category_id",
    "title": "title",
    "display_type": "display_type",
    "icon": "icon",
    "image": "image",
    "link": "link",
}


async def list_cards(*, category_id: int | None = None) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_COLUMNS}
        FROM info_cards
        WHERE ($1::bigint IS NULL OR category_id = $1)
        ORDER BY id
        """,
        category_id,
    )


async def get_card(card_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {_COLUMNS} FROM info_cards WHERE id = $1", card_id)


async def create_card(
    *,
    category_id: int,
    title: str,
    display_type: str,
    icon: str | None,
    image: str | None,
    link: str,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO info_cards (category_id, title, display_type, icon, image, link)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING {_COLUMNS}
        """,
        category_id,
        title,
        display_type,
        icon,
        image,
        link,
    )
    if row is None:
        raise RuntimeError("Failed to create info card.")
    return row


async def edit_card(card_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = sql.build_set_clause(fields, EDIT_COLUMNS, start=2)
    if not assignments:
        return await get_card(card_id)
    return await db.fetch_one(
        f"UPDATE info_cards SET {assignments} WHERE id = $1 RETURNING {_COLUMNS}",
        card_id,
        *args,
    )


async def delete_card(card_id: int) -> bool:
    status = await db.execute("DELETE FROM info_cards WHERE id = $1", card_id)
    return db.affected_rows(status) > 0
