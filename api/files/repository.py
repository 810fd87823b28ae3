"""
File browser persistence (raw SQL): `folders` and `learning_items`.
"""

from __future__ import annotations

from typing import Any

from core import db, sql

_FOLDER_COLUMNS = "id, name, parent_id, created_at"
_ITEM_COLUMNS = "id, name, type, link, content, folder_id, marked, created_at"

FOLDER_EDIT_COLUMNS = {
    "name": "name",
    "parent_id": "parent_id",
}

ITEM_EDIT_COLUMNS = {
    "name": "name",
    "type": "type",
    "link": "link",
    "content": "content",
    "folder_id": "folder_id",
}


# --- folders -----------------------------------------------------------------


async def list_folders() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {_FOLDER_COLUMNS} FROM folders ORDER BY lower(name), id")


async def get_folder(folder_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {_FOLDER_COLUMNS} FROM folders WHERE id = $1", folder_id)


async def create_folder(*, name: str, parent_id: int | None) -> dict[str, Any]:
    row = await db.fetch_one(
        f"INSERT INTO folders (name, parent_id) VALUES ($1, $2) RETURNING {_FOLDER_COLUMNS}",
        name,
        parent_id,
    )
    if row is None:
        raise RuntimeError("Failed to create folder.")
    return row


async def edit_folder(folder_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = sql.build_set_clause(fields, FOLDER_EDIT_COLUMNS, start=2)
    if not assignments:
        return await get_folder(folder_id)
    return await db.fetch_one(
        f"UPDATE folders SET {assignments} WHERE id = $1 RETURNING {_FOLDER_COLUMNS}",
        folder_id,
        *args,
    )


async def delete_folders(folder_ids: list[int]) -> tuple[int, int]:
    """
    Delete the given folders and every item inside them in one transaction.

    Items go first, then all folders in a single statement so parent/child
    references inside the set are released together.

    Returns (folders_deleted, items_deleted).
    """
    if not folder_ids:
        return 0, 0

    async with db.transaction() as conn:
        items_status = await conn.execute(
            "DELETE FROM learning_items WHERE folder_id = ANY($1::bigint[])",
            folder_ids,
        )
        folders_status = await conn.execute(
            "DELETE FROM folders WHERE id = ANY($1::bigint[])",
            folder_ids,
        )
    return db.affected_rows(folders_status), db.affected_rows(items_status)


# --- learning items ----------------------------------------------------------


async def list_items(*, folder_id: int | None) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_ITEM_COLUMNS}
        FROM learning_items
        WHERE folder_id IS NOT DISTINCT FROM $1::bigint
        ORDER BY lower(name), id
        """,
        folder_id,
    )


async def list_all_items() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {_ITEM_COLUMNS} FROM learning_items ORDER BY lower(name), id")


async def count_items_in_folders(folder_ids: list[int]) -> int:
    if not folder_ids:
        return 0
    row = await db.fetch_one(
        "SELECT count(*) AS n FROM learning_items WHERE folder_id = ANY($1::bigint[])",
        folder_ids,
    )
    return int((row or {}).get("n", 0))


async def get_item(item_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {_ITEM_COLUMNS} FROM learning_items WHERE id = $1", item_id)


async def create_item(
    *,
    name: str,
    item_type: str,
    link: str | None,
    content: str | None,
    folder_id: int | None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO learning_items (name, type, link, content, folder_id)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {_ITEM_COLUMNS}
        """,
        name,
        item_type,
        link,
        content,
        folder_id,
    )
    if row is None:
        raise RuntimeError("Failed to create learning item.")
    return row


async def edit_item(item_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = sql.build_set_clause(fields, ITEM_EDIT_COLUMNS, start=2)
    if not assignments:
        return await get_item(item_id)
    return await db.fetch_one(
        f"UPDATE learning_items SET {assignments} WHERE id = $1 RETURNING {_ITEM_COLUMNS}",
        item_id,
        *args,
    )


async def toggle_item_marked(item_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE learning_items
        SET marked = NOT marked
        WHERE id = $1
        RETURNING {_ITEM_COLUMNS}
        """,
        item_id,
    )


async def delete_item(item_id: int) -> bool:
    status = await db.execute("DELETE FROM learning_items WHERE id = $1", item_id)
    return db.affected_rows(status) > 0
