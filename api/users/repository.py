"""
User persistence (raw SQL). Password hashes never leave this module
except through `auth.repository`.
"""

from __future__ import annotations

from typing import Any

from core import db, sql

_PUBLIC_COLUMNS = "id, username, display_name, role, created_at"

UPDATE_COLUMNS = {
    "username": "username",
    "password_hash": "password_hash",
    "display_name": "display_name",
    "role": "role",
}


async def list_users() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {_PUBLIC_COLUMNS} FROM users ORDER BY id")


async def get_user(user_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT {_PUBLIC_COLUMNS} FROM users WHERE id = $1", user_id)


async def username_exists(username: str, *, exclude_id: int | None = None) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM users
        WHERE username = $1
          AND ($2::bigint IS NULL OR id <> $2)
        LIMIT 1
        """,
        username,
        exclude_id,
    )
    return row is not None


async def create_user(*, username: str, password_hash: str, display_name: str, role: str) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO users (username, password_hash, display_name, role)
        VALUES ($1, $2, $3, $4)
        RETURNING {_PUBLIC_COLUMNS}
        """,
        username,
        password_hash,
        display_name,
        role,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def update_user(user_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    assignments, args = sql.build_set_clause(fields, UPDATE_COLUMNS, start=2)
    if not assignments:
        return await get_user(user_id)
    return await db.fetch_one(
        f"UPDATE users SET {assignments} WHERE id = $1 RETURNING {_PUBLIC_COLUMNS}",
        user_id,
        *args,
    )


async def delete_user(user_id: int) -> bool:
    status = await db.execute("DELETE FROM users WHERE id = $1", user_id)
    return db.affected_rows(status) > 0
