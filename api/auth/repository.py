"""
Auth persistence helpers.
"""

from __future__ import annotations

from core import db


def normalize_username(username: str) -> str:
    return (username or "").strip()


async def get_user_by_username(username: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, password_hash, display_name, role, created_at
        FROM users
        WHERE username = $1
        """,
        normalize_username(username),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, username, password_hash, display_name, role, created_at
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
