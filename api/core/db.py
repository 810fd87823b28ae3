"""
PostgreSQL access for every repository module (asyncpg, raw SQL).

The pool is process-wide: `main.lifespan` opens it, applies `schema.sql`
when DB_APPLY_SCHEMA is on, and closes it on shutdown. Rows come back as
plain dicts. Statements use asyncpg placeholders ($1, $2, ...).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import config

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = config.env_str("DATABASE_URL", "")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=config.env_int("DB_POOL_MIN", 1),
        max_size=config.env_int("DB_POOL_MAX", 5),
        command_timeout=30,
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("Database pool is not open; init_pool() runs in the app lifespan.")
    return _pool


async def apply_schema() -> None:
    """
    Create missing tables. The schema file only uses IF NOT EXISTS statements.
    """
    await pool().execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    logger.info("schema_applied path=%s", SCHEMA_PATH.name)


@asynccontextmanager
async def transaction() -> AsyncIterator[asyncpg.Connection]:
    """
    Acquire a connection and run the block inside one transaction.
    """
    async with pool().acquire() as conn:  # type: asyncpg.Connection
        async with conn.transaction():
            yield conn


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return asyncpg's status tag.
    """
    return await pool().execute(sql, *args)


def affected_rows(status: str) -> int:
    """
    Parse the row count out of a status tag like "DELETE 3".
    """
    try:
        return int((status or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0
