"""
asyncpg pool shared by the `users` and `messages` repositories.

`main.py` opens the pool in the app lifespan and closes it on shutdown.
Queries are raw SQL with asyncpg's `$n` placeholders; rows come back as
plain dicts so services never see `asyncpg.Record`.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit

import asyncpg

from .config import Settings

# libpq-only query parameters that asyncpg's DSN parser does not accept.
_LIBPQ_ONLY_PARAMS = frozenset({"sslmode"})

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url
    kept = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in _LIBPQ_ONLY_PARAMS
    ]
    return parts._replace(query=urlencode(kept)).geturl()


def database_url(settings: Settings) -> str:
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool(settings: Settings) -> None:
    global _pool
    if _pool is None:
        _pool = await asyncpg.create_pool(
            dsn=database_url(settings),
            min_size=1,
            max_size=5,
            command_timeout=30,
        )


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        pool_, _pool = _pool, None
        await pool_.close()


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("Database pool is not open; it is created in the app lifespan.")
    return _pool


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    First row of `sql` as a dict, or None when nothing matched.
    """
    record = await pool().fetchrow(sql, *args)
    return None if record is None else dict(record)


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    records = await pool().fetch(sql, *args)
    return [dict(record) for record in records]


async def fetch_value(sql: str, *args: Any) -> Any:
    """
    First column of the first row, or None. Used for `RETURNING x` updates
    and existence checks.
    """
    return await pool().fetchval(sql, *args)
