"""
Read-only Postgres access through one shared asyncpg pool.

The pool lives for the whole process: `main.lifespan` opens it and closes it.
Repositories never touch the pool directly; they call the `fetch_*` helpers
with raw SQL and asyncpg's positional placeholders ($1, $2, ...), and get
plain dicts back.

Listings run their count and page queries side by side through
`gather_queries`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import config

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None

# libpq connection options asyncpg does not understand.
_LIBPQ_ONLY_PARAMS = frozenset({"sslmode"})


def _strip_libpq_params(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url
    kept = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in _LIBPQ_ONLY_PARAMS
    ]
    return urlunsplit(parts._replace(query=urlencode(kept)))


def database_url() -> str:
    url = config.env_str("DATABASE_URL", "")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _strip_libpq_params(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return
    min_size, max_size = config.db_pool_min_size(), config.db_pool_max_size()
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=min_size,
        max_size=max_size,
        command_timeout=config.db_command_timeout_s(),
    )
    logger.info("Database pool ready (min_size=%d, max_size=%d)", min_size, max_size)


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return
    pool_, _pool = _pool, None
    await pool_.close()
    logger.info("Database pool closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    return [dict(row) for row in await pool().fetch(sql, *args)]


async def fetch_value(sql: str, *args: Any) -> Any:
    """
    First column of the first row (None when there is no row). Used for counts.
    """
    return await pool().fetchval(sql, *args)


async def gather_queries(*queries: Awaitable[Any]) -> list[Any]:
    """
    Await `queries` concurrently and return their results in order.

    Every query runs to completion, so each failure is retrieved. The first
    failure (in argument order) is re-raised.
    """
    results = await asyncio.gather(*queries, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
