"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `equity_coffee/main.py`).

Every statement goes through `query()`, which records SQL text, duration and
row count (silenced when APP_ENV=test).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
import re
import time
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import config
from .errors import DatabaseNotReady

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class QueryResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def acquire_timeout() -> float:
    return config.env_float("DB_ACQUIRE_TIMEOUT_S", 5.0)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=config.env_int("DB_POOL_MIN_SIZE", 1),
        max_size=config.env_int("DB_POOL_MAX_SIZE", 10),
        max_inactive_connection_lifetime=config.env_float("DB_IDLE_TIMEOUT_S", 30.0),
        command_timeout=config.env_float("DB_COMMAND_TIMEOUT_S", 30.0),
        timeout=config.env_float("DB_CONNECT_TIMEOUT_S", 5.0),
        # TLS without certificate verification in production.
        ssl="require" if config.is_production() else None,
    )
    logger.info("db_pool_ready max_size=%s", _pool.get_max_size())


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    logger.info("db_pool_closing")
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise DatabaseNotReady("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def _row_count_from_status(status_text: str) -> int:
    # asyncpg returns the command tag, e.g. "UPDATE 3" or "INSERT 0 1".
    last = (status_text or "").rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


def _log_query(sql: str, started: float, row_count: int) -> None:
    if config.is_test():
        return None
    logger.info(
        "db_query duration_ms=%.1f rows=%s sql=%s",
        (time.perf_counter() - started) * 1000,
        row_count,
        _WHITESPACE.sub(" ", sql).strip(),
    )


async def query(sql: str, *args: Any, returns_rows: bool = True) -> QueryResult:
    """
    Run a statement and return its rows plus the row count.

    With `returns_rows=False` the statement runs through `conn.execute` and the
    affected row count comes from the command tag. Both paths go through
    asyncpg's per-connection statement cache.
    """
    started = time.perf_counter()
    async with pool().acquire(timeout=acquire_timeout()) as conn:
        if returns_rows:
            records = await conn.fetch(sql, *args)
            rows = [_record_to_dict(r) for r in records]
            row_count = len(rows)
        else:
            rows = []
            row_count = _row_count_from_status(await conn.execute(sql, *args))
    _log_query(sql, started, row_count)
    return QueryResult(rows=rows, row_count=row_count)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    result = await query(sql, *args)
    return result.rows[0] if result.rows else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    result = await query(sql, *args)
    return result.rows


async def execute(sql: str, *args: Any) -> int:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the affected row count.
    """
    result = await query(sql, *args, returns_rows=False)
    return result.row_count
