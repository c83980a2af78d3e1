"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Any, Iterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from core import config

_pool: asyncpg.Pool | None = None


# Store failures are explicit and separable from other runtime errors.
class StoreError(RuntimeError):
    pass


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = config.database_url()
    if not url:
        raise StoreError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    # min_size=0: no connection is opened here, so an unreachable database
    # does not block startup.
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=0,
        max_size=config.pool_max_size(),
        command_timeout=config.command_timeout(),
        ssl=config.database_ssl(),
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    pool_, _pool = _pool, None
    await pool_.close()


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise StoreError("DB pool is not initialized.")
    return _pool


@contextmanager
def translate_errors() -> Iterator[None]:
    """
    Re-raise driver/connectivity failures as StoreError.
    """
    try:
        yield
    except StoreError:
        raise
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
        raise StoreError(str(exc) or exc.__class__.__name__) from exc


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any, db_pool: asyncpg.Pool | None = None) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    with translate_errors():
        row = await (db_pool or pool()).fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any, db_pool: asyncpg.Pool | None = None) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    with translate_errors():
        rows = await (db_pool or pool()).fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def fetch_value(sql: str, *args: Any, db_pool: asyncpg.Pool | None = None) -> Any:
    """
    Run a query and return the first column of the first row.
    """
    with translate_errors():
        return await (db_pool or pool()).fetchval(sql, *args)


async def ping(db_pool: asyncpg.Pool | None = None) -> None:
    """
    Check out one connection and hand it straight back.
    """
    with translate_errors():
        async with (db_pool or pool()).acquire():
            pass
