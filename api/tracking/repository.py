"""
Tracking persistence (raw SQL, read-only).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db

TABLE = "tracking_orders"


class TrackingStore:
    """
    Read path over `tracking_orders`.

    `db_pool` defaults to the process-wide pool from `core.db`, resolved per
    call so a store built before startup (or after a failed startup) fails
    with StoreError on use rather than on construction.
    """

    def __init__(self, db_pool: asyncpg.Pool | None = None) -> None:
        self._db_pool = db_pool

    def _pool(self) -> asyncpg.Pool:
        return self._db_pool or db.pool()

    async def find_by_tracking_number(self, tracking_number: str) -> dict[str, Any] | None:
        # No ORDER BY: duplicates resolve to whichever row Postgres returns first.
        return await db.fetch_one(
            f"""
            SELECT *
            FROM {TABLE}
            WHERE tracking_number = $1
            LIMIT 1
            """,
            tracking_number,
            db_pool=self._pool(),
        )

    async def list_all(self) -> list[dict[str, Any]]:
        return await db.fetch_all(f"SELECT * FROM {TABLE}", db_pool=self._pool())

    async def count(self) -> int:
        value = await db.fetch_value(f"SELECT COUNT(*) FROM {TABLE}", db_pool=self._pool())
        return int(value or 0)

    async def ping(self) -> None:
        await db.ping(db_pool=self._pool())
