"""
Publisher persistence (raw SQL over an injected asyncpg pool).

Every call is bounded by `timeout_s`, covering both the wait for a pooled
connection and the query; the operation is cancelled when it elapses.
Store failures are re-raised as `AppError(kind=STORE)` and absence as
`AppError(kind=NOT_FOUND)`. Nothing here retries.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg

from publisher_api.core import errors

from .schemas import Publisher

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Publisher not found."

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS publishers (
    id BIGSERIAL PRIMARY KEY,
    name VARCHAR(48) NOT NULL,
    city VARCHAR(32) NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError)


def _to_entity(row: Any) -> Publisher:
    return Publisher(id=int(row["id"]), name=str(row["name"]), city=str(row["city"]))


class PublisherRepository:
    def __init__(self, pool: asyncpg.Pool, *, timeout_s: float) -> None:
        self._pool = pool
        self._timeout_s = timeout_s

    async def _run(self, op: str, method: str, sql: str, *args: Any) -> Any:
        # One deadline covers waiting for a pooled connection and the query itself.
        async def call() -> Any:
            async with self._pool.acquire(timeout=self._timeout_s) as con:
                return await getattr(con, method)(sql, *args, timeout=self._timeout_s)

        try:
            return await asyncio.wait_for(call(), timeout=self._timeout_s)
        except _STORE_ERRORS as exc:
            logger.exception("publisher_store_failed op=%s", op)
            raise errors.store() from exc

    async def _fetch_one(self, op: str, sql: str, *args: Any) -> Any:
        return await self._run(op, "fetchrow", sql, *args)

    async def ensure_schema(self) -> None:
        await self._run("ensure_schema", "execute", SCHEMA_SQL)

    async def create(self, item: Publisher) -> Publisher:
        row = await self._fetch_one(
            "create",
            """
            INSERT INTO publishers (name, city)
            VALUES ($1, $2)
            RETURNING id, name, city
            """,
            item.name,
            item.city,
        )
        if row is None:
            raise errors.store("Failed to create publisher.")
        return _to_entity(row)

    async def get_by_id(self, publisher_id: int) -> Publisher:
        row = await self._fetch_one(
            "get_by_id",
            """
            SELECT id, name, city
            FROM publishers
            WHERE id = $1
            """,
            publisher_id,
        )
        if row is None:
            raise errors.not_found(NOT_FOUND_MESSAGE)
        return _to_entity(row)

    async def get_list(self) -> list[Publisher]:
        rows = await self._run(
            "get_list",
            "fetch",
            """
            SELECT id, name, city
            FROM publishers
            ORDER BY id
            """,
        )
        return [_to_entity(r) for r in rows]

    async def update(self, item: Publisher) -> Publisher:
        row = await self._fetch_one(
            "update",
            """
            UPDATE publishers
            SET name = $2,
                city = $3,
                updated_at = now()
            WHERE id = $1
            RETURNING id, name, city
            """,
            item.id,
            item.name,
            item.city,
        )
        if row is None:
            # Deleted between the caller's read and this write.
            raise errors.not_found(NOT_FOUND_MESSAGE)
        return _to_entity(row)

    async def delete(self, publisher_id: int) -> None:
        row = await self._fetch_one(
            "delete",
            """
            DELETE FROM publishers
            WHERE id = $1
            RETURNING id
            """,
            publisher_id,
        )
        if row is None:
            raise errors.not_found(NOT_FOUND_MESSAGE)
