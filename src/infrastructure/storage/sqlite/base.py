"""
Shared plumbing for the SQLite stores.

Stores use an injected pool when given one and the global pool otherwise.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime, time

import aiosqlite

from src.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool


def format_timestamp(value: datetime | None) -> str | None:
    """Fixed-width local ISO text, so string order equals time order."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.isoformat(timespec="microseconds")


def format_date(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def format_time(value: time | None) -> str | None:
    return value.isoformat(timespec="seconds") if value is not None else None


class SQLiteStore:
    """Base class giving stores pooled connections and transactions."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    async def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            return await get_pool()
        return self._pool

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        pool = await self._get_pool()
        async with pool.transaction() as conn:
            yield conn
