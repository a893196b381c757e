"""Tests for the SQLite connection pool."""

from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

from src.core.exceptions import DatabaseError
from src.infrastructure.storage.sqlite import connection as conn_module
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    database_errors,
    get_connection,
    get_pool,
)


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_stores_settings(self, temp_db_path: Path):
        """Pool stores database path and sizing."""
        pool = ConnectionPool(temp_db_path, pool_size=3, busy_timeout=1000)
        assert pool.db_path == temp_db_path
        assert pool.pool_size == 3
        assert pool.busy_timeout == 1000
        assert not pool.is_initialized

    async def test_initialize_creates_database(self, tmp_path: Path):
        """Initialization creates missing directories and the file."""
        db_path = tmp_path / "nested" / "dir" / "app.db"
        pool = ConnectionPool(db_path, pool_size=1)
        try:
            await pool.initialize()
            assert pool.is_initialized
            assert db_path.exists()
        finally:
            await pool.close()

    async def test_initialize_twice_is_noop(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2)
        try:
            await pool.initialize()
            await pool.initialize()
            assert len(pool._connections) == 2
        finally:
            await pool.close()


class TestConnectionPoolUsage:
    """Tests for acquiring connections and transactions."""

    async def test_acquire_initializes_lazily(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT 1 AS one")
                row = await cursor.fetchone()
                assert row["one"] == 1
            assert pool.is_initialized
        finally:
            await pool.close()

    async def test_foreign_keys_enabled(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute("PRAGMA foreign_keys")
                row = await cursor.fetchone()
                assert row[0] == 1
        finally:
            await pool.close()

    async def test_transaction_commits(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.transaction() as conn:
                await conn.execute("CREATE TABLE t (v INTEGER)")
                await conn.execute("INSERT INTO t VALUES (1)")
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM t")
                assert (await cursor.fetchone())[0] == 1
        finally:
            await pool.close()

    async def test_transaction_rolls_back_on_error(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.transaction() as conn:
                await conn.execute("CREATE TABLE t (v INTEGER)")

            with pytest.raises(RuntimeError):
                async with pool.transaction() as conn:
                    await conn.execute("INSERT INTO t VALUES (1)")
                    raise RuntimeError("abort")

            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM t")
                assert (await cursor.fetchone())[0] == 0
        finally:
            await pool.close()

    async def test_check_health(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            assert await pool.check_health() is True
        finally:
            await pool.close()

    async def test_close_resets_pool(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        await pool.initialize()
        await pool.close()
        assert not pool.is_initialized

        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        await pool.close()


class TestDatabaseErrors:
    async def test_driver_error_translated(self):
        with pytest.raises(DatabaseError) as exc_info:
            async with database_errors("reminder_get"):
                raise aiosqlite.OperationalError("no such table: reminders")

        assert exc_info.value.details == {
            "operation": "reminder_get",
            "error": "no such table: reminders",
        }

    async def test_other_errors_pass_through(self):
        with pytest.raises(KeyError):
            async with database_errors("reminder_get"):
                raise KeyError("id")


@pytest.fixture
async def close_global_pool():
    yield
    await close_pool()


@pytest.mark.usefixtures("close_global_pool")
class TestGlobalPool:
    """Tests for the module-level pool helpers."""

    async def test_get_pool_creates_pool(self, mock_settings):
        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            pool = await get_pool()

        assert pool.db_path == mock_settings.storage.db_path
        assert pool.pool_size == 2
        assert pool.is_initialized

    async def test_get_pool_returns_same_instance(self, mock_settings):
        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            first = await get_pool()
            second = await get_pool()

        assert first is second

    async def test_close_pool_clears_global(self, mock_settings):
        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            pool = await get_pool()
            await close_pool()

        assert conn_module._pool is None
        assert not pool.is_initialized

    async def test_get_connection(self, mock_settings):
        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT 1")
                assert (await cursor.fetchone())[0] == 1
