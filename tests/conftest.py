"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import date
from pathlib import Path

import pytest

from src.application.services import reset_services
from src.config import reset_settings
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Drop cached settings and services between tests."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> Path:
    """Database file with every migration applied."""
    await initialize_database(temp_db_path, create_backup_before=False)
    return temp_db_path


@pytest.fixture
async def db_pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Single-connection pool over the migrated database."""
    pool = ConnectionPool(migrated_db, pool_size=1)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def make_application(db_pool: ConnectionPool) -> Callable[..., Awaitable[int]]:
    """Insert a company plus application and return the application ID."""

    async def _make(
        position: str = "Backend Engineer",
        company: str | None = "Acme",
        status: str = "applied",
        application_date: date | None = None,
        deadline: date | None = None,
        location: str | None = "Berlin",
    ) -> int:
        async with db_pool.transaction() as conn:
            company_id = None
            if company is not None:
                cursor = await conn.execute(
                    "INSERT INTO companies (name) VALUES (?)", (company,)
                )
                company_id = cursor.lastrowid
            cursor = await conn.execute(
                """
                INSERT INTO applications (
                    company_id, title, position, location, status,
                    application_date, deadline
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    company_id,
                    position,
                    position,
                    location,
                    status,
                    application_date.isoformat() if application_date else None,
                    deadline.isoformat() if deadline else None,
                ),
            )
            return cursor.lastrowid

    return _make
