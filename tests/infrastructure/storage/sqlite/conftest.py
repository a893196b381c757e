"""Shared fixtures for SQLite storage tests."""

from datetime import date, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.core.entities.reminder import Reminder
from src.infrastructure.storage.sqlite.application_store import SQLiteApplicationStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.notification_store import SQLiteNotificationStore
from src.infrastructure.storage.sqlite.reminder_store import SQLiteReminderStore
from src.infrastructure.storage.sqlite.sync_queue_store import SQLiteSyncQueueStore
from src.infrastructure.storage.sqlite.template_store import SQLiteReminderTemplateStore

NOW = datetime(2024, 1, 10, 12, 0)


@pytest.fixture
def reminder_store(db_pool: ConnectionPool) -> SQLiteReminderStore:
    return SQLiteReminderStore(db_pool)


@pytest.fixture
def template_store(db_pool: ConnectionPool) -> SQLiteReminderTemplateStore:
    return SQLiteReminderTemplateStore(db_pool)


@pytest.fixture
def application_store(db_pool: ConnectionPool) -> SQLiteApplicationStore:
    return SQLiteApplicationStore(db_pool)


@pytest.fixture
def notification_store(db_pool: ConnectionPool) -> SQLiteNotificationStore:
    return SQLiteNotificationStore(db_pool)


@pytest.fixture
def sync_queue_store(db_pool: ConnectionPool) -> SQLiteSyncQueueStore:
    return SQLiteSyncQueueStore(db_pool)


@pytest.fixture
def sample_reminder() -> Reminder:
    """Create a sample reminder for testing."""
    return Reminder(
        title="Send thank-you note",
        description="Email the hiring manager",
        reminder_date=date(2024, 1, 12),
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock
