"""Fixtures for API tests.

The app is served in-process over httpx's ASGI transport with the reminder
service wired to a migrated temporary database.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import (
    get_db_pool,
    get_generate_reminders_use_case,
    get_reminders,
)
from src.api.main import create_app
from src.application.use_cases import GenerateApplicationRemindersUseCase
from src.core.services import ReminderService
from src.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteApplicationStore,
    SQLiteNotificationStore,
    SQLiteReminderStore,
    SQLiteReminderTemplateStore,
    SQLiteSyncQueueStore,
)


@pytest.fixture
def reminder_service(db_pool: ConnectionPool) -> ReminderService:
    return ReminderService(
        reminder_store=SQLiteReminderStore(db_pool),
        template_store=SQLiteReminderTemplateStore(db_pool),
        application_store=SQLiteApplicationStore(db_pool),
        notification_log=SQLiteNotificationStore(db_pool),
        sync_queue=SQLiteSyncQueueStore(db_pool),
    )


@pytest.fixture
async def client(
    reminder_service: ReminderService, db_pool: ConnectionPool
) -> AsyncGenerator[AsyncClient, None]:
    """Async client with the service and pool overridden."""
    app = create_app()
    app.dependency_overrides[get_reminders] = lambda: reminder_service
    app.dependency_overrides[get_generate_reminders_use_case] = (
        lambda: GenerateApplicationRemindersUseCase(reminder_service)
    )
    app.dependency_overrides[get_db_pool] = lambda: db_pool

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
