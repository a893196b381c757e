"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.application_store import SQLiteApplicationStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    database_errors,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.notification_store import SQLiteNotificationStore
from src.infrastructure.storage.sqlite.reminder_store import SQLiteReminderStore
from src.infrastructure.storage.sqlite.sync_queue_store import SQLiteSyncQueueStore
from src.infrastructure.storage.sqlite.template_store import SQLiteReminderTemplateStore

# Singleton instances
_reminder_store: SQLiteReminderStore | None = None
_template_store: SQLiteReminderTemplateStore | None = None
_application_store: SQLiteApplicationStore | None = None
_notification_store: SQLiteNotificationStore | None = None
_sync_queue_store: SQLiteSyncQueueStore | None = None


async def get_reminder_store() -> SQLiteReminderStore:
    """Get singleton reminder store instance."""
    global _reminder_store
    if _reminder_store is None:
        _reminder_store = SQLiteReminderStore()
    return _reminder_store


async def get_template_store() -> SQLiteReminderTemplateStore:
    """Get singleton reminder template store instance."""
    global _template_store
    if _template_store is None:
        _template_store = SQLiteReminderTemplateStore()
    return _template_store


async def get_application_store() -> SQLiteApplicationStore:
    """Get singleton application store instance."""
    global _application_store
    if _application_store is None:
        _application_store = SQLiteApplicationStore()
    return _application_store


async def get_notification_store() -> SQLiteNotificationStore:
    """Get singleton notification history store instance."""
    global _notification_store
    if _notification_store is None:
        _notification_store = SQLiteNotificationStore()
    return _notification_store


async def get_sync_queue_store() -> SQLiteSyncQueueStore:
    """Get singleton sync queue store instance."""
    global _sync_queue_store
    if _sync_queue_store is None:
        _sync_queue_store = SQLiteSyncQueueStore()
    return _sync_queue_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "database_errors",
    # Store classes
    "SQLiteReminderStore",
    "SQLiteReminderTemplateStore",
    "SQLiteApplicationStore",
    "SQLiteNotificationStore",
    "SQLiteSyncQueueStore",
    # Factory functions
    "get_reminder_store",
    "get_template_store",
    "get_application_store",
    "get_notification_store",
    "get_sync_queue_store",
]
