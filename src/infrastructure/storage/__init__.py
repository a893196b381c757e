"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteApplicationStore,
    SQLiteNotificationStore,
    SQLiteReminderStore,
    SQLiteReminderTemplateStore,
    SQLiteSyncQueueStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteReminderStore",
    "SQLiteReminderTemplateStore",
    "SQLiteApplicationStore",
    "SQLiteNotificationStore",
    "SQLiteSyncQueueStore",
    # Connection pool
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
