"""
SQLite notification history.

Rows are only ever appended; nothing here touches the reminder itself.
"""

import aiosqlite

from src.config import get_logger
from src.core.entities.notification import NotificationRecord
from src.core.interfaces.storage import INotificationLog
from src.infrastructure.storage.sqlite.base import SQLiteStore, format_timestamp
from src.infrastructure.storage.sqlite.connection import database_errors

logger = get_logger(__name__)


class SQLiteNotificationStore(SQLiteStore, INotificationLog):
    """Append-only notification history backed by notification_history."""

    async def append(self, record: NotificationRecord) -> NotificationRecord:
        async with database_errors("notification_append"), self._transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO notification_history (
                    reminder_id, notification_type, status,
                    recipient, error_message, sent_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    record.reminder_id,
                    record.channel.value,
                    record.status.value,
                    record.recipient,
                    record.error_message,
                    format_timestamp(record.sent_at),
                ),
            )
            saved = record.model_copy(update={"id": cursor.lastrowid})
        logger.debug("notification_row_inserted", notification_id=saved.id)
        return saved

    async def list_for_reminder(self, reminder_id: int) -> list[NotificationRecord]:
        """History for a reminder, newest first."""
        async with database_errors("notification_list"), self._connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM notification_history
                WHERE reminder_id = ?
                ORDER BY sent_at DESC, id DESC
                """,
                (reminder_id,),
            )
            rows = await cursor.fetchall()
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> NotificationRecord:
        return NotificationRecord(
            id=row["id"],
            reminder_id=row["reminder_id"],
            channel=row["notification_type"],
            status=row["status"],
            recipient=row["recipient"],
            error_message=row["error_message"],
            sent_at=row["sent_at"],
        )
