"""
SQLite implementation of reminder storage.

Handles CRUD and the filtered list queries for reminders. The ``overdue``
filter is evaluated in SQL with the same rule as ``Reminder.is_overdue``:
timestamps are stored as fixed-width ISO text so string comparison is
chronological.
"""

from datetime import datetime
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.recurrence import RecurrencePattern, RecurrencePatternError
from src.core.entities.reminder import Reminder, ReminderFilter
from src.core.interfaces.storage import IReminderStore
from src.infrastructure.storage.sqlite.base import (
    SQLiteStore,
    format_date,
    format_time,
    format_timestamp,
)
from src.infrastructure.storage.sqlite.connection import database_errors

logger = get_logger(__name__)

_COLUMNS = (
    "application_id",
    "title",
    "description",
    "reminder_date",
    "reminder_time",
    "reminder_type",
    "priority",
    "is_completed",
    "completed_at",
    "completion_note",
    "is_active",
    "deleted_at",
    "email_notification_enabled",
    "notification_time",
    "recurrence_pattern",
    "parent_reminder_id",
    "auto_generated",
    "snooze_until",
    "sync_status",
    "sync_version",
    "created_at",
    "updated_at",
)

_ORDER_BY = "ORDER BY reminder_date ASC, reminder_time ASC, id ASC"

# A reminder is snoozed while snooze_until lies strictly after now.
_NOT_SNOOZED = "(snooze_until IS NULL OR snooze_until <= ?)"

# Timed reminders compare date+time against now; all-day ones compare dates.
_OVERDUE = (
    "(is_completed = 0 AND " + _NOT_SNOOZED + " AND ("
    "(reminder_time IS NOT NULL"
    " AND reminder_date || 'T' || reminder_time || '.000000' < ?)"
    " OR (reminder_time IS NULL AND reminder_date < ?)))"
)


class SQLiteReminderStore(SQLiteStore, IReminderStore):
    """SQLite implementation of reminder storage."""

    async def create(self, reminder: Reminder) -> Reminder:
        """Insert a new reminder."""
        placeholders = ", ".join("?" for _ in _COLUMNS)
        async with database_errors("reminder_create"), self._transaction() as conn:
            cursor = await conn.execute(
                f"INSERT INTO reminders ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                self._to_params(reminder),
            )
            created = reminder.model_copy(update={"id": cursor.lastrowid})
        logger.debug("reminder_inserted", reminder_id=created.id)
        return created

    async def get(self, reminder_id: int) -> Reminder | None:
        """Get reminder by ID."""
        async with database_errors("reminder_get"), self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM reminders WHERE id = ?", (reminder_id,)
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_entity(row)

    async def update(self, reminder: Reminder) -> Reminder:
        """Update every column of an existing reminder."""
        assignments = ", ".join(f"{column} = ?" for column in _COLUMNS)
        async with database_errors("reminder_update"), self._transaction() as conn:
            await conn.execute(
                f"UPDATE reminders SET {assignments} WHERE id = ?",
                (*self._to_params(reminder), reminder.id),
            )
        logger.debug("reminder_row_updated", reminder_id=reminder.id)
        return reminder

    async def delete(self, reminder_id: int) -> bool:
        """Physically delete a reminder by ID."""
        async with database_errors("reminder_delete"), self._transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM reminders WHERE id = ?", (reminder_id,)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.debug("reminder_row_deleted", reminder_id=reminder_id)
        return deleted

    async def list_reminders(
        self,
        filters: ReminderFilter | None = None,
        now: datetime | None = None,
    ) -> list[Reminder]:
        """List reminders matching the filter, soft-deleted ones excluded by default."""
        filters = filters or ReminderFilter()
        now = now or datetime.now()
        where, params = self._build_where(filters, now)

        sql = f"SELECT * FROM reminders {where} {_ORDER_BY}"
        if filters.limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params.extend([filters.limit, filters.offset])
        elif filters.offset:
            sql += " LIMIT -1 OFFSET ?"
            params.append(filters.offset)

        async with database_errors("reminder_list"), self._connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
        return [self._row_to_entity(row) for row in rows]

    async def list_notification_candidates(self) -> list[Reminder]:
        """Active, open, undeleted reminders with email notifications on."""
        async with database_errors("reminder_notification_candidates"), self._connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM reminders
                WHERE is_active = 1
                  AND is_completed = 0
                  AND deleted_at IS NULL
                  AND email_notification_enabled = 1
                {_ORDER_BY}
                """
            )
            rows = await cursor.fetchall()
        return [self._row_to_entity(row) for row in rows]

    async def find_open_by_application(self, application_id: int) -> list[Reminder]:
        """Open, undeleted reminders linked to an application."""
        async with database_errors("reminder_find_by_application"), self._connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM reminders
                WHERE application_id = ?
                  AND is_completed = 0
                  AND deleted_at IS NULL
                {_ORDER_BY}
                """,
                (application_id,),
            )
            rows = await cursor.fetchall()
        return [self._row_to_entity(row) for row in rows]

    @staticmethod
    def _build_where(filters: ReminderFilter, now: datetime) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []
        now_text = format_timestamp(now)

        if not filters.include_deleted:
            clauses.append("deleted_at IS NULL")
        if filters.application_id is not None:
            clauses.append("application_id = ?")
            params.append(filters.application_id)
        if filters.completed is not None:
            clauses.append("is_completed = ?")
            params.append(1 if filters.completed else 0)
        if filters.priority is not None:
            clauses.append("priority = ?")
            params.append(filters.priority.value)
        if filters.reminder_type is not None:
            clauses.append("reminder_type = ?")
            params.append(filters.reminder_type.value)
        if filters.date_from is not None:
            clauses.append("reminder_date >= ?")
            params.append(format_date(filters.date_from))
        if filters.date_to is not None:
            clauses.append("reminder_date <= ?")
            params.append(format_date(filters.date_to))
        if filters.overdue:
            clauses.append(_OVERDUE)
            params.extend([now_text, now_text, format_date(now.date())])
        if filters.exclude_snoozed:
            clauses.append(_NOT_SNOOZED)
            params.append(now_text)

        if not clauses:
            return "", params
        return "WHERE " + " AND ".join(clauses), params

    @staticmethod
    def _to_params(reminder: Reminder) -> tuple[Any, ...]:
        return (
            reminder.application_id,
            reminder.title,
            reminder.description,
            format_date(reminder.reminder_date),
            format_time(reminder.reminder_time),
            reminder.reminder_type.value,
            reminder.priority.value,
            1 if reminder.is_completed else 0,
            format_timestamp(reminder.completed_at),
            reminder.completion_note,
            1 if reminder.is_active else 0,
            format_timestamp(reminder.deleted_at),
            1 if reminder.email_notification_enabled else 0,
            reminder.notification_time,
            reminder.recurrence_pattern.to_json() if reminder.recurrence_pattern else None,
            reminder.parent_reminder_id,
            1 if reminder.auto_generated else 0,
            format_timestamp(reminder.snooze_until),
            reminder.sync_status.value,
            reminder.sync_version,
            format_timestamp(reminder.created_at),
            format_timestamp(reminder.updated_at),
        )

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Reminder:
        """Convert a database row to a Reminder entity."""
        data = dict(row)

        raw_pattern = data.get("recurrence_pattern")
        if raw_pattern:
            try:
                data["recurrence_pattern"] = RecurrencePattern.parse(raw_pattern)
            except RecurrencePatternError:
                logger.warning(
                    "stored_recurrence_pattern_invalid",
                    reminder_id=data["id"],
                    pattern=raw_pattern,
                )
                data["recurrence_pattern"] = None

        return Reminder.model_validate(data)
