"""
SQLite-based reminder template store.

System templates are seeded by the initial migration; user templates are
created through the API. Deletion is soft.
"""

from datetime import datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.template import ReminderTemplate
from src.core.interfaces.storage import IReminderTemplateStore
from src.infrastructure.storage.sqlite.base import SQLiteStore, format_timestamp
from src.infrastructure.storage.sqlite.connection import database_errors

logger = get_logger(__name__)


class SQLiteReminderTemplateStore(SQLiteStore, IReminderTemplateStore):
    """SQLite storage for reminder templates."""

    async def list_templates(self, system_only: bool = False) -> list[ReminderTemplate]:
        """List live templates ordered by name."""
        sql = "SELECT * FROM reminder_templates WHERE deleted_at IS NULL"
        if system_only:
            sql += " AND is_system_template = 1"
        sql += " ORDER BY name ASC, id ASC"

        async with database_errors("template_list"), self._connection() as conn:
            cursor = await conn.execute(sql)
            rows = await cursor.fetchall()
        return [self._row_to_template(row) for row in rows]

    async def get(self, template_id: int) -> ReminderTemplate | None:
        """Get a live template by ID."""
        async with database_errors("template_get"), self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM reminder_templates WHERE id = ? AND deleted_at IS NULL",
                (template_id,),
            )
            row = await cursor.fetchone()
        return self._row_to_template(row) if row else None

    async def create(self, template: ReminderTemplate) -> ReminderTemplate:
        """Insert a template."""
        async with database_errors("template_create"), self._transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO reminder_templates (
                    name, title_template, description_template, reminder_type,
                    default_notification_time, default_priority,
                    trigger_conditions, is_system_template,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    template.name,
                    template.title_template,
                    template.description_template,
                    template.reminder_type.value,
                    template.default_notification_time,
                    template.default_priority.value,
                    template.trigger_conditions.to_json(),
                    1 if template.is_system_template else 0,
                    format_timestamp(template.created_at),
                    format_timestamp(template.updated_at),
                ),
            )
            created = template.model_copy(update={"id": cursor.lastrowid})
        logger.debug("template_inserted", template_id=created.id, name=created.name)
        return created

    async def delete(self, template_id: int) -> bool:
        """Soft-delete a template."""
        now = format_timestamp(datetime.now())
        async with database_errors("template_delete"), self._transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE reminder_templates
                SET deleted_at = ?, updated_at = ?
                WHERE id = ? AND deleted_at IS NULL
                """,
                (now, now, template_id),
            )
            deleted = cursor.rowcount > 0
        return deleted

    @staticmethod
    def _row_to_template(row: aiosqlite.Row) -> ReminderTemplate:
        return ReminderTemplate(
            id=row["id"],
            name=row["name"],
            title_template=row["title_template"],
            description_template=row["description_template"],
            reminder_type=row["reminder_type"],
            default_priority=row["default_priority"],
            default_notification_time=row["default_notification_time"],
            trigger_conditions=row["trigger_conditions"],
            is_system_template=bool(row["is_system_template"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
