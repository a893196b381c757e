"""
Abstract interfaces for storage providers.

Defines contracts for the reminder, template, application, notification
history and sync queue stores consumed by the reminder service.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from src.core.entities.application import JobApplication
from src.core.entities.notification import NotificationRecord
from src.core.entities.reminder import Reminder, ReminderFilter
from src.core.entities.sync import SyncOperation
from src.core.entities.template import ReminderTemplate


class IReminderStore(ABC):
    """
    Abstract interface for reminder storage.

    Soft deletion is expressed through ``deleted_at``/``is_active`` and
    persisted with ``update``; ``delete`` removes the row physically.
    """

    @abstractmethod
    async def create(self, reminder: Reminder) -> Reminder:
        """Insert a reminder and return it with its new ID."""
        pass

    @abstractmethod
    async def get(self, reminder_id: int) -> Reminder | None:
        """Get reminder by ID, including soft-deleted ones."""
        pass

    @abstractmethod
    async def update(self, reminder: Reminder) -> Reminder:
        """Persist every field of an existing reminder."""
        pass

    @abstractmethod
    async def delete(self, reminder_id: int) -> bool:
        """Physically remove a reminder. Returns True if a row was removed."""
        pass

    @abstractmethod
    async def list_reminders(
        self,
        filters: ReminderFilter | None = None,
        now: datetime | None = None,
    ) -> list[Reminder]:
        """
        List reminders matching the filter.

        Ordered by date, then time (all-day first), then ID. Time-dependent
        filters (overdue, snoozed) are evaluated against ``now``.
        """
        pass

    @abstractmethod
    async def list_notification_candidates(self) -> list[Reminder]:
        """Active, open, undeleted reminders with email notifications enabled."""
        pass

    @abstractmethod
    async def find_open_by_application(self, application_id: int) -> list[Reminder]:
        """Open, undeleted reminders for an application."""
        pass


class IReminderTemplateStore(ABC):
    """Abstract interface for reminder template storage."""

    @abstractmethod
    async def list_templates(self, system_only: bool = False) -> list[ReminderTemplate]:
        """List templates ordered by name."""
        pass

    @abstractmethod
    async def get(self, template_id: int) -> ReminderTemplate | None:
        """Get template by ID."""
        pass

    @abstractmethod
    async def create(self, template: ReminderTemplate) -> ReminderTemplate:
        """Insert a template."""
        pass

    @abstractmethod
    async def delete(self, template_id: int) -> bool:
        """Soft-delete a template."""
        pass


class IApplicationStore(ABC):
    """Read access to job applications."""

    @abstractmethod
    async def get_application(self, application_id: int) -> JobApplication | None:
        """Get an application joined with its company name."""
        pass


class INotificationLog(ABC):
    """Append-only notification history."""

    @abstractmethod
    async def append(self, record: NotificationRecord) -> NotificationRecord:
        """Record one notification attempt."""
        pass

    @abstractmethod
    async def list_for_reminder(self, reminder_id: int) -> list[NotificationRecord]:
        """History for a reminder, newest first."""
        pass


class ISyncQueue(ABC):
    """Outbound change queue for best-effort synchronization."""

    @abstractmethod
    async def enqueue(
        self,
        entity_kind: str,
        entity_id: int,
        operation: SyncOperation,
        payload: dict[str, Any] | None = None,
    ) -> None:
        """Record a change. Raises SyncEnqueueError on failure."""
        pass
