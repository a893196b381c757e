"""
Reminder Service.

Persistence-backed reminder lifecycle: CRUD, filtered queries, completion
with recurrence spawning, snoozing, template-driven auto-generation and the
notification-due query. No background scheduler: "due" is computed on demand
against the injected clock.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.config import ReminderSettings, get_logger
from src.core.entities.notification import (
    NotificationChannel,
    NotificationRecord,
    NotificationStatus,
)
from src.core.entities.reminder import (
    Reminder,
    ReminderFilter,
    ReminderPriority,
    ReminderStats,
    ReminderType,
    SyncStatus,
)
from src.core.entities.sync import SyncOperation
from src.core.entities.template import ReminderTemplate
from src.core.exceptions import (
    ApplicationNotFoundError,
    ApplyTrackError,
    ReminderNotFoundError,
    TemplateNotFoundError,
    ValidationError,
)
from src.core.interfaces.storage import (
    IApplicationStore,
    INotificationLog,
    IReminderStore,
    IReminderTemplateStore,
    ISyncQueue,
)

logger = get_logger(__name__)

REMINDER_ENTITY = "reminders"

# Never taken from caller data on create/update.
_PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at", "sync_version"})


class ReminderService:
    """
    Layer-pure reminder service.

    Collaborators, settings and the clock are injected at construction.
    The sync queue is optional; when given, enqueue failures are logged and
    never surface to the caller of the triggering operation.
    """

    def __init__(
        self,
        reminder_store: IReminderStore,
        template_store: IReminderTemplateStore | None = None,
        application_store: IApplicationStore | None = None,
        notification_log: INotificationLog | None = None,
        sync_queue: ISyncQueue | None = None,
        settings: ReminderSettings | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._reminders = reminder_store
        self._templates = template_store
        self._applications = application_store
        self._notifications = notification_log
        self._sync_queue = sync_queue
        self._settings = settings or ReminderSettings()
        self._clock = clock

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(self, data: dict[str, Any]) -> Reminder:
        """
        Validate and persist a new reminder.

        Raises:
            ValidationError: With every violated rule when the data is invalid.
        """
        now = self._clock()
        payload = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}
        payload.setdefault(
            "notification_time", self._settings.default_notification_minutes
        )
        payload["created_at"] = now
        payload["updated_at"] = now

        reminder = Reminder.from_data(payload)
        created = await self._reminders.create(reminder)

        logger.info(
            "reminder_created",
            reminder_id=created.id,
            application_id=created.application_id,
            reminder_type=created.reminder_type.value,
        )
        await self._enqueue(created, SyncOperation.CREATE)
        return created

    async def get(self, reminder_id: int) -> Reminder:
        """Get a reminder by ID, raising ReminderNotFoundError when missing."""
        reminder = await self._reminders.get(reminder_id)
        if reminder is None:
            raise ReminderNotFoundError(reminder_id)
        return reminder

    async def update(self, reminder_id: int, data: dict[str, Any]) -> Reminder:
        """Merge partial fields into the stored reminder, re-validate and persist."""
        existing = await self.get(reminder_id)
        changes = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}

        merged = existing.model_dump()
        merged.update(changes)
        reminder = Reminder.from_data(merged)

        saved = await self._save(reminder, self._clock())
        logger.info(
            "reminder_updated",
            reminder_id=reminder_id,
            fields=sorted(changes),
        )
        return saved

    async def delete(self, reminder_id: int) -> Reminder:
        """Soft delete: stamp ``deleted_at`` and deactivate."""
        reminder = await self.get(reminder_id)
        now = self._clock()
        reminder.mark_deleted(now)
        saved = await self._save(reminder, now, SyncOperation.DELETE)
        logger.info("reminder_soft_deleted", reminder_id=reminder_id)
        return saved

    async def hard_delete(self, reminder_id: int) -> None:
        """Physically remove a reminder after recording the delete for sync."""
        reminder = await self.get(reminder_id)
        await self._enqueue(reminder, SyncOperation.DELETE)
        await self._reminders.delete(reminder_id)
        logger.info("reminder_hard_deleted", reminder_id=reminder_id)

    async def restore(self, reminder_id: int) -> Reminder:
        """Undo a soft delete."""
        reminder = await self.get(reminder_id)
        now = self._clock()
        reminder.restore(now)
        saved = await self._save(reminder, now)
        logger.info("reminder_restored", reminder_id=reminder_id)
        return saved

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_reminders(self, filters: ReminderFilter | None = None) -> list[Reminder]:
        """List reminders; ``overdue`` uses the same rule as ``Reminder.is_overdue``."""
        return await self._reminders.list_reminders(filters or ReminderFilter(), self._clock())

    async def get_upcoming(self, days: int | None = None) -> list[Reminder]:
        """Open reminders dated from today through today + ``days``."""
        if days is None:
            days = self._settings.upcoming_days
        if days < 0:
            raise ValidationError("Upcoming window must be non-negative")
        today = self._clock().date()
        return await self.list_reminders(
            ReminderFilter(
                date_from=today,
                date_to=today + timedelta(days=days),
                completed=False,
            )
        )

    async def get_overdue_reminders(self) -> list[Reminder]:
        return await self.list_reminders(ReminderFilter(overdue=True))

    async def get_today_reminders(self) -> list[Reminder]:
        today = self._clock().date()
        return await self.list_reminders(
            ReminderFilter(date_from=today, date_to=today, completed=False)
        )

    async def get_by_application(self, application_id: int) -> list[Reminder]:
        return await self.list_reminders(ReminderFilter(application_id=application_id))

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    async def complete(self, reminder_id: int, note: str | None = None) -> Reminder:
        """
        Complete a reminder, spawning the next occurrence when it recurs.

        A failure to create the next occurrence is logged and does not
        prevent the completion from being persisted. Completing an already
        completed reminder is a no-op.
        """
        reminder = await self.get(reminder_id)
        if reminder.is_completed:
            logger.info("reminder_already_completed", reminder_id=reminder_id)
            return reminder

        now = self._clock()
        reminder.complete(note, now)

        if reminder.is_recurring():
            await self._spawn_next_occurrence(reminder, now)

        saved = await self._save(reminder, now)
        logger.info("reminder_completed", reminder_id=reminder_id)
        return saved

    async def reopen(self, reminder_id: int) -> Reminder:
        reminder = await self.get(reminder_id)
        now = self._clock()
        reminder.reopen(now)
        saved = await self._save(reminder, now)
        logger.info("reminder_reopened", reminder_id=reminder_id)
        return saved

    async def snooze(self, reminder_id: int, hours: float | None = None) -> Reminder:
        """Snooze for ``hours`` (defaults to the configured snooze length)."""
        if hours is None:
            hours = self._settings.default_snooze_hours
        reminder = await self.get(reminder_id)
        now = self._clock()
        reminder.snooze(hours, now)
        saved = await self._save(reminder, now)
        logger.info(
            "reminder_snoozed",
            reminder_id=reminder_id,
            snooze_until=saved.snooze_until.isoformat() if saved.snooze_until else None,
        )
        return saved

    async def unsnooze(self, reminder_id: int) -> Reminder:
        reminder = await self.get(reminder_id)
        now = self._clock()
        reminder.unsnooze(now)
        saved = await self._save(reminder, now)
        logger.info("reminder_unsnoozed", reminder_id=reminder_id)
        return saved

    # ------------------------------------------------------------------
    # Auto-generation
    # ------------------------------------------------------------------

    async def auto_generate_reminders(self, application_id: int) -> list[Reminder]:
        """
        Create reminders for every system template the application satisfies.

        Evaluation is best-effort per template: a failing template is logged
        and the remaining ones are still evaluated. A template is skipped
        when the application already has an open auto-generated reminder
        with the same title and type, so repeated runs create nothing new.

        Raises:
            ApplicationNotFoundError: If the application does not exist.
        """
        if self._applications is None or self._templates is None:
            raise ApplyTrackError(
                "Auto-generation requires application and template stores",
                code="SERVICE_MISCONFIGURED",
            )

        application = await self._applications.get_application(application_id)
        if application is None:
            raise ApplicationNotFoundError(application_id)

        templates = await self._templates.list_templates(system_only=True)
        open_reminders = await self._reminders.find_open_by_application(application_id)
        existing = {
            (r.title, r.reminder_type)
            for r in open_reminders
            if r.auto_generated and not r.is_completed and not r.is_deleted
        }

        today = self._clock().date()
        created: list[Reminder] = []
        skipped = 0

        for template in templates:
            if not template.matches(application):
                continue

            data = template.build_reminder_data(application, today)
            key = (data["title"], ReminderType(data["reminder_type"]))
            if key in existing:
                skipped += 1
                continue

            try:
                reminder = await self.create(data)
            except ApplyTrackError as e:
                logger.warning(
                    "auto_generate_template_failed",
                    application_id=application_id,
                    template_id=template.id,
                    template_name=template.name,
                    error=e.message,
                )
                continue

            existing.add(key)
            created.append(reminder)

        logger.info(
            "auto_generate_complete",
            application_id=application_id,
            templates=len(templates),
            created=len(created),
            skipped=skipped,
        )
        return created

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def get_reminders_needing_notification(self) -> list[Reminder]:
        """Active, open, email-enabled reminders whose notify-at instant has passed."""
        now = self._clock()
        candidates = await self._reminders.list_notification_candidates()
        return [
            r
            for r in candidates
            if r.email_notification_enabled
            and not r.is_deleted
            and r.should_notify_now(now)
        ]

    async def log_notification(
        self,
        reminder_id: int,
        channel: NotificationChannel,
        status: NotificationStatus,
        recipient: str | None = None,
        error_message: str | None = None,
    ) -> NotificationRecord:
        """Append a history record; the reminder itself is left untouched."""
        log = self._require_notification_log()
        await self.get(reminder_id)

        record = NotificationRecord(
            reminder_id=reminder_id,
            channel=channel,
            status=status,
            recipient=recipient,
            error_message=error_message,
            sent_at=self._clock(),
        )
        saved = await log.append(record)
        logger.info(
            "notification_logged",
            reminder_id=reminder_id,
            channel=NotificationChannel(channel).value,
            status=NotificationStatus(status).value,
        )
        return saved

    async def get_notification_history(self, reminder_id: int) -> list[NotificationRecord]:
        """Notification history for a reminder, newest first."""
        log = self._require_notification_log()
        await self.get(reminder_id)
        return await log.list_for_reminder(reminder_id)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    async def get_stats(self) -> ReminderStats:
        """Counts over every live (not deleted) reminder."""
        now = self._clock()
        reminders = await self._reminders.list_reminders(ReminderFilter(), now)

        stats = ReminderStats(
            total=len(reminders),
            by_priority={p.value: 0 for p in ReminderPriority},
            by_type={t.value: 0 for t in ReminderType},
        )
        for r in reminders:
            overdue = r.is_overdue(now)
            due_today = r.is_due_today(now)
            if r.is_completed:
                stats.completed += 1
            if overdue:
                stats.overdue += 1
            if due_today:
                stats.due_today += 1
            if not r.is_completed and not overdue and not due_today:
                stats.upcoming += 1
            stats.by_priority[r.priority.value] += 1
            stats.by_type[r.reminder_type.value] += 1
        return stats

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    async def list_templates(self, system_only: bool = False) -> list[ReminderTemplate]:
        return await self._require_template_store().list_templates(system_only=system_only)

    async def create_template(self, data: dict[str, Any]) -> ReminderTemplate:
        """Create a user template. User templates are never system templates."""
        store = self._require_template_store()
        now = self._clock()
        payload = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}
        payload.update(is_system_template=False, created_at=now, updated_at=now)
        try:
            template = ReminderTemplate.model_validate(payload)
        except (PydanticValidationError, ValueError) as e:
            raise ValidationError(_template_errors(e)) from e

        created = await store.create(template)
        logger.info("reminder_template_created", template_id=created.id, name=created.name)
        return created

    async def delete_template(self, template_id: int) -> None:
        store = self._require_template_store()
        template = await store.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        if template.is_system_template:
            raise ValidationError("System templates cannot be deleted")
        await store.delete(template_id)
        logger.info("reminder_template_deleted", template_id=template_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _save(
        self,
        reminder: Reminder,
        now: datetime,
        operation: SyncOperation = SyncOperation.UPDATE,
    ) -> Reminder:
        reminder.updated_at = now
        reminder.sync_version += 1
        reminder.sync_status = SyncStatus.PENDING
        saved = await self._reminders.update(reminder)
        await self._enqueue(saved, operation)
        return saved

    async def _spawn_next_occurrence(self, reminder: Reminder, now: datetime) -> Reminder | None:
        try:
            occurrence = reminder.next_occurrence(now)
            if occurrence is None:
                logger.info("recurrence_series_ended", reminder_id=reminder.id)
                return None
            created = await self._reminders.create(occurrence)
        except Exception:
            logger.error(
                "recurrence_spawn_failed",
                reminder_id=reminder.id,
                exc_info=True,
            )
            return None

        logger.info(
            "recurrence_spawned",
            reminder_id=reminder.id,
            next_reminder_id=created.id,
            next_date=created.reminder_date.isoformat(),
        )
        await self._enqueue(created, SyncOperation.CREATE)
        return created

    async def _enqueue(self, reminder: Reminder, operation: SyncOperation) -> None:
        if self._sync_queue is None or reminder.id is None:
            return
        try:
            await self._sync_queue.enqueue(
                REMINDER_ENTITY,
                reminder.id,
                operation,
                reminder.model_dump(mode="json"),
            )
        except Exception:
            logger.warning(
                "sync_enqueue_failed",
                reminder_id=reminder.id,
                operation=operation.value,
                exc_info=True,
            )

    def _require_template_store(self) -> IReminderTemplateStore:
        if self._templates is None:
            raise ApplyTrackError(
                "Template store not configured", code="SERVICE_MISCONFIGURED"
            )
        return self._templates

    def _require_notification_log(self) -> INotificationLog:
        if self._notifications is None:
            raise ApplyTrackError(
                "Notification log not configured", code="SERVICE_MISCONFIGURED"
            )
        return self._notifications


def _template_errors(exc: Exception) -> list[str]:
    if isinstance(exc, PydanticValidationError):
        return [
            f"Invalid value for {'.'.join(str(p) for p in err['loc']) or 'template'}"
            for err in exc.errors()
        ]
    return ["Invalid trigger conditions"]
