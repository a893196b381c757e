"""Reminder entity for application deadlines, follow-ups and interviews."""

import math
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from src.core.entities.recurrence import (
    INVALID_PATTERN_MESSAGE,
    RecurrencePattern,
    RecurrencePatternError,
)
from src.core.exceptions import ValidationError

# All-day reminders are due at this local time for notification purposes.
ALL_DAY_TIME = time(9, 0)

# Upper bounds keep derived datetimes inside the representable range.
MAX_NOTIFICATION_MINUTES = 525_600
MAX_SNOOZE_HOURS = 8_760

_FIELD_MESSAGES: dict[str, str] = {
    "title": "Title is required",
    "reminder_date": "Invalid reminder date",
    "reminder_time": "Invalid reminder time",
    "reminder_type": "Invalid reminder type",
    "priority": "Invalid priority",
    "notification_time": "Notification time must be non-negative",
    "recurrence_pattern": INVALID_PATTERN_MESSAGE,
    "snooze_until": "Invalid snooze timestamp",
}

_CUSTOM_ERROR_TYPES = {
    "title_required",
    "notification_time_negative",
    "notification_time_too_large",
    "recurrence_pattern",
}


class ReminderType(str, Enum):
    """What the reminder is about."""

    DEADLINE = "deadline"
    FOLLOW_UP = "follow_up"
    INTERVIEW = "interview"
    CUSTOM = "custom"


class ReminderPriority(str, Enum):
    """Reminder urgency."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class SyncStatus(str, Enum):
    """Replication state against the remote copy."""

    PENDING = "pending"
    SYNCED = "synced"
    ERROR = "error"
    LOCAL_ONLY = "local_only"


def _resolve_now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now()


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class Reminder(BaseModel):
    """
    Reminder attached (optionally) to a job application.

    Dates are calendar dates without a time zone; timestamps are naive
    local wall-clock values. Every time-dependent query accepts ``now``
    so callers can evaluate against a fixed instant.
    """

    id: int | None = None
    application_id: int | None = None
    title: str
    description: str | None = None
    reminder_date: date = Field(default_factory=date.today)
    reminder_time: time | None = None
    reminder_type: ReminderType = ReminderType.CUSTOM
    priority: ReminderPriority = ReminderPriority.MEDIUM

    is_completed: bool = False
    completed_at: datetime | None = None
    completion_note: str | None = None

    is_active: bool = True
    deleted_at: datetime | None = None

    email_notification_enabled: bool = True
    notification_time: int = 60  # minutes before due

    recurrence_pattern: RecurrencePattern | None = None
    parent_reminder_id: int | None = None
    auto_generated: bool = False
    snooze_until: datetime | None = None

    sync_status: SyncStatus = SyncStatus.PENDING
    sync_version: int = 1
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    # --- field normalization ---

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("title_required", "Title is required")
        return v

    @field_validator("reminder_date", mode="before")
    @classmethod
    def _coerce_reminder_date(cls, v: Any) -> Any:
        if v is None or v == "":
            return date.today()
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    @field_validator("reminder_time", mode="before")
    @classmethod
    def _blank_time_is_all_day(cls, v: Any) -> Any:
        return None if v == "" else v

    @field_validator("reminder_time")
    @classmethod
    def _second_precision(cls, v: time | None) -> time | None:
        if v is None:
            return None
        return v.replace(microsecond=0, tzinfo=None)

    @field_validator("notification_time", mode="before")
    @classmethod
    def _default_notification_time(cls, v: Any) -> Any:
        return 60 if v is None else v

    @field_validator("notification_time")
    @classmethod
    def _notification_time_non_negative(cls, v: int) -> int:
        if v < 0:
            raise PydanticCustomError(
                "notification_time_negative",
                "Notification time must be non-negative",
            )
        if v > MAX_NOTIFICATION_MINUTES:
            raise PydanticCustomError(
                "notification_time_too_large",
                "Notification time must be at most one year",
            )
        return v

    @field_validator("recurrence_pattern", mode="before")
    @classmethod
    def _parse_recurrence(cls, v: Any) -> RecurrencePattern | None:
        if v is None or v == "":
            return None
        try:
            return RecurrencePattern.parse(v)
        except RecurrencePatternError as e:
            raise PydanticCustomError("recurrence_pattern", str(e)) from e

    @field_validator("completed_at", "deleted_at", "snooze_until", mode="before")
    @classmethod
    def _blank_timestamp_is_none(cls, v: Any) -> Any:
        return None if v == "" else v

    @field_validator(
        "completed_at", "deleted_at", "snooze_until", "created_at", "updated_at"
    )
    @classmethod
    def _local_naive(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return None
        return _to_local_naive(v)

    @model_validator(mode="after")
    def _completion_invariant(self) -> "Reminder":
        if not self.is_completed:
            self.completed_at = None
        elif self.completed_at is None:
            self.completed_at = self.updated_at
        return self

    # --- construction & validation ---

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "Reminder":
        """Build a reminder from partial data, raising ValidationError with every message."""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(error_messages(e)) from e

    def validate(self) -> list[str]:
        """Return business-rule violations for the current field values."""
        return validate_reminder_data(self.model_dump(warnings=False))

    # --- derived state ---

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def is_recurring(self) -> bool:
        return self.recurrence_pattern is not None

    def is_high_priority(self) -> bool:
        return self.priority in (ReminderPriority.HIGH, ReminderPriority.URGENT)

    def is_snoozed(self, now: datetime | None = None) -> bool:
        """Snoozed while ``snooze_until`` lies strictly in the future."""
        if self.snooze_until is None:
            return False
        return self.snooze_until > _resolve_now(now)

    def scheduled_datetime(self) -> datetime:
        """Date plus time, or plus the all-day default time."""
        return datetime.combine(self.reminder_date, self.reminder_time or ALL_DAY_TIME)

    def effective_datetime(self, now: datetime | None = None) -> datetime:
        """When the reminder is considered due, honouring an active snooze."""
        if self.is_snoozed(now):
            return self.snooze_until  # type: ignore[return-value]
        return self.scheduled_datetime()

    def notification_datetime(self, now: datetime | None = None) -> datetime:
        """Instant at which the notify-before threshold is crossed."""
        try:
            return self.effective_datetime(now) - timedelta(minutes=self.notification_time)
        except OverflowError:
            return datetime.min

    def is_overdue(self, now: datetime | None = None) -> bool:
        now = _resolve_now(now)
        if self.is_completed or self.is_snoozed(now):
            return False
        if self.reminder_time is not None:
            return datetime.combine(self.reminder_date, self.reminder_time) < now
        return self.reminder_date < now.date()

    def is_due_today(self, now: datetime | None = None) -> bool:
        now = _resolve_now(now)
        if self.is_completed or self.is_snoozed(now):
            return False
        return self.reminder_date == now.date()

    def days_until_due(self, now: datetime | None = None) -> int:
        """Whole days (rounded up) until due, or until the snooze ends."""
        now = _resolve_now(now)
        if self.is_snoozed(now):
            target = self.snooze_until
        elif self.reminder_time is not None:
            target = datetime.combine(self.reminder_date, self.reminder_time)
        else:
            target = datetime.combine(self.reminder_date, time.min)
        return math.ceil((target - now) / timedelta(days=1))  # type: ignore[operator]

    def should_notify_now(self, now: datetime | None = None) -> bool:
        now = _resolve_now(now)
        if self.is_completed or not self.is_active or self.is_snoozed(now):
            return False
        return now >= self.notification_datetime(now)

    # --- mutations ---

    def complete(self, note: str | None = None, now: datetime | None = None) -> None:
        now = _resolve_now(now)
        self.is_completed = True
        self.completed_at = now
        self.completion_note = note
        self.updated_at = now

    def reopen(self, now: datetime | None = None) -> None:
        self.is_completed = False
        self.completed_at = None
        self.completion_note = None
        self.updated_at = _resolve_now(now)

    def snooze(self, hours: float, now: datetime | None = None) -> None:
        if not math.isfinite(hours) or hours <= 0:
            raise ValidationError("Snooze duration must be positive")
        if hours > MAX_SNOOZE_HOURS:
            raise ValidationError("Snooze duration must be at most one year")
        now = _resolve_now(now)
        self.snooze_until = now + timedelta(hours=hours)
        self.updated_at = now

    def unsnooze(self, now: datetime | None = None) -> None:
        self.snooze_until = None
        self.updated_at = _resolve_now(now)

    def set_recurrence_pattern(
        self, pattern: RecurrencePattern | dict[str, Any] | str, now: datetime | None = None
    ) -> None:
        try:
            self.recurrence_pattern = RecurrencePattern.parse(pattern)
        except RecurrencePatternError as e:
            raise ValidationError(str(e)) from e
        self.updated_at = _resolve_now(now)

    def clear_recurrence(self, now: datetime | None = None) -> None:
        self.recurrence_pattern = None
        self.updated_at = _resolve_now(now)

    def mark_deleted(self, now: datetime | None = None) -> None:
        now = _resolve_now(now)
        self.deleted_at = now
        self.is_active = False
        self.updated_at = now

    def restore(self, now: datetime | None = None) -> None:
        self.deleted_at = None
        self.is_active = True
        self.updated_at = _resolve_now(now)

    def next_occurrence(self, now: datetime | None = None) -> "Reminder | None":
        """
        Build the reminder for the next occurrence, or None when the series ends.

        The copy points at the root of the series rather than chaining
        through every previous occurrence.
        """
        if self.recurrence_pattern is None:
            return None
        next_date = self.recurrence_pattern.calculate_next(self.reminder_date)
        if next_date is None:
            return None

        now = _resolve_now(now)
        return self.model_copy(
            update={
                "id": None,
                "reminder_date": next_date,
                "is_completed": False,
                "completed_at": None,
                "completion_note": None,
                "snooze_until": None,
                "deleted_at": None,
                "is_active": True,
                "parent_reminder_id": self.parent_reminder_id or self.id,
                "sync_status": SyncStatus.PENDING,
                "sync_version": 1,
                "created_at": now,
                "updated_at": now,
            }
        )


def error_messages(exc: PydanticValidationError) -> list[str]:
    """Translate pydantic errors into the reminder's human-readable messages."""
    messages: list[str] = []
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else ""
        if error["type"] in _CUSTOM_ERROR_TYPES:
            message = error["msg"]
        else:
            message = _FIELD_MESSAGES.get(field, f"Invalid value for {field or 'reminder'}")
        if message not in messages:
            messages.append(message)
    return messages


def validate_reminder_data(data: dict[str, Any]) -> list[str]:
    """Return every validation message for raw reminder data (empty when valid)."""
    try:
        Reminder.model_validate(data)
    except PydanticValidationError as e:
        return error_messages(e)
    return []


class ReminderFilter(BaseModel):
    """Query options for listing reminders."""

    application_id: int | None = None
    completed: bool | None = None
    priority: ReminderPriority | None = None
    reminder_type: ReminderType | None = None
    date_from: date | None = None
    date_to: date | None = None
    overdue: bool = False
    exclude_snoozed: bool = False
    include_deleted: bool = False
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)


class ReminderStats(BaseModel):
    """Aggregate counts over all live reminders."""

    total: int = 0
    completed: int = 0
    overdue: int = 0
    due_today: int = 0
    upcoming: int = 0
    by_priority: dict[str, int] = Field(default_factory=dict)
    by_type: dict[str, int] = Field(default_factory=dict)
