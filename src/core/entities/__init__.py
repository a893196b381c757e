"""Core domain entities."""

from src.core.entities.application import JobApplication
from src.core.entities.notification import (
    NotificationChannel,
    NotificationRecord,
    NotificationStatus,
)
from src.core.entities.recurrence import (
    RecurrencePattern,
    RecurrencePatternError,
    RecurrenceType,
    calculate_next_occurrence,
)
from src.core.entities.reminder import (
    ALL_DAY_TIME,
    Reminder,
    ReminderFilter,
    ReminderPriority,
    ReminderStats,
    ReminderType,
    SyncStatus,
    validate_reminder_data,
)
from src.core.entities.sync import SyncOperation, SyncQueueItem
from src.core.entities.template import (
    ReminderTemplate,
    TriggerConditions,
    render_placeholders,
)

__all__ = [
    # Application
    "JobApplication",
    # Notification
    "NotificationChannel",
    "NotificationRecord",
    "NotificationStatus",
    # Recurrence
    "RecurrencePattern",
    "RecurrencePatternError",
    "RecurrenceType",
    "calculate_next_occurrence",
    # Reminder
    "ALL_DAY_TIME",
    "Reminder",
    "ReminderFilter",
    "ReminderPriority",
    "ReminderStats",
    "ReminderType",
    "SyncStatus",
    "validate_reminder_data",
    # Sync
    "SyncOperation",
    "SyncQueueItem",
    # Template
    "ReminderTemplate",
    "TriggerConditions",
    "render_placeholders",
]
