"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, Field


class ProviderHealthResponse(BaseModel):
    """Health status for a provider."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. REMINDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error

    Validation failures list every violated rule in ``details.errors``.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict[str, Any] = Field(default_factory=dict, description="Structured details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Reminders ---


class ReminderResponse(BaseModel):
    """Reminder response DTO with derived state evaluated at response time."""

    id: int
    application_id: int | None = None
    title: str
    description: str | None = None
    reminder_date: date
    reminder_time: time | None = None
    reminder_type: str
    priority: str
    is_completed: bool = False
    completed_at: datetime | None = None
    completion_note: str | None = None
    is_active: bool = True
    deleted_at: datetime | None = None
    email_notification_enabled: bool = True
    notification_time: int = 60
    recurrence_pattern: dict[str, Any] | None = None
    parent_reminder_id: int | None = None
    auto_generated: bool = False
    snooze_until: datetime | None = None
    sync_status: str
    sync_version: int
    created_at: datetime
    updated_at: datetime

    # Derived
    is_overdue: bool = False
    is_due_today: bool = False
    is_snoozed: bool = False
    days_until_due: int = 0
    notification_at: datetime | None = None


class ReminderListResponse(BaseModel):
    """List of reminders."""

    reminders: list[ReminderResponse]
    total: int


class ReminderStatsResponse(BaseModel):
    """Reminder counts by state, priority and type."""

    total: int
    completed: int
    overdue: int
    due_today: int
    upcoming: int
    by_priority: dict[str, int] = Field(default_factory=dict)
    by_type: dict[str, int] = Field(default_factory=dict)


class NotificationRecordResponse(BaseModel):
    """One notification history entry."""

    id: int
    reminder_id: int
    channel: str
    status: str
    recipient: str | None = None
    error_message: str | None = None
    sent_at: datetime


class NotificationHistoryResponse(BaseModel):
    """Notification history for a reminder, newest first."""

    reminder_id: int
    notifications: list[NotificationRecordResponse]
    total: int


# --- Reminder templates ---


class ReminderTemplateResponse(BaseModel):
    """Reminder template DTO."""

    id: int
    name: str
    title_template: str
    description_template: str | None = None
    reminder_type: str
    default_priority: str
    default_notification_time: int
    trigger_conditions: dict[str, Any] = Field(default_factory=dict)
    is_system_template: bool = False
    created_at: datetime
    updated_at: datetime


class ReminderTemplateListResponse(BaseModel):
    """List of reminder templates."""

    templates: list[ReminderTemplateResponse]
    total: int


# --- Generation ---


class GenerateRemindersResponse(BaseModel):
    """Response for template-driven reminder generation."""

    application_id: int = Field(..., description="Evaluated application")
    reminders_created: int = Field(..., description="New reminders created")
    created_ids: list[int] = Field(
        default_factory=list, description="IDs of newly created reminders"
    )
