"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Reminder fields are accepted loosely typed: business-rule validation
happens in the domain so every violation is reported together.
"""

from typing import Any

from pydantic import BaseModel, Field

from src.core.entities.notification import NotificationChannel, NotificationStatus

# --- Reminders ---


class CreateReminderRequest(BaseModel):
    """Request to create a reminder."""

    title: str | None = Field(default=None, description="Reminder title")
    description: str | None = Field(default=None, description="Reminder details")
    application_id: int | None = Field(default=None, description="Linked job application ID")
    reminder_date: str | None = Field(
        default=None, description="Date in ISO format (YYYY-MM-DD); defaults to today"
    )
    reminder_time: str | None = Field(
        default=None, description="Time (HH:MM[:SS]); omit for an all-day reminder"
    )
    reminder_type: str | None = Field(
        default=None, description="deadline, follow_up, interview or custom"
    )
    priority: str | None = Field(default=None, description="low, medium, high or urgent")
    email_notification_enabled: bool | None = Field(
        default=None, description="Send an email notification when due"
    )
    notification_time: int | None = Field(
        default=None, description="Minutes before the due time to notify"
    )
    recurrence_pattern: dict[str, Any] | str | None = Field(
        default=None,
        description='Recurrence rule, e.g. {"type": "weekly", "interval": 1}',
    )


class UpdateReminderRequest(BaseModel):
    """Request to update a reminder. Only fields that are sent are changed."""

    title: str | None = Field(default=None, description="Reminder title")
    description: str | None = Field(default=None, description="Reminder details")
    application_id: int | None = Field(default=None, description="Linked job application ID")
    reminder_date: str | None = Field(default=None, description="Date (YYYY-MM-DD)")
    reminder_time: str | None = Field(
        default=None, description="Time (HH:MM[:SS]); null makes it all-day"
    )
    reminder_type: str | None = Field(default=None, description="Reminder type")
    priority: str | None = Field(default=None, description="Priority")
    email_notification_enabled: bool | None = Field(default=None, description="Email toggle")
    notification_time: int | None = Field(default=None, description="Minutes before due")
    recurrence_pattern: dict[str, Any] | str | None = Field(
        default=None, description="Recurrence rule; null stops recurring"
    )


class CompleteReminderRequest(BaseModel):
    """Request to complete a reminder."""

    note: str | None = Field(default=None, description="Optional completion note")


class SnoozeReminderRequest(BaseModel):
    """Request to snooze a reminder."""

    hours: float | None = Field(
        default=None, description="Snooze length in hours; defaults to the configured value"
    )


class LogNotificationRequest(BaseModel):
    """Request to record a notification attempt."""

    channel: NotificationChannel = Field(..., description="system, email or push")
    status: NotificationStatus = Field(
        default=NotificationStatus.SENT, description="sent, failed or pending"
    )
    recipient: str | None = Field(default=None, description="Recipient address")
    error_message: str | None = Field(default=None, description="Failure reason")


# --- Reminder templates ---


class CreateReminderTemplateRequest(BaseModel):
    """Request to create a user reminder template."""

    name: str = Field(..., min_length=1, description="Template name")
    title_template: str = Field(
        ..., min_length=1, description="Title with {position}/{company}/... placeholders"
    )
    description_template: str | None = Field(default=None, description="Description template")
    reminder_type: str = Field(default="custom", description="Reminder type")
    default_priority: str = Field(default="medium", description="Default priority")
    default_notification_time: int = Field(
        default=60, ge=0, description="Default minutes before due to notify"
    )
    trigger_conditions: dict[str, Any] = Field(
        default_factory=dict,
        description='Trigger conditions, e.g. {"days_after_application": 7}',
    )
