"""Notification history entries."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class NotificationChannel(str, Enum):
    """Channel a notification was delivered through."""

    SYSTEM = "system"
    EMAIL = "email"
    PUSH = "push"


class NotificationStatus(str, Enum):
    """Delivery outcome."""

    SENT = "sent"
    FAILED = "failed"
    PENDING = "pending"


class NotificationRecord(BaseModel):
    """Append-only record of one notification attempt for a reminder."""

    id: int | None = None
    reminder_id: int
    channel: NotificationChannel
    status: NotificationStatus
    recipient: str | None = None
    error_message: str | None = None
    sent_at: datetime = Field(default_factory=datetime.now)
