"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    CompleteReminderRequest,
    CreateReminderRequest,
    CreateReminderTemplateRequest,
    LogNotificationRequest,
    SnoozeReminderRequest,
    UpdateReminderRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    GenerateRemindersResponse,
    HealthResponse,
    NotificationHistoryResponse,
    NotificationRecordResponse,
    ProviderHealthResponse,
    ReminderListResponse,
    ReminderResponse,
    ReminderStatsResponse,
    ReminderTemplateListResponse,
    ReminderTemplateResponse,
)

__all__ = [
    # Requests
    "CreateReminderRequest",
    "UpdateReminderRequest",
    "CompleteReminderRequest",
    "SnoozeReminderRequest",
    "LogNotificationRequest",
    "CreateReminderTemplateRequest",
    # Responses
    "ReminderResponse",
    "ReminderListResponse",
    "ReminderStatsResponse",
    "NotificationRecordResponse",
    "NotificationHistoryResponse",
    "ReminderTemplateResponse",
    "ReminderTemplateListResponse",
    "GenerateRemindersResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
