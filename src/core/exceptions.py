"""
Domain exceptions for the ApplyTrack reminder core.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class ApplyTrackError(Exception):
    """Base exception for all ApplyTrack errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(ApplyTrackError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class SyncEnqueueError(StorageError):
    """A change record could not be written to the sync queue."""

    def __init__(self, entity_kind: str, entity_id: int | None, reason: str):
        super().__init__(
            f"Failed to enqueue sync record for {entity_kind} {entity_id}: {reason}",
            code="SYNC_ENQUEUE_FAILED",
            details={
                "entity_kind": entity_kind,
                "entity_id": entity_id,
                "reason": reason,
            },
        )


# Lookup Exceptions
class NotFoundError(ApplyTrackError):
    """Referenced entity does not exist."""

    pass


class ReminderNotFoundError(NotFoundError):
    """Reminder not found in storage."""

    def __init__(self, reminder_id: int):
        super().__init__(
            f"Reminder not found: {reminder_id}",
            code="REMINDER_NOT_FOUND",
            details={"reminder_id": reminder_id},
        )


class ApplicationNotFoundError(NotFoundError):
    """Job application not found in storage."""

    def __init__(self, application_id: int):
        super().__init__(
            f"Application not found: {application_id}",
            code="APPLICATION_NOT_FOUND",
            details={"application_id": application_id},
        )


class TemplateNotFoundError(NotFoundError):
    """Reminder template not found in storage."""

    def __init__(self, template_id: int):
        super().__init__(
            f"Reminder template not found: {template_id}",
            code="TEMPLATE_NOT_FOUND",
            details={"template_id": template_id},
        )


# Validation Exceptions
class ValidationError(ApplyTrackError):
    """One or more business rules were violated.

    Carries every message so callers can show the full list.
    """

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(
            "; ".join(self.errors) or "Validation failed",
            code="VALIDATION_ERROR",
            details={"errors": self.errors},
        )


class ConfigurationError(ApplyTrackError):
    """Configuration error."""

    pass
