"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from src.config import get_settings
from src.core.services import ReminderService

# Singleton service instance
_reminder_service: ReminderService | None = None


async def get_reminder_service() -> ReminderService:
    """
    Get or create the ReminderService wired to the SQLite stores.

    Uses singleton pattern; stores share the global connection pool.

    Returns:
        Configured ReminderService
    """
    global _reminder_service

    if _reminder_service is not None:
        return _reminder_service

    # Lazy import infrastructure to avoid circular imports
    from src.infrastructure.storage.sqlite import (
        get_application_store,
        get_notification_store,
        get_reminder_store,
        get_sync_queue_store,
        get_template_store,
    )

    _reminder_service = ReminderService(
        reminder_store=await get_reminder_store(),
        template_store=await get_template_store(),
        application_store=await get_application_store(),
        notification_log=await get_notification_store(),
        sync_queue=await get_sync_queue_store(),
        settings=get_settings().reminders,
    )
    return _reminder_service


def reset_services() -> None:
    """Reset singleton services (for testing)."""
    global _reminder_service
    _reminder_service = None
