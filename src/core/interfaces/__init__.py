"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.storage import (
    IApplicationStore,
    INotificationLog,
    IReminderStore,
    IReminderTemplateStore,
    ISyncQueue,
)

__all__ = [
    "IApplicationStore",
    "INotificationLog",
    "IReminderStore",
    "IReminderTemplateStore",
    "ISyncQueue",
]
