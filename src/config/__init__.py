"""Configuration module."""

from src.config.logging import configure_logging, get_logger
from src.config.settings import (
    APISettings,
    ReminderSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "ReminderSettings",
    "APISettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
