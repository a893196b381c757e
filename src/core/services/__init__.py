"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.reminder_service import REMINDER_ENTITY, ReminderService

__all__ = [
    "REMINDER_ENTITY",
    "ReminderService",
]
