"""
Dependency injection container for FastAPI.

Provides service instances to route handlers.
"""

from functools import lru_cache

from src.application.services import get_reminder_service
from src.application.use_cases import GenerateApplicationRemindersUseCase
from src.config import Settings, get_settings
from src.core.services import ReminderService
from src.infrastructure.storage.sqlite import ConnectionPool, get_pool


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Service dependencies
async def get_reminders() -> ReminderService:
    """Get reminder service."""
    return await get_reminder_service()


# Use case dependencies
async def get_generate_reminders_use_case() -> GenerateApplicationRemindersUseCase:
    """Get application reminder generation use case."""
    return GenerateApplicationRemindersUseCase(await get_reminder_service())


# Storage dependencies
async def get_db_pool() -> ConnectionPool:
    """Get the SQLite connection pool."""
    return await get_pool()
