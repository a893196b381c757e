"""API route modules."""

from src.api.routes.applications import router as applications_router
from src.api.routes.health import router as health_router
from src.api.routes.reminders import router as reminders_router
from src.api.routes.templates import router as templates_router

__all__ = [
    "health_router",
    "reminders_router",
    "templates_router",
    "applications_router",
]
