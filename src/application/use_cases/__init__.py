"""Application use cases."""

from src.application.use_cases.generate_application_reminders import (
    GenerateApplicationRemindersUseCase,
    GenerationResult,
)

__all__ = [
    "GenerateApplicationRemindersUseCase",
    "GenerationResult",
]
