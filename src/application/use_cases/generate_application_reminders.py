"""
Generate Application Reminders Use Case.

Evaluates the system reminder templates against one job application and
creates the reminders whose trigger conditions it satisfies.
"""

from dataclasses import dataclass, field

from src.config import get_logger
from src.core.services.reminder_service import ReminderService

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Result of reminder generation for one application."""

    application_id: int
    reminders_created: int = 0
    created_ids: list[int] = field(default_factory=list)


class GenerateApplicationRemindersUseCase:
    """
    Use case for template-driven reminder generation.

    Re-running it for the same application is safe: templates whose
    reminder is still open are skipped by the service.
    """

    def __init__(self, reminder_service: ReminderService | None = None):
        self._service = reminder_service

    async def _get_service(self) -> ReminderService:
        if self._service is None:
            from src.application.services import get_reminder_service
            self._service = await get_reminder_service()
        return self._service

    async def execute(self, application_id: int) -> GenerationResult:
        """
        Generate reminders for an application.

        Args:
            application_id: Application to evaluate templates against.

        Returns:
            GenerationResult with the count and IDs of created reminders.

        Raises:
            ApplicationNotFoundError: If the application does not exist.
        """
        service = await self._get_service()
        created = await service.auto_generate_reminders(application_id)

        result = GenerationResult(application_id=application_id)
        for reminder in created:
            result.reminders_created += 1
            if reminder.id is not None:
                result.created_ids.append(reminder.id)

        logger.info(
            "application_reminders_generated",
            application_id=application_id,
            reminders_created=result.reminders_created,
        )
        return result
