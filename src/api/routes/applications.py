"""
Application-scoped reminder endpoints.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_generate_reminders_use_case
from src.application.dto.responses import ErrorResponse, GenerateRemindersResponse
from src.application.use_cases import GenerateApplicationRemindersUseCase

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.post(
    "/{application_id}/reminders/generate",
    response_model=GenerateRemindersResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def generate_application_reminders(
    application_id: int,
    use_case: GenerateApplicationRemindersUseCase = Depends(get_generate_reminders_use_case),
) -> GenerateRemindersResponse:
    """
    Create reminders from every system template the application satisfies.

    Safe to repeat: templates whose reminder is still open are skipped.
    """
    result = await use_case.execute(application_id)
    return GenerateRemindersResponse(
        application_id=result.application_id,
        reminders_created=result.reminders_created,
        created_ids=result.created_ids,
    )
