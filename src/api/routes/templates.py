"""
Reminder template endpoints.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_reminders
from src.application.dto.requests import CreateReminderTemplateRequest
from src.application.dto.responses import (
    ErrorResponse,
    ReminderTemplateListResponse,
    ReminderTemplateResponse,
)
from src.core.entities.template import ReminderTemplate
from src.core.services import ReminderService

router = APIRouter(prefix="/api/reminder-templates", tags=["reminder-templates"])


def _template_to_response(template: ReminderTemplate) -> ReminderTemplateResponse:
    return ReminderTemplateResponse(
        id=template.id or 0,
        name=template.name,
        title_template=template.title_template,
        description_template=template.description_template,
        reminder_type=template.reminder_type.value,
        default_priority=template.default_priority.value,
        default_notification_time=template.default_notification_time,
        trigger_conditions=template.trigger_conditions.model_dump(
            mode="json", exclude_defaults=True
        ),
        is_system_template=template.is_system_template,
        created_at=template.created_at,
        updated_at=template.updated_at,
    )


@router.get("", response_model=ReminderTemplateListResponse)
async def list_templates(
    system_only: bool = False,
    service: ReminderService = Depends(get_reminders),
) -> ReminderTemplateListResponse:
    """List reminder templates ordered by name."""
    templates = await service.list_templates(system_only=system_only)
    return ReminderTemplateListResponse(
        templates=[_template_to_response(t) for t in templates],
        total=len(templates),
    )


@router.post(
    "",
    response_model=ReminderTemplateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_template(
    request: CreateReminderTemplateRequest,
    service: ReminderService = Depends(get_reminders),
) -> ReminderTemplateResponse:
    """Create a user template."""
    created = await service.create_template(request.model_dump())
    return _template_to_response(created)


@router.delete(
    "/{template_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_template(
    template_id: int,
    service: ReminderService = Depends(get_reminders),
) -> None:
    """Delete a user template. System templates cannot be deleted."""
    await service.delete_template(template_id)
