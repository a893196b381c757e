"""
Reminder management endpoints.

Business-rule violations surface as 400 with every message in
``details.errors``; unknown IDs as 404.
"""

from datetime import date, datetime

from fastapi import APIRouter, Body, Depends, Query, status

from src.api.dependencies import get_reminders
from src.application.dto.requests import (
    CompleteReminderRequest,
    CreateReminderRequest,
    LogNotificationRequest,
    SnoozeReminderRequest,
    UpdateReminderRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    NotificationHistoryResponse,
    NotificationRecordResponse,
    ReminderListResponse,
    ReminderResponse,
    ReminderStatsResponse,
)
from src.core.entities.notification import NotificationRecord
from src.core.entities.reminder import (
    Reminder,
    ReminderFilter,
    ReminderPriority,
    ReminderType,
)
from src.core.services import ReminderService

router = APIRouter(prefix="/api/reminders", tags=["reminders"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_INVALID = {400: {"model": ErrorResponse}}


def _entity_to_response(reminder: Reminder, now: datetime | None = None) -> ReminderResponse:
    """Convert entity to response DTO, evaluating derived state at ``now``."""
    now = now or datetime.now()
    return ReminderResponse(
        id=reminder.id or 0,
        application_id=reminder.application_id,
        title=reminder.title,
        description=reminder.description,
        reminder_date=reminder.reminder_date,
        reminder_time=reminder.reminder_time,
        reminder_type=reminder.reminder_type.value,
        priority=reminder.priority.value,
        is_completed=reminder.is_completed,
        completed_at=reminder.completed_at,
        completion_note=reminder.completion_note,
        is_active=reminder.is_active,
        deleted_at=reminder.deleted_at,
        email_notification_enabled=reminder.email_notification_enabled,
        notification_time=reminder.notification_time,
        recurrence_pattern=(
            reminder.recurrence_pattern.model_dump(mode="json", exclude_none=True)
            if reminder.recurrence_pattern
            else None
        ),
        parent_reminder_id=reminder.parent_reminder_id,
        auto_generated=reminder.auto_generated,
        snooze_until=reminder.snooze_until,
        sync_status=reminder.sync_status.value,
        sync_version=reminder.sync_version,
        created_at=reminder.created_at,
        updated_at=reminder.updated_at,
        is_overdue=reminder.is_overdue(now),
        is_due_today=reminder.is_due_today(now),
        is_snoozed=reminder.is_snoozed(now),
        days_until_due=reminder.days_until_due(now),
        notification_at=reminder.notification_datetime(now),
    )


def _list_response(reminders: list[Reminder]) -> ReminderListResponse:
    now = datetime.now()
    return ReminderListResponse(
        reminders=[_entity_to_response(r, now) for r in reminders],
        total=len(reminders),
    )


def _record_to_response(record: NotificationRecord) -> NotificationRecordResponse:
    return NotificationRecordResponse(
        id=record.id or 0,
        reminder_id=record.reminder_id,
        channel=record.channel.value,
        status=record.status.value,
        recipient=record.recipient,
        error_message=record.error_message,
        sent_at=record.sent_at,
    )


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
)
async def create_reminder(
    request: CreateReminderRequest,
    service: ReminderService = Depends(get_reminders),
) -> ReminderResponse:
    """Create a new reminder."""
    created = await service.create(request.model_dump(exclude_none=True))
    return _entity_to_response(created)


@router.get("", response_model=ReminderListResponse)
async def list_reminders(
    application_id: int | None = None,
    completed: bool | None = None,
    priority: ReminderPriority | None = None,
    reminder_type: ReminderType | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    overdue: bool = False,
    exclude_snoozed: bool = False,
    include_deleted: bool = False,
    limit: int | None = Query(default=None, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    service: ReminderService = Depends(get_reminders),
) -> ReminderListResponse:
    """List reminders ordered by date, then time (all-day first)."""
    reminders = await service.list_reminders(
        ReminderFilter(
            application_id=application_id,
            completed=completed,
            priority=priority,
            reminder_type=reminder_type,
            date_from=date_from,
            date_to=date_to,
            overdue=overdue,
            exclude_snoozed=exclude_snoozed,
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
        )
    )
    return _list_response(reminders)


@router.get("/upcoming", response_model=ReminderListResponse)
async def list_upcoming_reminders(
    days: int | None = Query(default=None, ge=0, le=366),
    service: ReminderService = Depends(get_reminders),
) -> ReminderListResponse:
    """Open reminders from today through the next ``days`` days."""
    return _list_response(await service.get_upcoming(days))


@router.get("/overdue", response_model=ReminderListResponse)
async def list_overdue_reminders(
    service: ReminderService = Depends(get_reminders),
) -> ReminderListResponse:
    return _list_response(await service.get_overdue_reminders())


@router.get("/today", response_model=ReminderListResponse)
async def list_today_reminders(
    service: ReminderService = Depends(get_reminders),
) -> ReminderListResponse:
    return _list_response(await service.get_today_reminders())


@router.get("/notifications/due", response_model=ReminderListResponse)
async def list_reminders_needing_notification(
    service: ReminderService = Depends(get_reminders),
) -> ReminderListResponse:
    """Reminders whose notification time has passed; polled by the notifier."""
    return _list_response(await service.get_reminders_needing_notification())


@router.get("/stats", response_model=ReminderStatsResponse)
async def reminder_stats(
    service: ReminderService = Depends(get_reminders),
) -> ReminderStatsResponse:
    stats = await service.get_stats()
    return ReminderStatsResponse(**stats.model_dump())


@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses=_NOT_FOUND,
)
async def get_reminder(
    reminder_id: int,
    service: ReminderService = Depends(get_reminders),
) -> ReminderResponse:
    """Get a reminder by ID."""
    return _entity_to_response(await service.get(reminder_id))


@router.api_route(
    "/{reminder_id}",
    methods=["PUT", "PATCH"],
    response_model=ReminderResponse,
    responses={**_NOT_FOUND, **_INVALID},
)
async def update_reminder(
    reminder_id: int,
    request: UpdateReminderRequest,
    service: ReminderService = Depends(get_reminders),
) -> ReminderResponse:
    """Update the fields present in the body; others are left unchanged."""
    updated = await service.update(reminder_id, request.model_dump(exclude_unset=True))
    return _entity_to_response(updated)


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
)
async def delete_reminder(
    reminder_id: int,
    hard: bool = False,
    service: ReminderService = Depends(get_reminders),
) -> None:
    """Soft-delete a reminder, or remove it permanently with ``?hard=true``."""
    if hard:
        await service.hard_delete(reminder_id)
    else:
        await service.delete(reminder_id)


@router.post(
    "/{reminder_id}/restore",
    response_model=ReminderResponse,
    responses=_NOT_FOUND,
)
async def restore_reminder(
    reminder_id: int,
    service: ReminderService = Depends(get_reminders),
) -> ReminderResponse:
    return _entity_to_response(await service.restore(reminder_id))


@router.post(
    "/{reminder_id}/complete",
    response_model=ReminderResponse,
    responses=_NOT_FOUND,
)
async def complete_reminder(
    reminder_id: int,
    request: CompleteReminderRequest | None = Body(default=None),
    service: ReminderService = Depends(get_reminders),
) -> ReminderResponse:
    """Complete a reminder; recurring ones get their next occurrence created."""
    note = request.note if request else None
    return _entity_to_response(await service.complete(reminder_id, note))


@router.post(
    "/{reminder_id}/reopen",
    response_model=ReminderResponse,
    responses=_NOT_FOUND,
)
async def reopen_reminder(
    reminder_id: int,
    service: ReminderService = Depends(get_reminders),
) -> ReminderResponse:
    return _entity_to_response(await service.reopen(reminder_id))


@router.post(
    "/{reminder_id}/snooze",
    response_model=ReminderResponse,
    responses={**_NOT_FOUND, **_INVALID},
)
async def snooze_reminder(
    reminder_id: int,
    request: SnoozeReminderRequest | None = Body(default=None),
    service: ReminderService = Depends(get_reminders),
) -> ReminderResponse:
    hours = request.hours if request else None
    return _entity_to_response(await service.snooze(reminder_id, hours))


@router.post(
    "/{reminder_id}/unsnooze",
    response_model=ReminderResponse,
    responses=_NOT_FOUND,
)
async def unsnooze_reminder(
    reminder_id: int,
    service: ReminderService = Depends(get_reminders),
) -> ReminderResponse:
    return _entity_to_response(await service.unsnooze(reminder_id))


@router.get(
    "/{reminder_id}/notifications",
    response_model=NotificationHistoryResponse,
    responses=_NOT_FOUND,
)
async def get_notification_history(
    reminder_id: int,
    service: ReminderService = Depends(get_reminders),
) -> NotificationHistoryResponse:
    """Notification history, newest first."""
    records = await service.get_notification_history(reminder_id)
    return NotificationHistoryResponse(
        reminder_id=reminder_id,
        notifications=[_record_to_response(r) for r in records],
        total=len(records),
    )


@router.post(
    "/{reminder_id}/notifications",
    response_model=NotificationRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_NOT_FOUND,
)
async def log_notification(
    reminder_id: int,
    request: LogNotificationRequest,
    service: ReminderService = Depends(get_reminders),
) -> NotificationRecordResponse:
    """Record a notification attempt for a reminder."""
    record = await service.log_notification(
        reminder_id,
        request.channel,
        request.status,
        recipient=request.recipient,
        error_message=request.error_message,
    )
    return _record_to_response(record)
