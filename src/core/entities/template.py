"""
Reminder template entity.

Templates describe reminders that are generated automatically from an
application's fields: a title/description with placeholders plus trigger
conditions deciding whether and when the reminder applies.
"""

import json
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.entities.application import JobApplication
from src.core.entities.recurrence import RecurrenceType
from src.core.entities.reminder import (
    MAX_NOTIFICATION_MINUTES,
    ReminderPriority,
    ReminderType,
)

INTERVIEW_STATUS = "interview"


class TriggerConditions(BaseModel):
    """Conditions under which a template produces a reminder."""

    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    deadline_field: bool = False
    days_after_application: int | None = Field(default=None, ge=0)
    days_before_deadline: int | None = Field(default=None, ge=0)
    days_after_interview: int | None = Field(default=None, ge=0)
    recurrence: RecurrenceType | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_defaults=True)


def render_placeholders(text: str, application: JobApplication) -> str:
    """Fill ``{position}``, ``{company}``, ``{title}``, ``{location}`` and ``{status}``."""
    replacements = {
        "{position}": application.position or "Unknown Position",
        "{company}": application.company_name or "Unknown Company",
        "{title}": application.title or application.position or "Unknown",
        "{location}": application.location or "",
        "{status}": application.status or "",
    }
    for placeholder, value in replacements.items():
        text = text.replace(placeholder, value)
    return text


class ReminderTemplate(BaseModel):
    """Template for quick or automatic reminder creation."""

    id: int | None = None
    name: str = Field(min_length=1)
    title_template: str = Field(min_length=1)
    description_template: str | None = None
    reminder_type: ReminderType = ReminderType.CUSTOM
    default_priority: ReminderPriority = ReminderPriority.MEDIUM
    default_notification_time: int = Field(default=60, ge=0, le=MAX_NOTIFICATION_MINUTES)
    trigger_conditions: TriggerConditions = Field(default_factory=TriggerConditions)
    is_system_template: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("trigger_conditions", mode="before")
    @classmethod
    def _parse_conditions(cls, v: Any) -> Any:
        if v is None or v == "":
            return {}
        if isinstance(v, str):
            return json.loads(v)
        return v

    def matches(self, application: JobApplication) -> bool:
        """Check whether the application satisfies every trigger condition."""
        conditions = self.trigger_conditions

        if conditions.status and application.status != conditions.status:
            return False

        if (
            conditions.deadline_field or conditions.days_before_deadline is not None
        ) and application.deadline is None:
            return False

        if (
            conditions.days_after_application is not None
            and application.application_date is None
        ):
            return False

        if (
            conditions.days_after_interview is not None
            and application.status != INTERVIEW_STATUS
        ):
            return False

        return True

    def schedule_for(self, application: JobApplication, today: date) -> date:
        """Pick the reminder date; the first applicable rule wins, else tomorrow."""
        conditions = self.trigger_conditions

        if conditions.days_after_application is not None and application.application_date:
            return application.application_date + timedelta(
                days=conditions.days_after_application
            )

        if conditions.days_before_deadline is not None and application.deadline:
            return application.deadline - timedelta(
                days=conditions.days_before_deadline or 1
            )

        if conditions.deadline_field and application.deadline:
            return application.deadline

        if conditions.days_after_interview is not None:
            return today + timedelta(days=conditions.days_after_interview)

        return today + timedelta(days=1)

    def build_reminder_data(self, application: JobApplication, today: date) -> dict[str, Any]:
        """Reminder data for an auto-generated reminder bound to the application."""
        data: dict[str, Any] = {
            "application_id": application.id,
            "title": render_placeholders(self.title_template, application),
            "description": (
                render_placeholders(self.description_template, application)
                if self.description_template
                else None
            ),
            "reminder_date": self.schedule_for(application, today),
            "reminder_type": self.reminder_type,
            "priority": self.default_priority,
            "notification_time": self.default_notification_time,
            "auto_generated": True,
        }
        if self.trigger_conditions.recurrence is not None:
            data["recurrence_pattern"] = {
                "type": self.trigger_conditions.recurrence.value,
                "interval": 1,
            }
        return data
