"""Recurrence pattern for repeating reminders."""

import calendar
import json
from datetime import date, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

INVALID_PATTERN_MESSAGE = "Invalid recurrence pattern"
INVALID_PATTERN_JSON_MESSAGE = "Invalid recurrence pattern (JSON error)"


class RecurrencePatternError(ValueError):
    """Raised when a stored or submitted recurrence pattern cannot be used."""


class RecurrenceType(str, Enum):
    """Period a recurring reminder repeats on."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RecurrencePattern(BaseModel):
    """
    Parsed recurrence rule.

    Stored as JSON text (``{"type": "weekly", "interval": 1}``) and
    parsed once when a reminder is loaded or submitted.
    """

    model_config = ConfigDict(frozen=True)

    type: RecurrenceType
    interval: int = Field(ge=1)
    end_date: date | None = None

    @classmethod
    def parse(cls, value: Any) -> "RecurrencePattern":
        """Build a pattern from JSON text, a mapping or an existing pattern."""
        if isinstance(value, RecurrencePattern):
            return value
        if isinstance(value, (str, bytes)):
            try:
                value = json.loads(value)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise RecurrencePatternError(INVALID_PATTERN_JSON_MESSAGE) from e
        if not isinstance(value, dict):
            raise RecurrencePatternError(INVALID_PATTERN_MESSAGE)
        try:
            return cls.model_validate(value)
        except PydanticValidationError as e:
            raise RecurrencePatternError(INVALID_PATTERN_MESSAGE) from e

    def to_json(self) -> str:
        """Serialize for storage."""
        return self.model_dump_json(exclude_none=True)

    def calculate_next(self, reference: date) -> date | None:
        """Return the occurrence after ``reference``, or None once past ``end_date``."""
        return calculate_next_occurrence(reference, self)


def add_months(value: date, months: int) -> date:
    """Shift by calendar months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def calculate_next_occurrence(
    reference: date, pattern: RecurrencePattern
) -> date | None:
    """
    Compute the next occurrence date for a recurrence pattern.

    ``end_date`` is inclusive: an occurrence falling on it is still produced.
    Monthly and yearly steps clamp to the last valid day of the target month,
    so Jan 31 + 1 month is Feb 29 in a leap year and Feb 28 otherwise.
    """
    kind = pattern.type
    if kind == RecurrenceType.DAILY:
        next_date = reference + timedelta(days=pattern.interval)
    elif kind == RecurrenceType.WEEKLY:
        next_date = reference + timedelta(days=7 * pattern.interval)
    elif kind == RecurrenceType.MONTHLY:
        next_date = add_months(reference, pattern.interval)
    elif kind == RecurrenceType.YEARLY:
        next_date = add_months(reference, 12 * pattern.interval)
    else:
        return None

    if pattern.end_date is not None and next_date > pattern.end_date:
        return None

    return next_date
