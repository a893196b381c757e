"""Unit tests for recurrence patterns."""

import json
from datetime import date, timedelta

import pytest

from src.core.entities.recurrence import (
    INVALID_PATTERN_JSON_MESSAGE,
    INVALID_PATTERN_MESSAGE,
    RecurrencePattern,
    RecurrencePatternError,
    RecurrenceType,
    add_months,
    calculate_next_occurrence,
)


class TestRecurrencePatternParse:
    """Tests for RecurrencePattern.parse."""

    def test_parse_json_text(self):
        """JSON text is decoded into a pattern."""
        pattern = RecurrencePattern.parse('{"type": "weekly", "interval": 2}')
        assert pattern.type == RecurrenceType.WEEKLY
        assert pattern.interval == 2
        assert pattern.end_date is None

    def test_parse_mapping_with_end_date(self):
        """Mappings are accepted and end_date is read as a date."""
        pattern = RecurrencePattern.parse(
            {"type": "monthly", "interval": 1, "end_date": "2024-12-31"}
        )
        assert pattern.type == RecurrenceType.MONTHLY
        assert pattern.end_date == date(2024, 12, 31)

    def test_parse_existing_pattern_returned_as_is(self):
        pattern = RecurrencePattern(type=RecurrenceType.DAILY, interval=1)
        assert RecurrencePattern.parse(pattern) is pattern

    def test_malformed_json_reports_json_error(self):
        with pytest.raises(RecurrencePatternError) as exc_info:
            RecurrencePattern.parse("{not json")
        assert str(exc_info.value) == INVALID_PATTERN_JSON_MESSAGE

    @pytest.mark.parametrize(
        "value",
        [
            {"type": "hourly", "interval": 1},
            {"type": "weekly", "interval": 0},
            {"type": "weekly"},
            {"interval": 1},
            ["weekly", 1],
            42,
        ],
    )
    def test_invalid_values_rejected(self, value):
        """Unknown type, non-positive interval and non-objects are rejected."""
        with pytest.raises(RecurrencePatternError) as exc_info:
            RecurrencePattern.parse(value)
        assert str(exc_info.value) == INVALID_PATTERN_MESSAGE

    def test_to_json_omits_missing_end_date(self):
        pattern = RecurrencePattern(type=RecurrenceType.WEEKLY, interval=1)
        assert json.loads(pattern.to_json()) == {"type": "weekly", "interval": 1}

    def test_to_json_parses_back(self):
        pattern = RecurrencePattern.parse(
            {"type": "yearly", "interval": 1, "end_date": "2030-01-01"}
        )
        assert RecurrencePattern.parse(pattern.to_json()) == pattern


class TestCalculateNextOccurrence:
    """Tests for next-occurrence date arithmetic."""

    def test_daily_interval(self):
        pattern = RecurrencePattern(type=RecurrenceType.DAILY, interval=3)
        assert pattern.calculate_next(date(2024, 1, 1)) == date(2024, 1, 4)

    def test_weekly(self):
        pattern = RecurrencePattern(type=RecurrenceType.WEEKLY, interval=1)
        assert pattern.calculate_next(date(2024, 1, 1)) == date(2024, 1, 8)

    def test_biweekly(self):
        pattern = RecurrencePattern(type=RecurrenceType.WEEKLY, interval=2)
        assert pattern.calculate_next(date(2024, 1, 1)) == date(2024, 1, 15)

    def test_monthly_clamps_to_leap_february(self):
        """Jan 31 + 1 month lands on Feb 29 in a leap year."""
        pattern = RecurrencePattern(type=RecurrenceType.MONTHLY, interval=1)
        assert pattern.calculate_next(date(2024, 1, 31)) == date(2024, 2, 29)

    def test_monthly_clamps_to_short_february(self):
        pattern = RecurrencePattern(type=RecurrenceType.MONTHLY, interval=1)
        assert pattern.calculate_next(date(2023, 1, 31)) == date(2023, 2, 28)

    def test_monthly_crosses_year(self):
        pattern = RecurrencePattern(type=RecurrenceType.MONTHLY, interval=3)
        assert pattern.calculate_next(date(2024, 11, 15)) == date(2025, 2, 15)

    def test_yearly_from_leap_day(self):
        pattern = RecurrencePattern(type=RecurrenceType.YEARLY, interval=1)
        assert pattern.calculate_next(date(2024, 2, 29)) == date(2025, 2, 28)

    def test_end_date_is_inclusive(self):
        """An occurrence falling exactly on end_date is still produced."""
        pattern = RecurrencePattern(
            type=RecurrenceType.WEEKLY, interval=1, end_date=date(2024, 1, 8)
        )
        assert calculate_next_occurrence(date(2024, 1, 1), pattern) == date(2024, 1, 8)

    def test_daily_end_date_boundary(self):
        start = date(2024, 3, 10)
        ends_today = RecurrencePattern(type=RecurrenceType.DAILY, interval=1, end_date=start)
        ends_tomorrow = RecurrencePattern(
            type=RecurrenceType.DAILY, interval=1, end_date=start + timedelta(days=1)
        )

        assert ends_today.calculate_next(start) is None
        assert ends_tomorrow.calculate_next(start) == date(2024, 3, 11)

    def test_past_end_date_ends_series(self):
        pattern = RecurrencePattern(
            type=RecurrenceType.WEEKLY, interval=1, end_date=date(2024, 1, 7)
        )
        assert calculate_next_occurrence(date(2024, 1, 1), pattern) is None


class TestAddMonths:
    """Tests for calendar month arithmetic."""

    def test_keeps_day_when_valid(self):
        assert add_months(date(2024, 3, 15), 1) == date(2024, 4, 15)

    def test_clamps_to_thirty_day_month(self):
        assert add_months(date(2024, 3, 31), 1) == date(2024, 4, 30)

    def test_twelve_months_is_one_year(self):
        assert add_months(date(2024, 6, 1), 12) == date(2025, 6, 1)
