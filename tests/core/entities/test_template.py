"""Unit tests for reminder templates."""

import json
from datetime import date

from src.core.entities.application import JobApplication
from src.core.entities.reminder import ReminderPriority, ReminderType
from src.core.entities.template import (
    ReminderTemplate,
    TriggerConditions,
    render_placeholders,
)

TODAY = date(2024, 1, 5)


def _application(**overrides) -> JobApplication:
    data = {
        "id": 3,
        "title": "Backend Engineer",
        "position": "Backend Engineer",
        "company_name": "Acme",
        "location": "Berlin",
        "status": "applied",
        "application_date": date(2024, 1, 1),
        "deadline": date(2024, 1, 20),
    }
    data.update(overrides)
    return JobApplication(**data)


def _template(conditions: dict, **overrides) -> ReminderTemplate:
    data = {
        "id": 1,
        "name": "Test template",
        "title_template": "Follow-up: {position}",
        "trigger_conditions": conditions,
        "is_system_template": True,
    }
    data.update(overrides)
    return ReminderTemplate(**data)


class TestRenderPlaceholders:
    def test_fills_known_placeholders(self):
        text = "{title} at {company} ({location}, {status}): {position}"
        assert render_placeholders(text, _application()) == (
            "Backend Engineer at Acme (Berlin, applied): Backend Engineer"
        )

    def test_missing_values_use_fallbacks(self):
        application = JobApplication(id=1)
        assert render_placeholders("{position} @ {company}", application) == (
            "Unknown Position @ Unknown Company"
        )

    def test_text_without_placeholders_unchanged(self):
        assert render_placeholders("Weekly review", _application()) == "Weekly review"


class TestTriggerConditions:
    def test_parsed_from_json_text(self):
        template = _template('{"days_after_application": 7}')
        assert template.trigger_conditions.days_after_application == 7

    def test_empty_conditions(self):
        assert _template("").trigger_conditions == TriggerConditions()
        assert _template(None).trigger_conditions == TriggerConditions()

    def test_unknown_keys_ignored(self):
        template = _template({"status": "interview", "colour": "blue"})
        assert template.trigger_conditions.status == "interview"

    def test_to_json_keeps_only_set_conditions(self):
        conditions = TriggerConditions(days_after_application=7)
        assert json.loads(conditions.to_json()) == {"days_after_application": 7}


class TestTemplateMatching:
    """Tests for ReminderTemplate.matches."""

    def test_empty_conditions_match_everything(self):
        assert _template({}).matches(_application())

    def test_status_must_match(self):
        template = _template({"status": "interview"})
        assert not template.matches(_application())
        assert template.matches(_application(status="interview"))

    def test_deadline_field_needs_deadline(self):
        template = _template({"deadline_field": True})
        assert template.matches(_application())
        assert not template.matches(_application(deadline=None))

    def test_days_before_deadline_needs_deadline(self):
        template = _template({"days_before_deadline": 3})
        assert not template.matches(_application(deadline=None))

    def test_days_after_application_needs_application_date(self):
        template = _template({"days_after_application": 7})
        assert template.matches(_application())
        assert not template.matches(_application(application_date=None))

    def test_days_after_interview_needs_interview_status(self):
        template = _template({"days_after_interview": 3})
        assert not template.matches(_application())
        assert template.matches(_application(status="interview"))


class TestTemplateScheduling:
    """Tests for ReminderTemplate.schedule_for."""

    def test_days_after_application(self):
        template = _template({"days_after_application": 7})
        assert template.schedule_for(_application(), TODAY) == date(2024, 1, 8)

    def test_days_before_deadline(self):
        template = _template({"days_before_deadline": 3})
        assert template.schedule_for(_application(), TODAY) == date(2024, 1, 17)

    def test_deadline_field(self):
        template = _template({"deadline_field": True})
        assert template.schedule_for(_application(), TODAY) == date(2024, 1, 20)

    def test_days_after_interview_counts_from_today(self):
        template = _template({"days_after_interview": 3})
        application = _application(status="interview")
        assert template.schedule_for(application, TODAY) == date(2024, 1, 8)

    def test_application_date_rule_wins_over_deadline(self):
        template = _template({"days_after_application": 2, "deadline_field": True})
        assert template.schedule_for(_application(), TODAY) == date(2024, 1, 3)

    def test_defaults_to_tomorrow(self):
        assert _template({}).schedule_for(_application(), TODAY) == date(2024, 1, 6)


class TestBuildReminderData:
    def test_builds_auto_generated_reminder(self):
        template = _template(
            {"days_after_application": 7},
            description_template="Follow up with {company}",
            reminder_type=ReminderType.FOLLOW_UP,
            default_priority=ReminderPriority.HIGH,
            default_notification_time=10080,
        )
        data = template.build_reminder_data(_application(), TODAY)

        assert data["application_id"] == 3
        assert data["title"] == "Follow-up: Backend Engineer"
        assert data["description"] == "Follow up with Acme"
        assert data["reminder_date"] == date(2024, 1, 8)
        assert data["reminder_type"] == ReminderType.FOLLOW_UP
        assert data["priority"] == ReminderPriority.HIGH
        assert data["notification_time"] == 10080
        assert data["auto_generated"] is True
        assert "recurrence_pattern" not in data

    def test_recurrence_condition_adds_pattern(self):
        template = _template({"recurrence": "weekly"}, title_template="Weekly review")
        data = template.build_reminder_data(_application(), TODAY)
        assert data["recurrence_pattern"] == {"type": "weekly", "interval": 1}
        assert data["description"] is None
