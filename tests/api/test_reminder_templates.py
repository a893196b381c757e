"""API tests for reminder template endpoints."""

from httpx import AsyncClient

TEMPLATE = {
    "name": "Networking Coffee",
    "title_template": "Coffee with someone at {company}",
    "reminder_type": "follow_up",
    "default_priority": "low",
    "trigger_conditions": {"days_after_application": 14},
}


class TestReminderTemplates:
    async def test_list_system_templates(self, client: AsyncClient):
        response = await client.get("/api/reminder-templates", params={"system_only": True})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 5
        assert all(t["is_system_template"] for t in data["templates"])
        deadline = next(t for t in data["templates"] if t["name"] == "Application Deadline")
        assert deadline["trigger_conditions"] == {"deadline_field": True}
        assert deadline["default_notification_time"] == 1440

    async def test_create_user_template(self, client: AsyncClient):
        response = await client.post(
            "/api/reminder-templates", json={**TEMPLATE, "is_system_template": True}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["is_system_template"] is False
        assert data["trigger_conditions"] == {"days_after_application": 14}

        listed = await client.get("/api/reminder-templates")
        assert listed.json()["total"] == 6

    async def test_invalid_template(self, client: AsyncClient):
        response = await client.post(
            "/api/reminder-templates",
            json={**TEMPLATE, "trigger_conditions": {"days_after_application": -1}},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_delete_user_template(self, client: AsyncClient):
        created = (await client.post("/api/reminder-templates", json=TEMPLATE)).json()

        response = await client.delete(f"/api/reminder-templates/{created['id']}")

        assert response.status_code == 204
        listed = await client.get("/api/reminder-templates")
        assert created["id"] not in [t["id"] for t in listed.json()["templates"]]

    async def test_system_template_cannot_be_deleted(self, client: AsyncClient):
        templates = (await client.get("/api/reminder-templates")).json()["templates"]
        system_id = next(t["id"] for t in templates if t["is_system_template"])

        response = await client.delete(f"/api/reminder-templates/{system_id}")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_delete_missing_template(self, client: AsyncClient):
        response = await client.delete("/api/reminder-templates/9999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "TEMPLATE_NOT_FOUND"
