import pytest

from activity_planner.config import settings
from tests.conftest import MONDAY_1000


MONDAY_1000_ISO = MONDAY_1000.isoformat()
MONDAY_2000_ISO = "2026-10-19T20:00:00"


def _create_context(client, **overrides):
    payload = {
        "name": "work_hours",
        "label": "Test Context",
        "days": ["Mon"],
        "time_start": "09:00",
        "time_end": "17:00",
    }
    payload.update(overrides)
    response = client.post("/api/contexts", json=payload)
    assert response.status_code == 201
    return response.json()["id"]


def _create_activity(client, **overrides):
    payload = {"title": "Test Activity"}
    payload.update(overrides)
    response = client.post("/api/activities", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
def seeded(client):
    context_id = _create_context(client)
    urgent = _create_activity(client, title="Urgent", priority="urgent", energy_level="high", contexts=[context_id])
    someday = _create_activity(client, title="Someday", priority="someday", energy_level="high", contexts=[context_id])
    _create_activity(client, title="Unscheduled", priority="urgent")
    return {"context": context_id, "urgent": urgent, "someday": someday}


class TestSuggestions:
    def test_ranked_with_joined_reason(self, client, seeded):
        response = client.get(f"/api/suggestions?at={MONDAY_1000_ISO}")
        assert response.status_code == 200

        data = response.json()
        assert [(s["activity"]["id"], s["score"]) for s in data] == [(seeded["urgent"], 105), (seeded["someday"], 75)]
        assert data[0]["reason"] == "Contexto: Test Context • Must Do • Energía alta - ideal ahora"
        assert "reasons" not in data[0]

    def test_reason_list_variant(self, client, seeded):
        data = client.get(f"/api/suggestions?at={MONDAY_1000_ISO}&reasons=list").json()
        assert data[0]["reasons"] == ["Contexto: Test Context", "Must Do", "Energía alta - ideal ahora"]
        assert "reason" not in data[0]

    def test_limit(self, client, seeded):
        assert len(client.get(f"/api/suggestions?at={MONDAY_1000_ISO}&limit=1").json()) == 1
        assert client.get(f"/api/suggestions?at={MONDAY_1000_ISO}&limit=0").json() == []

    def test_nothing_scheduled_now(self, client, seeded):
        response = client.get(f"/api/suggestions?at={MONDAY_2000_ISO}")
        assert response.status_code == 200
        assert response.json() == []

    def test_category_filter(self, client, seeded):
        category_id = client.post("/api/categories", json={"name": "Ocio", "color": "#f59e0b"}).json()["id"]
        tagged = _create_activity(client, title="Tagged", category_id=category_id, contexts=[seeded["context"]])

        data = client.get(f"/api/suggestions?at={MONDAY_1000_ISO}&category={category_id}").json()
        assert [s["activity"]["id"] for s in data] == [tagged]

    def test_completed_one_off_is_not_suggested(self, client, seeded):
        assert client.post(f"/api/activities/{seeded['urgent']}/complete").status_code == 200

        data = client.get(f"/api/suggestions?at={MONDAY_1000_ISO}").json()
        assert [s["activity"]["id"] for s in data] == [seeded["someday"]]

    def test_store_computed_active_contexts(self, client, seeded, monkeypatch):
        monkeypatch.setattr(settings, "active_context_source", "store")
        data = client.get(f"/api/suggestions?at={MONDAY_1000_ISO}").json()
        assert [s["score"] for s in data] == [105, 75]

    def test_invalid_reasons_variant(self, client):
        assert client.get("/api/suggestions?reasons=csv").status_code == 422


class TestActivities:
    def test_list_wraps_data(self, client, seeded):
        body = client.get("/api/activities").json()
        assert body["success"] is True
        assert [a["title"] for a in body["data"]] == ["Unscheduled", "Urgent", "Someday"]

    def test_list_filters(self, client, seeded):
        body = client.get("/api/activities?priority=someday").json()
        assert [a["title"] for a in body["data"]] == ["Someday"]
        assert client.get("/api/activities?energy=extreme").status_code == 422

    def test_list_by_time_of_day(self, client):
        morning_slot = {"day_of_week": "Mon", "time_start": "08:00", "time_end": "10:00"}
        evening_slot = {"day_of_week": "Mon", "time_start": "20:00", "time_end": "22:00"}
        _create_activity(client, title="Morning Activity", priority="urgent", time_slots=[morning_slot])
        _create_activity(client, title="Evening Activity", priority="urgent", time_slots=[evening_slot])

        body = client.get("/api/activities?time_of_day=morning").json()
        assert [a["title"] for a in body["data"]] == ["Morning Activity"]

        body = client.get("/api/activities?time_of_day=evening").json()
        assert [a["title"] for a in body["data"]] == ["Evening Activity"]

        assert client.get("/api/activities?time_of_day=brunch").status_code == 422

    def test_get_one(self, client, seeded):
        body = client.get(f"/api/activities/{seeded['urgent']}").json()
        assert body["data"]["contexts"][0]["label"] == "Test Context"
        assert body["data"]["completions_count"] == 0

    def test_get_missing(self, client):
        response = client.get("/api/activities/999")
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    def test_blank_title_rejected(self, client):
        assert client.post("/api/activities", json={"title": "   "}).status_code == 422

    def test_malformed_slot_rejected(self, client):
        response = client.post("/api/activities", json={
            "title": "Leer",
            "time_slots": [{"time_start": "9:00", "time_end": "10:00"}],
        })
        assert response.status_code == 422

    def test_unknown_context_is_404(self, client):
        assert client.post("/api/activities", json={"title": "Leer", "contexts": [77]}).status_code == 404

    def test_update_and_delete(self, client, seeded):
        response = client.put(f"/api/activities/{seeded['someday']}", json={"priority": "important"})
        assert response.status_code == 200
        assert client.get(f"/api/activities/{seeded['someday']}").json()["data"]["priority"] == "important"

        assert client.delete(f"/api/activities/{seeded['someday']}").status_code == 200
        assert client.get(f"/api/activities/{seeded['someday']}").status_code == 404
        assert client.delete(f"/api/activities/{seeded['someday']}").status_code == 404

    def test_recurring_without_type_is_400(self, client, seeded):
        response = client.put(f"/api/activities/{seeded['someday']}", json={"is_recurring": True})
        assert response.status_code == 400

    def test_complete_with_notes_and_history(self, client):
        activity_id = _create_activity(client, title="Regar", is_recurring=True, recurrence_type="daily")
        response = client.post(f"/api/activities/{activity_id}/complete", json={"notes": "Todas"})
        assert response.status_code == 200

        history = client.get(f"/api/activities/{activity_id}/completions").json()
        assert [c["notes"] for c in history] == ["Todas"]
        assert client.get(f"/api/activities/{activity_id}").json()["data"]["is_completed"] is False

    def test_complete_missing_activity(self, client):
        assert client.post("/api/activities/999/complete").status_code == 404

    def test_toggle(self, client, seeded):
        body = client.post(f"/api/activities/{seeded['urgent']}/toggle").json()
        assert body == {"success": True, "is_completed": True}


class TestContexts:
    def test_list_all_and_active(self, client, monkeypatch):
        _create_context(client)
        _create_context(client, name="weekend", label="Fin de semana", days=["Sat", "Sun"], time_start=None, time_end=None)
        monkeypatch.setattr("activity_planner.api.contexts.current_moment", lambda: MONDAY_1000)

        assert [c["name"] for c in client.get("/api/contexts").json()] == ["weekend", "work_hours"]
        assert [c["name"] for c in client.get("/api/contexts?active=true").json()] == ["work_hours"]

    def test_duplicate_name_conflicts(self, client):
        _create_context(client)
        response = client.post("/api/contexts", json={"name": "work_hours", "label": "Otra"})
        assert response.status_code == 409

    def test_single_bound_rejected(self, client):
        response = client.post("/api/contexts", json={"name": "x", "label": "X", "time_start": "09:00"})
        assert response.status_code == 422

    def test_update_and_delete(self, client):
        context_id = _create_context(client)
        assert client.put(f"/api/contexts/{context_id}", json={"label": "Oficina"}).status_code == 200
        assert client.get("/api/contexts").json()[0]["label"] == "Oficina"
        assert client.delete(f"/api/contexts/{context_id}").status_code == 200
        assert client.put(f"/api/contexts/{context_id}", json={"label": "x"}).status_code == 404


class TestCategories:
    def test_crud(self, client):
        response = client.post("/api/categories", json={"name": "Social", "color": "#3b82f6", "icon": "users"})
        assert response.status_code == 201
        category_id = response.json()["id"]

        assert client.put(f"/api/categories/{category_id}", json={"color": "#000000"}).status_code == 200
        assert client.get("/api/categories").json() == [
            {"id": category_id, "name": "Social", "color": "#000000", "icon": "users"}
        ]
        assert client.delete(f"/api/categories/{category_id}").status_code == 200
        assert client.delete(f"/api/categories/{category_id}").status_code == 404

    def test_missing_color(self, client):
        assert client.post("/api/categories", json={"name": "Social", "color": " "}).status_code == 422


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
