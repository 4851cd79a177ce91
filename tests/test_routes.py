"""
HTTP tests for the /api/v1 routes: status codes, error codes and ownership.
"""

from __future__ import annotations

from conftest import BOB

API = "/api/v1"
AS_BOB = {"X-User-Id": BOB}


def _create_template(client, name="Infusion Day", titles=("Hydrate", "Pre-meds"), headers=None) -> dict:
    response = client.post(
        f"{API}/templates",
        json={"name": name, "color": "#E57373", "tasks": [{"title": t} for t in titles]},
        headers=headers or {},
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "healthy"}
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["X-Frame-Options"] == "DENY"


def test_template_crud(client) -> None:
    created = _create_template(client)
    template_id = created["id"]
    assert [t["title"] for t in created["tasks"]] == ["Hydrate", "Pre-meds"]

    assert client.get(f"{API}/templates").json()[0]["id"] == template_id

    updated = client.put(f"{API}/templates/{template_id}", json={"name": "Chemo Day"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Chemo Day"

    replaced = client.put(f"{API}/templates/{template_id}/tasks", json={"tasks": [{"title": "Only"}]})
    assert [t["title"] for t in replaced.json()["tasks"]] == ["Only"]

    assert client.delete(f"{API}/templates/{template_id}").status_code == 204
    missing = client.get(f"{API}/templates/{template_id}")
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Template not found", "code": "not_found"}


def test_blank_template_name_is_422(client) -> None:
    response = client.post(f"{API}/templates", json={"name": "  ", "tasks": []})
    assert response.status_code == 422


def test_duplicate_task_order_is_validation_error(client) -> None:
    response = client.post(
        f"{API}/templates",
        json={"name": "Labs", "tasks": [{"title": "a", "order": 1}, {"title": "b", "order": 1}]},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_assign_unassign_flow(client) -> None:
    template_id = _create_template(client)["id"]
    client.post(f"{API}/tasks", json={"date": "2026-03-10", "title": "Call pharmacy"})

    assigned = client.post(f"{API}/templates/{template_id}/assign", json={"date": "2026-03-10"})
    assert assigned.status_code == 201
    assert assigned.json()["materialized_task_count"] == 2
    assert assigned.json()["date"] == "2026-03-10"

    again = client.post(f"{API}/templates/{template_id}/assign", json={"date": "2026-03-10"})
    assert again.status_code == 409
    assert again.json()["code"] == "already_assigned"

    day = client.get(f"{API}/tasks", params={"date": "2026-03-10"}).json()
    assert [t["source_type"] for t in day] == ["custom", "template", "template"]

    sections = client.get(f"{API}/tasks/sections", params={"date": "2026-03-10"}).json()
    assert [(s["title"], len(s["tasks"])) for s in sections] == [("My Tasks", 1), ("Infusion Day", 2)]

    calendar = client.get(
        f"{API}/templates/assigned-days", params={"start_date": "2026-03-01", "end_date": "2026-03-31"}
    ).json()
    assert [(a["date"], a["template"]["name"]) for a in calendar] == [("2026-03-10", "Infusion Day")]

    markers = client.get(
        f"{API}/templates/assigned-days/markers", params={"start_date": "2026-03-01", "end_date": "2026-03-31"}
    ).json()
    assert markers["days"]["2026-03-10"][0]["color"] == "#E57373"

    available = client.get(f"{API}/templates/available", params={"date": "2026-03-10"}).json()
    assert available == []

    assert client.post(f"{API}/templates/{template_id}/unassign", json={"date": "2026-03-10"}).status_code == 204
    gone = client.post(f"{API}/templates/{template_id}/unassign", json={"date": "2026-03-10"})
    assert gone.status_code == 404
    assert gone.json()["code"] == "not_assigned"

    day = client.get(f"{API}/tasks", params={"date": "2026-03-10"}).json()
    assert [t["title"] for t in day] == ["Call pharmacy"]


def test_assign_requires_date(client) -> None:
    template_id = _create_template(client)["id"]
    assert client.post(f"{API}/templates/{template_id}/assign", json={}).status_code == 422


def test_inverted_range_is_validation_error(client) -> None:
    response = client.get(
        f"{API}/templates/assigned-days", params={"start_date": "2026-03-31", "end_date": "2026-03-01"}
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_task_endpoints(client) -> None:
    created = client.post(f"{API}/tasks", json={"date": "2026-03-10", "title": "Call", "description": "refill"})
    assert created.status_code == 201
    task_id = created.json()["id"]

    toggled = client.patch(f"{API}/tasks/{task_id}/toggle")
    assert toggled.json()["is_completed"] is True

    updated = client.put(f"{API}/tasks/{task_id}", json={"title": "Call pharmacy"})
    assert updated.json()["title"] == "Call pharmacy"
    assert updated.json()["description"] == "refill"

    assert client.get(f"{API}/tasks/{task_id}").json()["is_completed"] is True
    assert client.delete(f"{API}/tasks/{task_id}").status_code == 204
    assert client.get(f"{API}/tasks/{task_id}").status_code == 404


def test_cross_user_access_is_not_found(client) -> None:
    template_id = _create_template(client)["id"]
    task_id = client.post(f"{API}/tasks", json={"date": "2026-03-10", "title": "Mine"}).json()["id"]

    assert client.get(f"{API}/templates/{template_id}", headers=AS_BOB).status_code == 404
    assert client.post(
        f"{API}/templates/{template_id}/assign", json={"date": "2026-03-10"}, headers=AS_BOB
    ).status_code == 404
    assert client.patch(f"{API}/tasks/{task_id}/toggle", headers=AS_BOB).status_code == 404
    assert client.get(f"{API}/templates", headers=AS_BOB).json() == []
    assert client.get(f"{API}/tasks", params={"date": "2026-03-10"}, headers=AS_BOB).json() == []
