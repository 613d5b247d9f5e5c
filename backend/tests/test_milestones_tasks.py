from __future__ import annotations

import json

from fastapi.testclient import TestClient

from conftest import ADMIN, FOUNDER, OTHER_FOUNDER, REVIEWER, as_, dev_actor_header

MILESTONE = {"title": "MVP", "description": "First usable build", "due_date": "2026-06-01"}


def test_milestone_crud_by_founder(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    base = f"/api/startups/{startup_id}/milestones"

    r = client.post(base, json=MILESTONE, headers=as_(FOUNDER))
    assert r.status_code == 201
    milestone_id = r.json()["id"]
    assert r.json()["status"] == "PENDING"

    r = client.patch(f"{base}/{milestone_id}", json={"status": "IN_PROGRESS"}, headers=as_(FOUNDER))
    assert r.status_code == 200
    assert r.json()["status"] == "IN_PROGRESS"

    r = client.put(f"{base}/{milestone_id}", json={**MILESTONE, "title": "Beta"}, headers=as_(ADMIN))
    assert r.json()["title"] == "Beta"
    assert r.json()["status"] == "IN_PROGRESS"

    assert client.delete(f"{base}/{milestone_id}", headers=as_(FOUNDER)).status_code == 204
    assert client.get(f"{base}/{milestone_id}", headers=as_(FOUNDER)).status_code == 404


def test_milestone_access_rules(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    base = f"/api/startups/{startup_id}/milestones"
    client.post(base, json=MILESTONE, headers=as_(FOUNDER))

    assert client.post(base, json=MILESTONE, headers=as_(REVIEWER)).status_code == 403
    assert client.get(base, headers=as_(REVIEWER)).status_code == 200
    assert client.get(base, headers=as_(OTHER_FOUNDER)).status_code == 403

    client.patch(f"/api/startups/{startup_id}/status", json={"status": "ACCEPTED"}, headers=as_(ADMIN))
    assert len(client.get(base, headers=as_(OTHER_FOUNDER)).json()) == 1


def test_milestone_from_other_startup_is_404(client: TestClient, make_startup):
    first = make_startup("ACCEPTED")["id"]
    second = make_startup("ACCEPTED", name="Second")["id"]
    milestone_id = client.post(
        f"/api/startups/{first}/milestones", json=MILESTONE, headers=as_(FOUNDER)
    ).json()["id"]

    r = client.get(f"/api/startups/{second}/milestones/{milestone_id}", headers=as_(FOUNDER))
    assert r.status_code == 404
    assert r.json()["detail"] == "Milestone not found"


def _task(title: str, priority: str, due: str, **extra) -> dict:
    return {"title": title, "description": title, "priority": priority, "due_date": due, **extra}


def test_tasks_list_in_priority_order(client: TestClient, make_startup):
    startup_id = make_startup("ACCEPTED")["id"]
    base = f"/api/startups/{startup_id}/tasks"
    for payload in (
        _task("low", "LOW", "2026-01-01"),
        _task("high-late", "HIGH", "2026-09-01"),
        _task("high-early", "HIGH", "2026-02-01"),
        _task("medium", "MEDIUM", "2026-01-15"),
    ):
        assert client.post(base, json=payload, headers=as_(FOUNDER)).status_code == 201

    done = client.get(base, headers=as_(FOUNDER)).json()[0]["id"]
    client.patch(f"{base}/{done}", json={"status": "COMPLETED"}, headers=as_(FOUNDER))

    titles = [t["title"] for t in client.get(base, headers=as_(FOUNDER)).json()]
    assert titles == ["high-late", "medium", "low", "high-early"]


def test_assignee_can_update_status_but_not_edit(client: TestClient, make_startup):
    startup_id = make_startup("UNDER_REVIEW")["id"]
    base = f"/api/startups/{startup_id}/tasks"
    assignee = dev_actor_header("dev-7", ["ENTREPRENEUR"])

    task_id = client.post(
        base, json=_task("wire up CI", "HIGH", "2026-03-01", assignee_actor_id="dev-7"), headers=as_(FOUNDER)
    ).json()["id"]

    # Assignees see tasks before acceptance; strangers do not.
    assert client.get(base, headers=assignee).status_code == 200
    assert client.get(base, headers=as_(OTHER_FOUNDER)).status_code == 403

    r = client.patch(f"{base}/{task_id}", json={"status": "IN_PROGRESS"}, headers=assignee)
    assert r.status_code == 200
    assert r.json()["status"] == "IN_PROGRESS"

    assert client.put(f"{base}/{task_id}", json=_task("x", "LOW", "2026-03-01"), headers=assignee).status_code == 403
    assert client.delete(f"{base}/{task_id}", headers=assignee).status_code == 403
    assert client.patch(
        f"{base}/{task_id}", json={"status": "DONE"}, headers=as_(FOUNDER)
    ).status_code == 422


def test_team_member_can_read_tasks(client: TestClient, make_startup):
    startup_id = make_startup("SUBMITTED")["id"]
    client.post(
        f"/api/startups/{startup_id}/team",
        json={"name": "Dana", "email": "dana@acme.test", "role": "CTO", "user_actor_id": "dana"},
        headers=as_(FOUNDER),
    )
    r = client.get(f"/api/startups/{startup_id}/tasks", headers={"X-DEV-ACTOR": json.dumps({"actor_id": "dana"})})
    assert r.status_code == 200
