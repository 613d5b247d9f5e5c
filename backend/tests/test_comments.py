from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import ADMIN, FOUNDER, REVIEWER, SPONSOR, as_


def test_comment_threads(client: TestClient, make_startup):
    startup_id = make_startup("SUBMITTED")["id"]
    base = f"/api/startups/{startup_id}/comments"

    root = client.post(base, json={"content": "Great idea"}, headers=as_(REVIEWER))
    assert root.status_code == 201
    root_id = root.json()["id"]

    reply = client.post(base, json={"content": "Thanks!", "parent_id": root_id}, headers=as_(FOUNDER))
    assert reply.status_code == 201
    assert reply.json()["parent_id"] == root_id

    nested = client.post(base, json={"content": "Nested", "parent_id": reply.json()["id"]}, headers=as_(SPONSOR))
    assert nested.status_code == 400

    missing = client.post(
        base, json={"content": "?", "parent_id": "00000000-0000-0000-0000-000000000000"}, headers=as_(SPONSOR)
    )
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Parent comment not found"


def test_parent_must_belong_to_same_startup(client: TestClient, make_startup):
    first = make_startup("SUBMITTED")["id"]
    second = make_startup("SUBMITTED", name="Second")["id"]
    root_id = client.post(
        f"/api/startups/{first}/comments", json={"content": "hi"}, headers=as_(REVIEWER)
    ).json()["id"]

    r = client.post(
        f"/api/startups/{second}/comments", json={"content": "x", "parent_id": root_id}, headers=as_(REVIEWER)
    )
    assert r.status_code == 404


def test_comment_delete_author_or_admin_removes_replies(client: TestClient, make_startup):
    startup_id = make_startup("SUBMITTED")["id"]
    base = f"/api/startups/{startup_id}/comments"
    root_id = client.post(base, json={"content": "Root"}, headers=as_(REVIEWER)).json()["id"]
    client.post(base, json={"content": "Reply", "parent_id": root_id}, headers=as_(FOUNDER))

    assert client.delete(f"{base}/{root_id}", headers=as_(FOUNDER)).status_code == 403
    assert client.delete(f"{base}/{root_id}", headers=as_(ADMIN)).status_code == 204
    assert client.get(base, headers=as_(FOUNDER)).json() == []


def test_draft_discussion_is_private(client: TestClient, make_startup):
    startup_id = make_startup()["id"]
    r = client.post(f"/api/startups/{startup_id}/comments", json={"content": "hi"}, headers=as_(REVIEWER))
    assert r.status_code == 403
