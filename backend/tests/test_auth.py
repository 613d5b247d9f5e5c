from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import FOUNDER, REVIEWER, as_
from startupcall.core.config import settings
from startupcall.shared.enums import Env


def test_missing_actor_is_unauthenticated(client: TestClient):
    r = client.get("/api/startups")
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated"


def test_malformed_dev_header_is_unauthenticated(client: TestClient):
    r = client.get("/api/startups", headers={"X-DEV-ACTOR": "not-json"})
    assert r.status_code == 401


def test_dev_header_ignored_in_prod(client: TestClient, monkeypatch):
    monkeypatch.setattr(settings, "env", Env.prod)
    r = client.get("/api/startups", headers=as_(FOUNDER))
    assert r.status_code == 401


def test_create_startup_requires_entrepreneur_role(client: TestClient):
    r = client.post("/api/startups", json={"name": "Nope"}, headers=as_(REVIEWER))
    assert r.status_code == 403
    assert r.json()["detail"] == "Insufficient role"
