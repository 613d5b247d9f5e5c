from __future__ import annotations

from fastapi.testclient import TestClient


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_request_id_is_echoed(client: TestClient):
    r = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"


def test_dev_seed_returns_actor_headers(client: TestClient):
    r = client.post("/admin/dev/seed", json={})
    assert r.status_code == 200
    body = r.json()
    assert body["dev_actor_header_name"] == "X-DEV-ACTOR"
    assert body["dev_actor_header_values"]["ADMIN"] == {"actor_id": "dev-admin", "roles": ["ADMIN"]}

    # Seeding twice does not duplicate users.
    assert client.post("/admin/dev/seed", json={"with_public_content": False}).status_code == 200


def test_request_id_is_generated_when_missing(client: TestClient):
    r = client.get("/api/public/latest-updates")
    assert len(r.headers["X-Request-ID"]) == 32
