from __future__ import annotations

import os
import sys
import json
from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import Session, sessionmaker

# Make `backend/` importable regardless of pytest import mode.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from startupcall.core.config import settings
from startupcall.core.db.base import Base
from startupcall.core.db.session import get_db, import_model_modules
from startupcall.main import create_app
from startupcall.shared.enums import Env

# Ensure model modules are imported so Base.metadata is complete.
import_model_modules()

FOUNDER = ("founder-1", ["ENTREPRENEUR"])
OTHER_FOUNDER = ("founder-2", ["ENTREPRENEUR"])
REVIEWER = ("reviewer-1", ["REVIEWER"])
SECOND_REVIEWER = ("reviewer-2", ["REVIEWER"])
SPONSOR = ("sponsor-1", ["SPONSOR"])
ADMIN = ("admin-1", ["ADMIN"])


def dev_actor_header(actor_id: str, roles: list[str]) -> dict[str, str]:
    return {"X-DEV-ACTOR": json.dumps({"actor_id": actor_id, "roles": roles})}


def as_(who: tuple[str, list[str]]) -> dict[str, str]:
    return dev_actor_header(*who)


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False, class_=Session)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db_session: Session) -> TestClient:
    settings.env = Env.dev
    app = create_app()

    def _override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)


# Admin-driven path from DRAFT to each status.
_PATH = {
    "DRAFT": [],
    "SUBMITTED": ["SUBMITTED"],
    "UNDER_REVIEW": ["SUBMITTED", "UNDER_REVIEW"],
    "ACCEPTED": ["SUBMITTED", "UNDER_REVIEW", "ACCEPTED"],
    "REJECTED": ["SUBMITTED", "UNDER_REVIEW", "REJECTED"],
    "COMPLETED": ["SUBMITTED", "UNDER_REVIEW", "ACCEPTED", "COMPLETED"],
}


@pytest.fixture()
def make_startup(client: TestClient) -> Callable[..., dict]:
    """Create a startup as FOUNDER and walk it to ``status`` as ADMIN."""

    def _make(status: str = "DRAFT", *, founder: tuple[str, list[str]] = FOUNDER, name: str = "Acme Robotics") -> dict:
        r = client.post(
            "/api/startups",
            json={"name": name, "description": "Warehouse robots", "industries": ["Robotics", "AI"]},
            headers=as_(founder),
        )
        assert r.status_code == 201, r.text
        body = r.json()
        for target in _PATH[status]:
            r = client.patch(f"/api/startups/{body['id']}/status", json={"status": target}, headers=as_(ADMIN))
            assert r.status_code == 200, r.text
            body = r.json()
        return body

    return _make
