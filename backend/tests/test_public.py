from __future__ import annotations

import datetime as dt

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from startupcall.domain.public.models import Announcement, Event, SponsorshipOpportunity
from startupcall.shared.utils import utcnow


def _opportunity(title: str, status: str = "OPEN", deadline: dt.datetime | None = None) -> SponsorshipOpportunity:
    return SponsorshipOpportunity(
        title=title, description=title, benefits=["Logo"], min_amount=100, max_amount=1000, status=status, deadline=deadline
    )


def test_only_open_future_opportunities_are_public(client: TestClient, db_session: Session):
    now = utcnow()
    open_future = _opportunity("future", deadline=now + dt.timedelta(days=5))
    open_no_deadline = _opportunity("no-deadline")
    expired = _opportunity("expired", deadline=now - dt.timedelta(days=1))
    closed = _opportunity("closed", status="CLOSED")
    db_session.add_all([open_future, open_no_deadline, expired, closed])
    db_session.commit()

    r = client.get("/api/public/sponsorship-opportunities")
    assert r.status_code == 200
    assert {o["title"] for o in r.json()} == {"future", "no-deadline"}

    assert client.get(f"/api/public/sponsorship-opportunities/{open_future.id}").status_code == 200
    assert client.get(f"/api/public/sponsorship-opportunities/{expired.id}").status_code == 403
    assert client.get(f"/api/public/sponsorship-opportunities/{closed.id}").status_code == 403
    r = client.get("/api/public/sponsorship-opportunities/00000000-0000-0000-0000-000000000000")
    assert r.status_code == 404


def test_latest_updates_merge_and_cap(client: TestClient, db_session: Session):
    now = utcnow()
    for i in range(5):
        db_session.add(
            Event(
                title=f"event-{i}",
                description="d",
                start_date=now + dt.timedelta(days=i + 1),
                created_at=now - dt.timedelta(hours=i * 2),
            )
        )
    for i in range(5):
        db_session.add(
            Announcement(
                title=f"news-{i}",
                content="c",
                status="ACTIVE",
                created_at=now - dt.timedelta(hours=i * 2 + 1),
            )
        )
    db_session.add(Announcement(title="draft", content="c", status="DRAFT", created_at=now))
    db_session.add(Event(title="past", description="d", start_date=now - dt.timedelta(days=3), created_at=now))
    db_session.commit()

    r = client.get("/api/public/latest-updates")
    assert r.status_code == 200
    body = r.json()
    assert len(body) == 6
    assert [u["title"] for u in body] == ["event-0", "news-0", "event-1", "news-1", "event-2", "news-2"]
    assert body[0]["type"] == "event"
    assert body[1]["category"] == "ANNOUNCEMENT"
