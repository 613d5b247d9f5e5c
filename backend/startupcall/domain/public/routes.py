from __future__ import annotations

import datetime as dt
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.domain.public.models import Announcement, Event, SponsorshipOpportunity
from startupcall.domain.public.schemas import LatestUpdateOut, SponsorshipOpportunityOut
from startupcall.shared.enums import AnnouncementStatus, OpportunityStatus
from startupcall.shared.utils import as_utc, utcnow

router = APIRouter(prefix="/public", tags=["public"])

LATEST_UPDATES_LIMIT = 6
_PER_SOURCE_LIMIT = 5


def _is_open(opportunity: SponsorshipOpportunity, now: dt.datetime) -> bool:
    if opportunity.status != OpportunityStatus.OPEN.value:
        return False
    return opportunity.deadline is None or as_utc(opportunity.deadline) >= now


@router.get("/sponsorship-opportunities", response_model=list[SponsorshipOpportunityOut])
def list_open_opportunities(db: Session = Depends(get_db)):
    now = utcnow()
    rows = (
        db.query(SponsorshipOpportunity)
        .filter(
            SponsorshipOpportunity.status == OpportunityStatus.OPEN.value,
            or_(SponsorshipOpportunity.deadline.is_(None), SponsorshipOpportunity.deadline >= now),
        )
        .order_by(SponsorshipOpportunity.created_at.desc())
        .all()
    )
    return [o for o in rows if _is_open(o, now)]


@router.get("/sponsorship-opportunities/{opportunity_id}", response_model=SponsorshipOpportunityOut)
def get_open_opportunity(opportunity_id: uuid.UUID, db: Session = Depends(get_db)):
    opportunity = db.get(SponsorshipOpportunity, opportunity_id)
    if opportunity is None:
        raise HTTPException(status_code=404, detail="Sponsorship opportunity not found")
    if not _is_open(opportunity, utcnow()):
        raise HTTPException(status_code=403, detail="This sponsorship opportunity is not currently available")
    return opportunity


@router.get("/latest-updates", response_model=list[LatestUpdateOut])
def latest_updates(db: Session = Depends(get_db)) -> list[LatestUpdateOut]:
    start_of_day = utcnow().replace(hour=0, minute=0, second=0, microsecond=0)

    events = (
        db.query(Event)
        .filter(Event.start_date >= start_of_day)
        .order_by(Event.start_date.asc())
        .limit(_PER_SOURCE_LIMIT)
        .all()
    )
    announcements = (
        db.query(Announcement)
        .filter(Announcement.status == AnnouncementStatus.ACTIVE.value)
        .order_by(Announcement.created_at.desc())
        .limit(_PER_SOURCE_LIMIT)
        .all()
    )

    updates = [
        LatestUpdateOut(
            id=e.id,
            title=e.title,
            description=e.description,
            image_url=e.image_url,
            date=e.start_date,
            type="event",
            category=e.event_type,
            created_at=as_utc(e.created_at),
        )
        for e in events
    ] + [
        LatestUpdateOut(
            id=a.id,
            title=a.title,
            description=a.content,
            image_url=a.image_url,
            type="announcement",
            category="ANNOUNCEMENT",
            created_at=as_utc(a.created_at),
        )
        for a in announcements
    ]
    updates.sort(key=lambda u: u.created_at, reverse=True)
    return updates[:LATEST_UPDATES_LIMIT]
