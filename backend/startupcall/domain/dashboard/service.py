"""Per-role dashboard figures. One block per role the actor holds, plus USER."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from startupcall.core.db.models import User
from startupcall.core.security.auth import Actor
from startupcall.domain.public.models import SponsorshipOpportunity
from startupcall.domain.startups.models import Review, Sponsorship, Startup
from startupcall.domain.startups.services.ordering import average_score, sum_amounts
from startupcall.shared.enums import OpportunityStatus, Role, StartupStatus
from startupcall.shared.utils import utcnow

_IN_REVIEW = (StartupStatus.SUBMITTED.value, StartupStatus.UNDER_REVIEW.value)


def _count(db: Session, stmt) -> int:
    return int(db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one())


def _open_opportunities(db: Session) -> int:
    now = utcnow()
    stmt = select(SponsorshipOpportunity.id).where(
        SponsorshipOpportunity.status == OpportunityStatus.OPEN.value,
        or_(SponsorshipOpportunity.deadline.is_(None), SponsorshipOpportunity.deadline >= now),
    )
    return _count(db, stmt)


def entrepreneur_stats(db: Session, actor_id: str) -> dict[str, Any]:
    mine = select(Startup.id).where(Startup.founder_actor_id == actor_id)
    return {
        "total_startups": _count(db, mine),
        "in_review": _count(db, mine.where(Startup.status.in_(_IN_REVIEW))),
        "accepted": _count(db, mine.where(Startup.status == StartupStatus.ACCEPTED.value)),
        "reviews_received": _count(db, select(Review.id).where(Review.startup_id.in_(mine))),
        "open_opportunities": _open_opportunities(db),
    }


def reviewer_stats(db: Session, actor_id: str) -> dict[str, Any]:
    reviews = list(db.execute(select(Review).where(Review.reviewer_actor_id == actor_id)).scalars().all())
    reviewed_ids = {r.startup_id for r in reviews}
    open_for_review = db.execute(select(Startup.id).where(Startup.status.in_(_IN_REVIEW))).scalars().all()

    month_start = utcnow().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    this_month = select(Review.id).where(Review.reviewer_actor_id == actor_id, Review.created_at >= month_start)
    return {
        "completed_reviews": len(reviews),
        "pending_reviews": sum(1 for sid in open_for_review if sid not in reviewed_ids),
        "average_score": average_score(reviews) or 0.0,
        "startups_reviewed": len(reviewed_ids),
        "reviews_this_month": _count(db, this_month),
    }


def sponsor_stats(db: Session, actor_id: str) -> dict[str, Any]:
    sponsorships = list(
        db.execute(select(Sponsorship).where(Sponsorship.sponsor_actor_id == actor_id)).scalars().all()
    )
    return {
        "sponsorships": len(sponsorships),
        "total_funded": str(sum_amounts(sponsorships)),
        "sponsored_startups": len({s.startup_id for s in sponsorships}),
        "open_opportunities": _open_opportunities(db),
    }


def admin_stats(db: Session) -> dict[str, Any]:
    by_status = dict(db.execute(select(Startup.status, func.count()).group_by(Startup.status)).all())
    sponsorships = db.execute(select(Sponsorship)).scalars().all()
    return {
        "total_users": _count(db, select(User.id)),
        "total_startups": _count(db, select(Startup.id)),
        "total_reviews": _count(db, select(Review.id)),
        "total_sponsors": _count(db, select(User.id).where(User.role == Role.SPONSOR.value)),
        "total_funding": str(sum_amounts(sponsorships)),
        "startups_by_status": {s.value: int(by_status.get(s.value, 0)) for s in StartupStatus},
    }


def user_stats(db: Session) -> dict[str, Any]:
    public = select(Startup.id).where(Startup.status != StartupStatus.DRAFT.value)
    return {
        "public_startups": _count(db, public),
        "accepted_startups": _count(db, public.where(Startup.status == StartupStatus.ACCEPTED.value)),
        "open_opportunities": _open_opportunities(db),
    }


def dashboard_stats(db: Session, *, actor: Actor) -> dict[str, Any]:
    stats: dict[str, Any] = {}
    if actor.has_role(Role.ENTREPRENEUR):
        stats[Role.ENTREPRENEUR.value] = entrepreneur_stats(db, actor.actor_id)
    if actor.has_role(Role.REVIEWER):
        stats[Role.REVIEWER.value] = reviewer_stats(db, actor.actor_id)
    if actor.has_role(Role.SPONSOR):
        stats[Role.SPONSOR.value] = sponsor_stats(db, actor.actor_id)
    if actor.has_role(Role.ADMIN):
        stats[Role.ADMIN.value] = admin_stats(db)
    stats["USER"] = user_stats(db)
    return stats
