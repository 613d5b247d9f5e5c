from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.db.audit import write_audit_event
from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Review
from startupcall.domain.startups.schemas.reviews import ReviewCreate, ReviewUpdate
from startupcall.domain.startups.services import lifecycle
from startupcall.domain.startups.services.access import get_scoped, load_visible_startup, require
from startupcall.domain.startups.services.ordering import overall_score
from startupcall.domain.startups.services.startups import apply_status
from startupcall.shared.enums import StartupStatus
from startupcall.shared.exceptions import ValidationError
from startupcall.shared.utils import sa_model_to_dict


def _score(payload: ReviewCreate) -> float:
    return overall_score(payload.innovation_score, payload.market_score, payload.team_score, payload.execution_score)


def list_reviews(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[Review]:
    load_visible_startup(db, startup_id=startup_id, actor=actor)
    stmt = select(Review).where(Review.startup_id == startup_id).order_by(Review.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def get_review(db: Session, *, startup_id: uuid.UUID, review_id: uuid.UUID, actor: Actor) -> Review:
    load_visible_startup(db, startup_id=startup_id, actor=actor)
    return get_scoped(db, Review, startup_id=startup_id, entity_id=review_id, label="Review")


def create_review(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: ReviewCreate) -> Review:
    startup, flags = load_visible_startup(db, startup_id=startup_id, actor=actor)
    require(flags.is_reviewer or flags.is_admin, "Only reviewers can review startups")

    if startup.status not in {s.value for s in lifecycle.REVIEWABLE}:
        raise ValidationError("This startup is not open for review")

    existing = db.execute(
        select(Review.id).where(Review.startup_id == startup_id, Review.reviewer_actor_id == actor.actor_id)
    ).first()
    if existing is not None:
        raise ValidationError("You have already reviewed this startup")

    review = Review(
        startup_id=startup_id,
        reviewer_actor_id=actor.actor_id,
        score=_score(payload),
        innovation_score=payload.innovation_score,
        market_score=payload.market_score,
        team_score=payload.team_score,
        execution_score=payload.execution_score,
        feedback=payload.feedback,
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(review)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.review.create",
        entity_type="review",
        entity_id=review.id,
        before=None,
        after=sa_model_to_dict(review),
    )

    # The first review moves a submitted startup into review.
    if startup.status == StartupStatus.SUBMITTED.value:
        apply_status(
            db,
            startup,
            target=StartupStatus.UNDER_REVIEW,
            actor_id=actor.actor_id,
            rationale="First review received",
        )

    db.commit()
    db.refresh(review)
    return review


def update_review(
    db: Session, *, startup_id: uuid.UUID, review_id: uuid.UUID, actor: Actor, payload: ReviewUpdate
) -> Review:
    _, flags = load_visible_startup(db, startup_id=startup_id, actor=actor)
    review = get_scoped(db, Review, startup_id=startup_id, entity_id=review_id, label="Review")
    require(review.reviewer_actor_id == actor.actor_id or flags.is_admin, "You can only edit your own review")

    before = sa_model_to_dict(review)
    review.innovation_score = payload.innovation_score
    review.market_score = payload.market_score
    review.team_score = payload.team_score
    review.execution_score = payload.execution_score
    review.feedback = payload.feedback
    review.score = _score(payload)
    review.updated_by = actor.actor_id

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.review.update",
        entity_type="review",
        entity_id=review.id,
        before=before,
        after=sa_model_to_dict(review),
    )
    db.commit()
    db.refresh(review)
    return review


def delete_review(db: Session, *, startup_id: uuid.UUID, review_id: uuid.UUID, actor: Actor) -> None:
    _, flags = load_visible_startup(db, startup_id=startup_id, actor=actor)
    review = get_scoped(db, Review, startup_id=startup_id, entity_id=review_id, label="Review")
    require(review.reviewer_actor_id == actor.actor_id or flags.is_admin, "You can only delete your own review")

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.review.delete",
        entity_type="review",
        entity_id=review.id,
        before=sa_model_to_dict(review),
        after=None,
    )
    db.delete(review)
    db.commit()
