from __future__ import annotations

import uuid

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from startupcall.core.db.audit import write_audit_event
from startupcall.core.middleware.audit import get_logger
from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Startup, StartupStatusHistory
from startupcall.domain.startups.schemas.detail import StartupDetailOut
from startupcall.domain.startups.schemas.startups import StartupCreate, StartupStatusPatch, StartupUpdate
from startupcall.domain.startups.services import lifecycle
from startupcall.domain.startups.services.access import get_startup, load_visible_startup, require, roles_for
from startupcall.shared.enums import StartupStatus
from startupcall.shared.utils import sa_model_to_dict

logger = get_logger()

_NON_NULLABLE = {"name", "industries", "funding_stage"}


def list_startups(
    db: Session,
    *,
    actor: Actor,
    limit: int,
    offset: int,
    status: StartupStatus | None = None,
    mine: bool = False,
) -> list[Startup]:
    stmt = select(Startup)
    if mine:
        stmt = stmt.where(Startup.founder_actor_id == actor.actor_id)
    elif not actor.is_admin:
        # Drafts are private to their founder.
        stmt = stmt.where(
            or_(Startup.status != StartupStatus.DRAFT.value, Startup.founder_actor_id == actor.actor_id)
        )
    if status is not None:
        stmt = stmt.where(Startup.status == status.value)
    stmt = stmt.order_by(Startup.created_at.desc()).offset(offset).limit(limit)
    return list(db.execute(stmt).scalars().all())


def get_startup_detail(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> StartupDetailOut:
    startup, flags = load_visible_startup(db, startup_id=startup_id, actor=actor)
    detail = StartupDetailOut.model_validate(startup)
    if not (flags.can_manage or flags.is_sponsor):
        detail.sponsorships = []
    return detail


def create_startup(db: Session, *, actor: Actor, payload: StartupCreate) -> Startup:
    startup = Startup(
        name=payload.name,
        description=payload.description,
        pitch=payload.pitch,
        website=payload.website,
        industries=payload.industries,
        funding_stage=payload.funding_stage.value,
        status=StartupStatus.DRAFT.value,
        founder_actor_id=actor.actor_id,
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(startup)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup.id,
        actor_id=actor.actor_id,
        action="startups.startup.create",
        entity_type="startup",
        entity_id=startup.id,
        before=None,
        after=sa_model_to_dict(startup),
    )
    db.commit()
    db.refresh(startup)
    return startup


def update_startup(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: StartupUpdate) -> Startup:
    startup = get_startup(db, startup_id)
    require(roles_for(actor, startup).can_manage, "You do not have permission to update this startup")

    before = sa_model_to_dict(startup)
    data = payload.model_dump(exclude_unset=True)
    if "funding_stage" in data and data["funding_stage"] is not None:
        data["funding_stage"] = data["funding_stage"].value
    for key, value in data.items():
        if value is None and key in _NON_NULLABLE:
            continue
        setattr(startup, key, value)
    startup.updated_by = actor.actor_id

    write_audit_event(
        db,
        startup_id=startup.id,
        actor_id=actor.actor_id,
        action="startups.startup.update",
        entity_type="startup",
        entity_id=startup.id,
        before=before,
        after=sa_model_to_dict(startup),
    )
    db.commit()
    db.refresh(startup)
    return startup


def delete_startup(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> None:
    startup = get_startup(db, startup_id)
    require(roles_for(actor, startup).can_manage, "You do not have permission to delete this startup")

    write_audit_event(
        db,
        startup_id=startup.id,
        actor_id=actor.actor_id,
        action="startups.startup.delete",
        entity_type="startup",
        entity_id=startup.id,
        before=sa_model_to_dict(startup),
        after=None,
    )
    db.delete(startup)
    db.commit()


def apply_status(db: Session, startup: Startup, *, target: StartupStatus, actor_id: str, rationale: str | None) -> None:
    """Record an already-validated transition. Caller commits."""
    before = sa_model_to_dict(startup)
    previous = startup.status
    startup.status = target.value
    startup.updated_by = actor_id

    db.add(
        StartupStatusHistory(
            startup_id=startup.id,
            from_status=previous,
            to_status=target.value,
            changed_by=actor_id,
            rationale=rationale,
            created_by=actor_id,
            updated_by=actor_id,
        )
    )
    write_audit_event(
        db,
        startup_id=startup.id,
        actor_id=actor_id,
        action="startups.startup.status_change",
        entity_type="startup",
        entity_id=startup.id,
        before=before,
        after=sa_model_to_dict(startup),
    )
    logger.info("startup.status_changed", startup_id=str(startup.id), from_status=previous, to_status=target.value)


def change_status(db: Session, *, startup_id: uuid.UUID, actor: Actor, patch: StartupStatusPatch) -> Startup:
    startup = get_startup(db, startup_id)
    flags = roles_for(actor, startup)
    target = lifecycle.check_transition_actor(
        startup.status, patch.status, roles=actor.roles, is_founder=flags.is_founder
    )
    apply_status(db, startup, target=target, actor_id=actor.actor_id, rationale=patch.rationale)
    db.commit()
    db.refresh(startup)
    return startup


def list_status_history(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[StartupStatusHistory]:
    load_visible_startup(db, startup_id=startup_id, actor=actor)
    stmt = (
        select(StartupStatusHistory)
        .where(StartupStatusHistory.startup_id == startup_id)
        .order_by(StartupStatusHistory.created_at.asc())
    )
    return list(db.execute(stmt).scalars().all())
