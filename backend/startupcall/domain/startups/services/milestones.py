from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.db.audit import write_audit_event
from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Milestone
from startupcall.domain.startups.schemas.milestones import MilestoneCreate, MilestoneStatusPatch, MilestoneUpdate
from startupcall.domain.startups.services.access import get_scoped, get_startup, require, roles_for
from startupcall.shared.enums import StartupStatus
from startupcall.shared.utils import sa_model_to_dict

_MANAGE_DENIED = "Only the founder or an admin can manage milestones"


def _check_read(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> None:
    startup = get_startup(db, startup_id)
    flags = roles_for(actor, startup)
    require(
        flags.is_founder
        or flags.is_admin
        or flags.is_reviewer
        or flags.is_sponsor
        or startup.status == StartupStatus.ACCEPTED.value,
        "You do not have permission to view milestones",
    )


def _check_manage(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> None:
    startup = get_startup(db, startup_id)
    require(roles_for(actor, startup).can_manage, _MANAGE_DENIED)


def list_milestones(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[Milestone]:
    _check_read(db, startup_id=startup_id, actor=actor)
    stmt = select(Milestone).where(Milestone.startup_id == startup_id).order_by(Milestone.due_date.asc())
    return list(db.execute(stmt).scalars().all())


def get_milestone(db: Session, *, startup_id: uuid.UUID, milestone_id: uuid.UUID, actor: Actor) -> Milestone:
    _check_read(db, startup_id=startup_id, actor=actor)
    return get_scoped(db, Milestone, startup_id=startup_id, entity_id=milestone_id, label="Milestone")


def create_milestone(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: MilestoneCreate) -> Milestone:
    _check_manage(db, startup_id=startup_id, actor=actor)

    milestone = Milestone(
        startup_id=startup_id,
        title=payload.title,
        description=payload.description,
        due_date=payload.due_date,
        status=payload.status.value,
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(milestone)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.milestone.create",
        entity_type="milestone",
        entity_id=milestone.id,
        before=None,
        after=sa_model_to_dict(milestone),
    )
    db.commit()
    db.refresh(milestone)
    return milestone


def update_milestone(
    db: Session, *, startup_id: uuid.UUID, milestone_id: uuid.UUID, actor: Actor, payload: MilestoneUpdate
) -> Milestone:
    _check_manage(db, startup_id=startup_id, actor=actor)
    milestone = get_scoped(db, Milestone, startup_id=startup_id, entity_id=milestone_id, label="Milestone")

    before = sa_model_to_dict(milestone)
    milestone.title = payload.title
    milestone.description = payload.description
    milestone.due_date = payload.due_date
    if payload.status is not None:
        milestone.status = payload.status.value
    milestone.updated_by = actor.actor_id

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.milestone.update",
        entity_type="milestone",
        entity_id=milestone.id,
        before=before,
        after=sa_model_to_dict(milestone),
    )
    db.commit()
    db.refresh(milestone)
    return milestone


def patch_milestone_status(
    db: Session, *, startup_id: uuid.UUID, milestone_id: uuid.UUID, actor: Actor, patch: MilestoneStatusPatch
) -> Milestone:
    _check_manage(db, startup_id=startup_id, actor=actor)
    milestone = get_scoped(db, Milestone, startup_id=startup_id, entity_id=milestone_id, label="Milestone")

    before = sa_model_to_dict(milestone)
    milestone.status = patch.status.value
    milestone.updated_by = actor.actor_id

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.milestone.status_patch",
        entity_type="milestone",
        entity_id=milestone.id,
        before=before,
        after=sa_model_to_dict(milestone),
    )
    db.commit()
    db.refresh(milestone)
    return milestone


def delete_milestone(db: Session, *, startup_id: uuid.UUID, milestone_id: uuid.UUID, actor: Actor) -> None:
    _check_manage(db, startup_id=startup_id, actor=actor)
    milestone = get_scoped(db, Milestone, startup_id=startup_id, entity_id=milestone_id, label="Milestone")

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.milestone.delete",
        entity_type="milestone",
        entity_id=milestone.id,
        before=sa_model_to_dict(milestone),
        after=None,
    )
    db.delete(milestone)
    db.commit()
