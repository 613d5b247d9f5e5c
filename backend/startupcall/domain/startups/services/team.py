from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from startupcall.core.db.audit import write_audit_event
from startupcall.core.db.models import User
from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Startup, TeamMember
from startupcall.domain.startups.schemas.team import TeamMemberCreate, TeamMemberUpdate
from startupcall.domain.startups.services.access import get_scoped, get_startup, load_visible_startup, require, roles_for
from startupcall.shared.exceptions import ValidationError
from startupcall.shared.utils import sa_model_to_dict

_MANAGE_DENIED = "Only the founder or an admin can manage the team"


def _email_taken(db: Session, *, startup_id: uuid.UUID, email: str, exclude_id: uuid.UUID | None = None) -> bool:
    stmt = select(TeamMember.id).where(
        TeamMember.startup_id == startup_id, func.lower(TeamMember.email) == email.lower()
    )
    if exclude_id is not None:
        stmt = stmt.where(TeamMember.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def _linked_actor_id(db: Session, payload: TeamMemberCreate) -> str | None:
    if payload.user_actor_id:
        return payload.user_actor_id
    # Emails may differ only in case across users: prefer an exact match, then the oldest account.
    stmt = (
        select(User)
        .where(func.lower(User.email) == payload.email.lower())
        .order_by((User.email == payload.email).desc(), User.created_at.asc())
    )
    user = db.execute(stmt).scalars().first()
    return user.external_id if user is not None else None


def _is_founder_member(startup: Startup, member: TeamMember) -> bool:
    return member.user_actor_id is not None and member.user_actor_id == startup.founder_actor_id


def list_team(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[TeamMember]:
    load_visible_startup(db, startup_id=startup_id, actor=actor)
    stmt = select(TeamMember).where(TeamMember.startup_id == startup_id).order_by(TeamMember.created_at.asc())
    return list(db.execute(stmt).scalars().all())


def get_member(db: Session, *, startup_id: uuid.UUID, member_id: uuid.UUID, actor: Actor) -> TeamMember:
    load_visible_startup(db, startup_id=startup_id, actor=actor)
    return get_scoped(db, TeamMember, startup_id=startup_id, entity_id=member_id, label="Team member")


def add_member(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: TeamMemberCreate) -> TeamMember:
    startup = get_startup(db, startup_id)
    require(roles_for(actor, startup).can_manage, _MANAGE_DENIED)

    if _email_taken(db, startup_id=startup_id, email=payload.email):
        raise ValidationError("A team member with this email already exists")

    member = TeamMember(
        startup_id=startup_id,
        name=payload.name,
        email=payload.email.lower(),
        role=payload.role,
        bio=payload.bio,
        user_actor_id=_linked_actor_id(db, payload),
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(member)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.team_member.create",
        entity_type="team_member",
        entity_id=member.id,
        before=None,
        after=sa_model_to_dict(member),
    )
    db.commit()
    db.refresh(member)
    return member


def update_member(
    db: Session, *, startup_id: uuid.UUID, member_id: uuid.UUID, actor: Actor, payload: TeamMemberUpdate
) -> TeamMember:
    startup = get_startup(db, startup_id)
    require(roles_for(actor, startup).can_manage, _MANAGE_DENIED)
    member = get_scoped(db, TeamMember, startup_id=startup_id, entity_id=member_id, label="Team member")

    if _email_taken(db, startup_id=startup_id, email=payload.email, exclude_id=member.id):
        raise ValidationError("A team member with this email already exists")

    before = sa_model_to_dict(member)
    member.name = payload.name
    member.email = payload.email.lower()
    member.role = payload.role
    member.bio = payload.bio
    member.updated_by = actor.actor_id

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.team_member.update",
        entity_type="team_member",
        entity_id=member.id,
        before=before,
        after=sa_model_to_dict(member),
    )
    db.commit()
    db.refresh(member)
    return member


def remove_member(db: Session, *, startup_id: uuid.UUID, member_id: uuid.UUID, actor: Actor) -> None:
    startup = get_startup(db, startup_id)
    require(roles_for(actor, startup).can_manage, _MANAGE_DENIED)
    member = get_scoped(db, TeamMember, startup_id=startup_id, entity_id=member_id, label="Team member")

    if _is_founder_member(startup, member):
        raise ValidationError("Cannot remove the founder from the team")

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.team_member.delete",
        entity_type="team_member",
        entity_id=member.id,
        before=sa_model_to_dict(member),
        after=None,
    )
    db.delete(member)
    db.commit()
