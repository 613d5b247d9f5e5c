"""Server-side permission checks for a startup and its sub-resources."""

from __future__ import annotations

import uuid
from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Startup, Task, TeamMember
from startupcall.shared.enums import StartupStatus
from startupcall.shared.exceptions import NotAuthorized, NotFound
from startupcall.workflow.roles import RoleFlags, resolve_roles

ModelT = TypeVar("ModelT")


def get_startup(db: Session, startup_id: uuid.UUID) -> Startup:
    startup = db.get(Startup, startup_id)
    if startup is None:
        raise NotFound("Startup not found")
    return startup


def get_scoped(db: Session, model: type[ModelT], *, startup_id: uuid.UUID, entity_id: uuid.UUID, label: str) -> ModelT:
    """Load a child row that must belong to the given startup."""
    obj = db.execute(
        select(model).where(model.startup_id == startup_id, model.id == entity_id)  # type: ignore[attr-defined]
    ).scalar_one_or_none()
    if obj is None:
        raise NotFound(f"{label} not found")
    return obj


def roles_for(actor: Actor, startup: Startup) -> RoleFlags:
    return resolve_roles(actor, startup)


def require(condition: bool, message: str) -> None:
    if not condition:
        raise NotAuthorized(message)


def ensure_can_view(startup: Startup, flags: RoleFlags) -> None:
    if startup.status == StartupStatus.DRAFT.value and not flags.can_manage:
        raise NotAuthorized("You do not have permission to view this startup")


def load_visible_startup(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> tuple[Startup, RoleFlags]:
    startup = get_startup(db, startup_id)
    flags = roles_for(actor, startup)
    ensure_can_view(startup, flags)
    return startup, flags


def is_team_member(db: Session, *, startup_id: uuid.UUID, actor_id: str) -> bool:
    stmt = select(TeamMember.id).where(TeamMember.startup_id == startup_id, TeamMember.user_actor_id == actor_id)
    return db.execute(stmt.limit(1)).first() is not None


def has_assigned_task(db: Session, *, startup_id: uuid.UUID, actor_id: str) -> bool:
    stmt = select(Task.id).where(Task.startup_id == startup_id, Task.assignee_actor_id == actor_id)
    return db.execute(stmt.limit(1)).first() is not None
