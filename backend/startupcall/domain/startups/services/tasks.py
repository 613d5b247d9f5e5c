from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.db.audit import write_audit_event
from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Task
from startupcall.domain.startups.schemas.tasks import TaskCreate, TaskStatusPatch, TaskUpdate
from startupcall.domain.startups.services.access import (
    get_scoped,
    get_startup,
    has_assigned_task,
    is_team_member,
    require,
    roles_for,
)
from startupcall.domain.startups.services.ordering import sort_tasks
from startupcall.shared.enums import StartupStatus
from startupcall.shared.utils import sa_model_to_dict

_MANAGE_DENIED = "Only the founder or an admin can manage tasks"


def _check_read(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> None:
    startup = get_startup(db, startup_id)
    flags = roles_for(actor, startup)
    if flags.can_manage or startup.status == StartupStatus.ACCEPTED.value:
        return
    require(
        is_team_member(db, startup_id=startup_id, actor_id=actor.actor_id)
        or has_assigned_task(db, startup_id=startup_id, actor_id=actor.actor_id),
        "You do not have permission to view tasks",
    )


def _check_manage(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> None:
    startup = get_startup(db, startup_id)
    require(roles_for(actor, startup).can_manage, _MANAGE_DENIED)


def list_tasks(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[Task]:
    _check_read(db, startup_id=startup_id, actor=actor)
    stmt = select(Task).where(Task.startup_id == startup_id).order_by(Task.created_at.asc())
    return sort_tasks(db.execute(stmt).scalars().all())


def get_task(db: Session, *, startup_id: uuid.UUID, task_id: uuid.UUID, actor: Actor) -> Task:
    _check_read(db, startup_id=startup_id, actor=actor)
    return get_scoped(db, Task, startup_id=startup_id, entity_id=task_id, label="Task")


def create_task(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: TaskCreate) -> Task:
    _check_manage(db, startup_id=startup_id, actor=actor)

    task = Task(
        startup_id=startup_id,
        title=payload.title,
        description=payload.description,
        due_date=payload.due_date,
        status=payload.status.value,
        priority=payload.priority.value,
        assignee_actor_id=payload.assignee_actor_id,
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(task)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.task.create",
        entity_type="task",
        entity_id=task.id,
        before=None,
        after=sa_model_to_dict(task),
    )
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, *, startup_id: uuid.UUID, task_id: uuid.UUID, actor: Actor, payload: TaskUpdate) -> Task:
    _check_manage(db, startup_id=startup_id, actor=actor)
    task = get_scoped(db, Task, startup_id=startup_id, entity_id=task_id, label="Task")

    before = sa_model_to_dict(task)
    task.title = payload.title
    task.description = payload.description
    task.due_date = payload.due_date
    if payload.status is not None:
        task.status = payload.status.value
    if payload.priority is not None:
        task.priority = payload.priority.value
    task.assignee_actor_id = payload.assignee_actor_id
    task.updated_by = actor.actor_id

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.task.update",
        entity_type="task",
        entity_id=task.id,
        before=before,
        after=sa_model_to_dict(task),
    )
    db.commit()
    db.refresh(task)
    return task


def patch_task_status(
    db: Session, *, startup_id: uuid.UUID, task_id: uuid.UUID, actor: Actor, patch: TaskStatusPatch
) -> Task:
    startup = get_startup(db, startup_id)
    task = get_scoped(db, Task, startup_id=startup_id, entity_id=task_id, label="Task")
    require(
        roles_for(actor, startup).can_manage or task.assignee_actor_id == actor.actor_id,
        "Only the founder, an admin or the assignee can update this task",
    )

    before = sa_model_to_dict(task)
    task.status = patch.status.value
    task.updated_by = actor.actor_id

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.task.status_patch",
        entity_type="task",
        entity_id=task.id,
        before=before,
        after=sa_model_to_dict(task),
    )
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, *, startup_id: uuid.UUID, task_id: uuid.UUID, actor: Actor) -> None:
    _check_manage(db, startup_id=startup_id, actor=actor)
    task = get_scoped(db, Task, startup_id=startup_id, entity_id=task_id, label="Task")

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.task.delete",
        entity_type="task",
        entity_id=task.id,
        before=sa_model_to_dict(task),
        after=None,
    )
    db.delete(task)
    db.commit()
