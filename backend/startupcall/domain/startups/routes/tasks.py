from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor
from startupcall.domain.startups.routes.errors import http_error
from startupcall.domain.startups.schemas.tasks import TaskCreate, TaskOut, TaskStatusPatch, TaskUpdate
from startupcall.domain.startups.services import tasks as service
from startupcall.shared.exceptions import AppError

router = APIRouter(prefix="/startups/{startup_id}/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskOut])
def list_tasks(startup_id: uuid.UUID, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return service.list_tasks(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    startup_id: uuid.UUID,
    payload: TaskCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.create_task(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    startup_id: uuid.UUID,
    task_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.get_task(db, startup_id=startup_id, task_id=task_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    startup_id: uuid.UUID,
    task_id: uuid.UUID,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.update_task(db, startup_id=startup_id, task_id=task_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.patch("/{task_id}", response_model=TaskOut)
def patch_task_status(
    startup_id: uuid.UUID,
    task_id: uuid.UUID,
    payload: TaskStatusPatch,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.patch_task_status(db, startup_id=startup_id, task_id=task_id, actor=actor, patch=payload)
    except AppError as e:
        raise http_error(e)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    startup_id: uuid.UUID,
    task_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.delete_task(db, startup_id=startup_id, task_id=task_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
