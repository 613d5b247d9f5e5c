from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor
from startupcall.domain.startups.routes.errors import http_error
from startupcall.domain.startups.schemas.milestones import (
    MilestoneCreate,
    MilestoneOut,
    MilestoneStatusPatch,
    MilestoneUpdate,
)
from startupcall.domain.startups.services import milestones as service
from startupcall.shared.exceptions import AppError

router = APIRouter(prefix="/startups/{startup_id}/milestones", tags=["milestones"])


@router.get("", response_model=list[MilestoneOut])
def list_milestones(startup_id: uuid.UUID, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return service.list_milestones(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.post("", response_model=MilestoneOut, status_code=status.HTTP_201_CREATED)
def create_milestone(
    startup_id: uuid.UUID,
    payload: MilestoneCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.create_milestone(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.get("/{milestone_id}", response_model=MilestoneOut)
def get_milestone(
    startup_id: uuid.UUID,
    milestone_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.get_milestone(db, startup_id=startup_id, milestone_id=milestone_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.put("/{milestone_id}", response_model=MilestoneOut)
def update_milestone(
    startup_id: uuid.UUID,
    milestone_id: uuid.UUID,
    payload: MilestoneUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.update_milestone(
            db, startup_id=startup_id, milestone_id=milestone_id, actor=actor, payload=payload
        )
    except AppError as e:
        raise http_error(e)


@router.patch("/{milestone_id}", response_model=MilestoneOut)
def patch_milestone_status(
    startup_id: uuid.UUID,
    milestone_id: uuid.UUID,
    payload: MilestoneStatusPatch,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.patch_milestone_status(
            db, startup_id=startup_id, milestone_id=milestone_id, actor=actor, patch=payload
        )
    except AppError as e:
        raise http_error(e)


@router.delete("/{milestone_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_milestone(
    startup_id: uuid.UUID,
    milestone_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.delete_milestone(db, startup_id=startup_id, milestone_id=milestone_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
