from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor
from startupcall.domain.startups.routes.errors import http_error
from startupcall.domain.startups.schemas.team import TeamMemberCreate, TeamMemberOut, TeamMemberUpdate
from startupcall.domain.startups.services import team as service
from startupcall.shared.exceptions import AppError

router = APIRouter(prefix="/startups/{startup_id}/team", tags=["team"])


@router.get("", response_model=list[TeamMemberOut])
def list_team(startup_id: uuid.UUID, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return service.list_team(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.post("", response_model=TeamMemberOut, status_code=status.HTTP_201_CREATED)
def add_member(
    startup_id: uuid.UUID,
    payload: TeamMemberCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.add_member(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.get("/{member_id}", response_model=TeamMemberOut)
def get_member(
    startup_id: uuid.UUID,
    member_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.get_member(db, startup_id=startup_id, member_id=member_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.put("/{member_id}", response_model=TeamMemberOut)
def update_member(
    startup_id: uuid.UUID,
    member_id: uuid.UUID,
    payload: TeamMemberUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.update_member(db, startup_id=startup_id, member_id=member_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    startup_id: uuid.UUID,
    member_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.remove_member(db, startup_id=startup_id, member_id=member_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
