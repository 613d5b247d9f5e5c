from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor, require_roles
from startupcall.domain.startups.routes.errors import http_error
from startupcall.domain.startups.schemas.detail import StartupDetailOut
from startupcall.domain.startups.schemas.startups import (
    StartupCreate,
    StartupOut,
    StartupStatusPatch,
    StartupUpdate,
    StatusHistoryOut,
)
from startupcall.domain.startups.services import startups as service
from startupcall.shared.enums import Role, StartupStatus
from startupcall.shared.exceptions import AppError

router = APIRouter(prefix="/startups", tags=["startups"])


@router.get("", response_model=list[StartupOut])
def list_startups(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    status_filter: StartupStatus | None = Query(default=None, alias="status"),
    mine: bool = Query(default=False),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0, le=10_000),
) -> list[StartupOut]:
    return service.list_startups(db, actor=actor, limit=limit, offset=offset, status=status_filter, mine=mine)


@router.post("", response_model=StartupOut, status_code=status.HTTP_201_CREATED)
def create_startup(
    payload: StartupCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles([Role.ENTREPRENEUR])),
) -> StartupOut:
    return service.create_startup(db, actor=actor, payload=payload)


@router.get("/{startup_id}", response_model=StartupDetailOut)
def get_startup(
    startup_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> StartupDetailOut:
    try:
        return service.get_startup_detail(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.put("/{startup_id}", response_model=StartupOut)
def update_startup(
    startup_id: uuid.UUID,
    payload: StartupUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> StartupOut:
    try:
        return service.update_startup(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.delete("/{startup_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_startup(
    startup_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.delete_startup(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{startup_id}/status", response_model=StartupOut)
def patch_startup_status(
    startup_id: uuid.UUID,
    payload: StartupStatusPatch,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> StartupOut:
    try:
        return service.change_status(db, startup_id=startup_id, actor=actor, patch=payload)
    except AppError as e:
        raise http_error(e)


@router.get("/{startup_id}/status-history", response_model=list[StatusHistoryOut])
def list_status_history(
    startup_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> list[StatusHistoryOut]:
    try:
        return service.list_status_history(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)
