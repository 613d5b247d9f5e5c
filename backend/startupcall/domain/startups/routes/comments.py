from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor
from startupcall.domain.startups.routes.errors import http_error
from startupcall.domain.startups.schemas.comments import CommentCreate, CommentOut
from startupcall.domain.startups.services import comments as service
from startupcall.shared.exceptions import AppError

router = APIRouter(prefix="/startups/{startup_id}/comments", tags=["comments"])


@router.get("", response_model=list[CommentOut])
def list_comments(startup_id: uuid.UUID, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return service.list_comments(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.post("", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def add_comment(
    startup_id: uuid.UUID,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.add_comment(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    startup_id: uuid.UUID,
    comment_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.delete_comment(db, startup_id=startup_id, comment_id=comment_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
