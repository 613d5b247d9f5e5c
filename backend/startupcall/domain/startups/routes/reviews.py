from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor
from startupcall.domain.startups.routes.errors import http_error
from startupcall.domain.startups.schemas.reviews import ReviewCreate, ReviewOut, ReviewUpdate
from startupcall.domain.startups.services import reviews as service
from startupcall.shared.exceptions import AppError

router = APIRouter(prefix="/startups/{startup_id}/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewOut])
def list_reviews(startup_id: uuid.UUID, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return service.list_reviews(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.post("", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(
    startup_id: uuid.UUID,
    payload: ReviewCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.create_review(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.get("/{review_id}", response_model=ReviewOut)
def get_review(
    startup_id: uuid.UUID,
    review_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.get_review(db, startup_id=startup_id, review_id=review_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.put("/{review_id}", response_model=ReviewOut)
def update_review(
    startup_id: uuid.UUID,
    review_id: uuid.UUID,
    payload: ReviewUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.update_review(db, startup_id=startup_id, review_id=review_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    startup_id: uuid.UUID,
    review_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.delete_review(db, startup_id=startup_id, review_id=review_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
