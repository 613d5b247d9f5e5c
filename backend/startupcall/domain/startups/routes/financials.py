from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor
from startupcall.domain.startups.routes.errors import http_error
from startupcall.domain.startups.schemas.financials import ExpenseCreate, ExpenseOut, SponsorshipCreate, SponsorshipOut
from startupcall.domain.startups.services import financials as service
from startupcall.shared.exceptions import AppError

router = APIRouter(prefix="/startups/{startup_id}", tags=["financials"])


@router.get("/sponsorships", response_model=list[SponsorshipOut])
def list_sponsorships(startup_id: uuid.UUID, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return service.list_sponsorships(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.post("/sponsorships", response_model=SponsorshipOut, status_code=status.HTTP_201_CREATED)
def create_sponsorship(
    startup_id: uuid.UUID,
    payload: SponsorshipCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.create_sponsorship(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.delete("/sponsorships/{sponsorship_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sponsorship(
    startup_id: uuid.UUID,
    sponsorship_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.delete_sponsorship(db, startup_id=startup_id, sponsorship_id=sponsorship_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/expenses", response_model=list[ExpenseOut])
def list_expenses(startup_id: uuid.UUID, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return service.list_expenses(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.post("/expenses", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_expense(
    startup_id: uuid.UUID,
    payload: ExpenseCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.create_expense(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    startup_id: uuid.UUID,
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.delete_expense(db, startup_id=startup_id, expense_id=expense_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
