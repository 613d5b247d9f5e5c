from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from startupcall.core.db.session import get_db
from startupcall.core.security.auth import Actor
from startupcall.core.security.dependencies import get_actor
from startupcall.domain.startups.routes.errors import http_error
from startupcall.domain.startups.schemas.documents import DocumentCreate, DocumentOut
from startupcall.domain.startups.services import documents as service
from startupcall.shared.exceptions import AppError

router = APIRouter(prefix="/startups/{startup_id}/documents", tags=["documents"])


@router.get("", response_model=list[DocumentOut])
def list_documents(startup_id: uuid.UUID, db: Session = Depends(get_db), actor: Actor = Depends(get_actor)):
    try:
        return service.list_documents(db, startup_id=startup_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.post("", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
def add_document(
    startup_id: uuid.UUID,
    payload: DocumentCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.add_document(db, startup_id=startup_id, actor=actor, payload=payload)
    except AppError as e:
        raise http_error(e)


@router.get("/{document_id}", response_model=DocumentOut)
def get_document(
    startup_id: uuid.UUID,
    document_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    try:
        return service.get_document(db, startup_id=startup_id, document_id=document_id, actor=actor)
    except AppError as e:
        raise http_error(e)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(
    startup_id: uuid.UUID,
    document_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    try:
        service.delete_document(db, startup_id=startup_id, document_id=document_id, actor=actor)
    except AppError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
