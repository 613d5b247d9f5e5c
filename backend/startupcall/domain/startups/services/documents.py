from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.db.audit import write_audit_event
from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Document
from startupcall.domain.startups.schemas.documents import DocumentCreate
from startupcall.domain.startups.services.access import get_scoped, is_team_member, load_visible_startup, require
from startupcall.shared.utils import sa_model_to_dict


def list_documents(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[Document]:
    load_visible_startup(db, startup_id=startup_id, actor=actor)
    stmt = select(Document).where(Document.startup_id == startup_id).order_by(Document.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def get_document(db: Session, *, startup_id: uuid.UUID, document_id: uuid.UUID, actor: Actor) -> Document:
    load_visible_startup(db, startup_id=startup_id, actor=actor)
    return get_scoped(db, Document, startup_id=startup_id, entity_id=document_id, label="Document")


def add_document(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: DocumentCreate) -> Document:
    _, flags = load_visible_startup(db, startup_id=startup_id, actor=actor)
    require(
        flags.can_manage or is_team_member(db, startup_id=startup_id, actor_id=actor.actor_id),
        "Only the founder, team members or an admin can upload documents",
    )

    document = Document(
        startup_id=startup_id,
        name=payload.name,
        description=payload.description,
        content_type=payload.content_type,
        size_bytes=payload.size_bytes,
        url=payload.url,
        uploaded_by=actor.actor_id,
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(document)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.document.create",
        entity_type="document",
        entity_id=document.id,
        before=None,
        after=sa_model_to_dict(document),
    )
    db.commit()
    db.refresh(document)
    return document


def delete_document(db: Session, *, startup_id: uuid.UUID, document_id: uuid.UUID, actor: Actor) -> None:
    _, flags = load_visible_startup(db, startup_id=startup_id, actor=actor)
    document = get_scoped(db, Document, startup_id=startup_id, entity_id=document_id, label="Document")
    require(
        flags.can_manage or document.uploaded_by == actor.actor_id,
        "You do not have permission to delete this document",
    )

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.document.delete",
        entity_type="document",
        entity_id=document.id,
        before=sa_model_to_dict(document),
        after=None,
    )
    db.delete(document)
    db.commit()
