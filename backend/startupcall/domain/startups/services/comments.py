from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.db.audit import write_audit_event
from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Comment
from startupcall.domain.startups.schemas.comments import CommentCreate
from startupcall.domain.startups.services.access import get_scoped, load_visible_startup, require
from startupcall.shared.exceptions import NotFound, ValidationError
from startupcall.shared.utils import sa_model_to_dict


def list_comments(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[Comment]:
    load_visible_startup(db, startup_id=startup_id, actor=actor)
    stmt = select(Comment).where(Comment.startup_id == startup_id).order_by(Comment.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def add_comment(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: CommentCreate) -> Comment:
    load_visible_startup(db, startup_id=startup_id, actor=actor)

    if payload.parent_id is not None:
        parent = db.execute(
            select(Comment).where(Comment.startup_id == startup_id, Comment.id == payload.parent_id)
        ).scalar_one_or_none()
        if parent is None:
            raise NotFound("Parent comment not found")
        if parent.parent_id is not None:
            raise ValidationError("Replies can only be added to top-level comments")

    comment = Comment(
        startup_id=startup_id,
        content=payload.content,
        author_actor_id=actor.actor_id,
        parent_id=payload.parent_id,
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(comment)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.comment.create",
        entity_type="comment",
        entity_id=comment.id,
        before=None,
        after=sa_model_to_dict(comment),
    )
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, *, startup_id: uuid.UUID, comment_id: uuid.UUID, actor: Actor) -> None:
    _, flags = load_visible_startup(db, startup_id=startup_id, actor=actor)
    comment = get_scoped(db, Comment, startup_id=startup_id, entity_id=comment_id, label="Comment")
    require(
        flags.is_admin or comment.author_actor_id == actor.actor_id,
        "You do not have permission to delete this comment",
    )

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.comment.delete",
        entity_type="comment",
        entity_id=comment.id,
        before=sa_model_to_dict(comment),
        after=None,
    )
    replies = db.execute(select(Comment).where(Comment.parent_id == comment.id)).scalars().all()
    for reply in replies:
        db.delete(reply)
    db.delete(comment)
    db.commit()
