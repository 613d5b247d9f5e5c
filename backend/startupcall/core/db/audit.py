from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.db.models import AuditEvent
from startupcall.core.middleware.audit import get_actor_id, get_actor_roles, get_request_id
from startupcall.shared.utils import json_safe

UNKNOWN = "unknown"


def write_audit_event(
    db: Session,
    *,
    startup_id: uuid.UUID | None,
    actor_id: str | None = None,
    actor_roles: list[str] | None = None,
    request_id: str | None = None,
    action: str,
    entity_type: str,
    entity_id: str | uuid.UUID,
    before: dict[str, Any] | None,
    after: dict[str, Any] | None,
) -> AuditEvent:
    """
    Append one row to the audit trail inside the caller's transaction.

    Actions read ``startups.<entity>.<verb>``. Missing actor or request id fall
    back to the request context, then to ``"unknown"``. The caller commits.
    """
    actor = actor_id or get_actor_id() or UNKNOWN
    event = AuditEvent(
        startup_id=str(startup_id) if startup_id else None,
        actor_id=actor,
        actor_roles=actor_roles if actor_roles is not None else get_actor_roles(),
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        before=json_safe(before),
        after=json_safe(after),
        request_id=request_id or get_request_id() or UNKNOWN,
        created_by=actor,
        updated_by=actor,
    )
    db.add(event)
    db.flush()
    return event


def get_audit_log(
    db: Session,
    *,
    startup_id: uuid.UUID,
    entity_type: str | None = None,
    entity_id: str | uuid.UUID | None = None,
    limit: int = 200,
) -> list[AuditEvent]:
    """Oldest first. The trail is keyed by startup id string and survives startup deletion."""
    stmt = select(AuditEvent).where(AuditEvent.startup_id == str(startup_id))
    if entity_type:
        stmt = stmt.where(AuditEvent.entity_type == entity_type)
    if entity_id is not None:
        stmt = stmt.where(AuditEvent.entity_id == str(entity_id))
    stmt = stmt.order_by(AuditEvent.created_at.asc()).limit(limit)
    return list(db.execute(stmt).scalars().all())
