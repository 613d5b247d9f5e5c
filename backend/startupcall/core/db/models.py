from __future__ import annotations

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin
from startupcall.shared.enums import Role


class User(Base, IdMixin, AuditMetaMixin):
    __tablename__ = "users"

    external_id: Mapped[str] = mapped_column(String(200), unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(320), unique=True, nullable=True, index=True)
    display_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[str] = mapped_column(String(32), default=Role.ENTREPRENEUR.value, index=True)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)


class AuditEvent(Base, IdMixin, AuditMetaMixin):
    __tablename__ = "audit_events"

    actor_id: Mapped[str] = mapped_column(String(200), index=True)
    actor_roles: Mapped[list[str]] = mapped_column(JSON, default=list)

    action: Mapped[str] = mapped_column(String(200), index=True)
    entity_type: Mapped[str] = mapped_column(String(100), index=True)
    entity_id: Mapped[str] = mapped_column(String(200), index=True)
    # Not a foreign key: the trail outlives deleted startups.
    startup_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    before: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    after: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    request_id: Mapped[str] = mapped_column(String(64), index=True)

    __table_args__ = (
        Index("ix_audit_events_startup_entity", "startup_id", "entity_type", "entity_id"),
    )
