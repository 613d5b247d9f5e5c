from __future__ import annotations

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin, StartupScopedMixin


class TeamMember(Base, IdMixin, StartupScopedMixin, AuditMetaMixin):
    __tablename__ = "team_members"

    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(320), index=True)
    role: Mapped[str] = mapped_column(String(100))
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_actor_id: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)

    __table_args__ = (UniqueConstraint("startup_id", "email", name="uq_team_member_startup_email"),)
