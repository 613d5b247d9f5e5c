from __future__ import annotations

import uuid

from sqlalchemy import JSON, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin
from startupcall.shared.enums import FundingStage, StartupStatus


_CHILD_CASCADE = "all, delete-orphan"


class Startup(Base, IdMixin, AuditMetaMixin):
    """
    The reviewable entity: a submitted idea or company.

    Status only moves forward along DRAFT -> SUBMITTED -> UNDER_REVIEW ->
    ACCEPTED/REJECTED -> COMPLETED; see services/lifecycle.py.
    """

    __tablename__ = "startups"

    name: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    pitch: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    industries: Mapped[list[str]] = mapped_column(JSON, default=list)
    funding_stage: Mapped[str] = mapped_column(String(32), default=FundingStage.IDEA.value, index=True)
    status: Mapped[str] = mapped_column(String(32), default=StartupStatus.DRAFT.value, index=True)
    founder_actor_id: Mapped[str] = mapped_column(String(200), index=True)

    reviews = relationship("Review", cascade=_CHILD_CASCADE, order_by="Review.created_at.desc()")
    milestones = relationship("Milestone", cascade=_CHILD_CASCADE, order_by="Milestone.due_date")
    tasks = relationship("Task", cascade=_CHILD_CASCADE)
    sponsorships = relationship("Sponsorship", cascade=_CHILD_CASCADE, order_by="Sponsorship.date.desc()")
    expenses = relationship("Expense", cascade=_CHILD_CASCADE, order_by="Expense.date.desc()")
    documents = relationship("Document", cascade=_CHILD_CASCADE)
    comments = relationship("Comment", cascade=_CHILD_CASCADE)
    team_members = relationship("TeamMember", cascade=_CHILD_CASCADE, order_by="TeamMember.created_at")
    status_history = relationship(
        "StartupStatusHistory", cascade=_CHILD_CASCADE, order_by="StartupStatusHistory.created_at"
    )

    __table_args__ = (Index("ix_startups_founder_status", "founder_actor_id", "status"),)


class StartupStatusHistory(Base, IdMixin, AuditMetaMixin):
    __tablename__ = "startup_status_history"

    startup_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("startups.id", ondelete="CASCADE"), index=True
    )
    from_status: Mapped[str] = mapped_column(String(32))
    to_status: Mapped[str] = mapped_column(String(32), index=True)
    changed_by: Mapped[str] = mapped_column(String(200))
    rationale: Mapped[str | None] = mapped_column(Text, nullable=True)
