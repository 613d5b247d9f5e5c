from __future__ import annotations

from sqlalchemy import Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin, StartupScopedMixin


class Review(Base, IdMixin, StartupScopedMixin, AuditMetaMixin):
    __tablename__ = "reviews"

    reviewer_actor_id: Mapped[str] = mapped_column(String(200), index=True)
    score: Mapped[float] = mapped_column(Float)
    innovation_score: Mapped[int] = mapped_column(Integer)
    market_score: Mapped[int] = mapped_column(Integer)
    team_score: Mapped[int] = mapped_column(Integer)
    execution_score: Mapped[int] = mapped_column(Integer)
    feedback: Mapped[str] = mapped_column(Text)

    __table_args__ = (UniqueConstraint("startup_id", "reviewer_actor_id", name="uq_review_startup_reviewer"),)
