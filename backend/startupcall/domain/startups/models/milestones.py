from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin, StartupScopedMixin
from startupcall.shared.enums import MilestoneStatus


class Milestone(Base, IdMixin, StartupScopedMixin, AuditMetaMixin):
    __tablename__ = "milestones"

    title: Mapped[str] = mapped_column(String(300))
    description: Mapped[str] = mapped_column(Text)
    due_date: Mapped[dt.date] = mapped_column(Date, index=True)
    status: Mapped[str] = mapped_column(String(32), default=MilestoneStatus.PENDING.value, index=True)
