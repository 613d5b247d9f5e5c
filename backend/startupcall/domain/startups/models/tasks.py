from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin, StartupScopedMixin
from startupcall.shared.enums import TaskPriority, TaskStatus


class Task(Base, IdMixin, StartupScopedMixin, AuditMetaMixin):
    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(300))
    description: Mapped[str] = mapped_column(Text)
    due_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(32), default=TaskStatus.TODO.value, index=True)
    priority: Mapped[str] = mapped_column(String(16), default=TaskPriority.MEDIUM.value)
    assignee_actor_id: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)

    __table_args__ = (Index("ix_tasks_startup_status", "startup_id", "status"),)
