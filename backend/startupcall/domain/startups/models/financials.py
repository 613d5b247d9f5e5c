from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin, StartupScopedMixin


class Sponsorship(Base, IdMixin, StartupScopedMixin, AuditMetaMixin):
    __tablename__ = "sponsorships"

    sponsor_actor_id: Mapped[str] = mapped_column(String(200), index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)


class Expense(Base, IdMixin, StartupScopedMixin, AuditMetaMixin):
    __tablename__ = "expenses"

    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    category: Mapped[str] = mapped_column(String(100), index=True)
    description: Mapped[str] = mapped_column(Text)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
