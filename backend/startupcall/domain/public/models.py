from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import JSON, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin
from startupcall.shared.enums import AnnouncementStatus, OpportunityStatus


class SponsorshipOpportunity(Base, IdMixin, AuditMetaMixin):
    __tablename__ = "sponsorship_opportunities"

    title: Mapped[str] = mapped_column(String(300), index=True)
    description: Mapped[str] = mapped_column(Text)
    benefits: Mapped[list[str]] = mapped_column(JSON, default=list)
    min_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0"))
    max_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0"))
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    status: Mapped[str] = mapped_column(String(16), default=OpportunityStatus.DRAFT.value, index=True)
    deadline: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)


class Event(Base, IdMixin, AuditMetaMixin):
    __tablename__ = "events"

    title: Mapped[str] = mapped_column(String(300))
    description: Mapped[str] = mapped_column(Text)
    event_type: Mapped[str] = mapped_column(String(64), default="GENERAL")
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    start_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), index=True)


class Announcement(Base, IdMixin, AuditMetaMixin):
    __tablename__ = "announcements"

    title: Mapped[str] = mapped_column(String(300))
    content: Mapped[str] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=AnnouncementStatus.DRAFT.value, index=True)
