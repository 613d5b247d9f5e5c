from __future__ import annotations

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin, StartupScopedMixin


class Document(Base, IdMixin, StartupScopedMixin, AuditMetaMixin):
    __tablename__ = "documents"

    name: Mapped[str] = mapped_column(String(300))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_type: Mapped[str] = mapped_column(String(200), default="application/octet-stream")
    size_bytes: Mapped[int] = mapped_column(BigInteger, default=0)
    url: Mapped[str] = mapped_column(String(1000))
    uploaded_by: Mapped[str] = mapped_column(String(200), index=True)
