from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from startupcall.core.db.base import AuditMetaMixin, Base, IdMixin, StartupScopedMixin


class Comment(Base, IdMixin, StartupScopedMixin, AuditMetaMixin):
    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text)
    author_actor_id: Mapped[str] = mapped_column(String(200), index=True)
    # Only one level of replies: a parent is always a root comment.
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True
    )

    # Replies go with their root via ON DELETE CASCADE when the startup is removed.
    __mapper_args__ = {"confirm_deleted_rows": False}
