"""
Currico - Notification Model

In-app notification shown in the user's account. Email delivery for opted-in
users is handled by the mail worker reading this table.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BOOLEAN, TIMESTAMP, ForeignKey, Index, String, Uuid, false, func
from sqlalchemy.orm import Mapped, mapped_column

from currico.config import NotificationType
from currico.models.base import Base, utcnow


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Recipient",
    )
    type: Mapped[str] = mapped_column(
        String,
        nullable=False,
        default=NotificationType.SYSTEM.value,
        server_default=NotificationType.SYSTEM.value,
        comment="SALE | FOLLOW | REVIEW | COMMENT | SYSTEM",
    )
    title: Mapped[str] = mapped_column(
        String,
        nullable=False,
        comment="Headline",
    )
    body: Mapped[str | None] = mapped_column(
        String,
        nullable=True,
        comment="Message text",
    )
    link: Mapped[str | None] = mapped_column(
        String,
        nullable=True,
        comment="In-app link target",
    )
    read: Mapped[bool] = mapped_column(
        BOOLEAN,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Marked as read by the recipient",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Creation timestamp",
    )

    __table_args__ = (
        Index("ix_notifications_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Notification id={self.id!r} user_id={self.user_id!r} title={self.title!r}>"
