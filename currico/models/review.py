"""
Currico - Review Model

Star rating (1–5) left by a buyer on a resource.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import INTEGER, TIMESTAMP, CheckConstraint, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from currico.models.base import Base, utcnow


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key",
    )
    resource_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Reviewed resource",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Reviewer",
    )
    rating: Mapped[int] = mapped_column(
        INTEGER,
        nullable=False,
        comment="Star rating 1-5",
    )
    content: Mapped[str | None] = mapped_column(
        String,
        nullable=True,
        comment="Optional review text",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Review timestamp",
    )

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Review id={self.id!r} resource_id={self.resource_id!r} rating={self.rating!r}>"
