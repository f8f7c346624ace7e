"""
Currico - Resource Model

A teaching material uploaded by a seller. Every resource counts as an
upload; only published and approved ones count toward verification.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BOOLEAN, INTEGER, TIMESTAMP, ForeignKey, String, Uuid, false, func
from sqlalchemy.orm import Mapped, mapped_column

from currico.models.base import Base, utcnow


class Resource(Base):
    """Teaching material listed on the marketplace."""

    __tablename__ = "resources"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key",
    )
    seller_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning seller",
    )
    title: Mapped[str] = mapped_column(
        String,
        nullable=False,
        comment="Material title",
    )
    price: Mapped[int] = mapped_column(
        INTEGER,
        nullable=False,
        default=0,
        server_default="0",
        comment="Price in Rappen (0 = free download)",
    )
    is_published: Mapped[bool] = mapped_column(
        BOOLEAN,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Seller has published the material",
    )
    is_approved: Mapped[bool] = mapped_column(
        BOOLEAN,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Moderation approved the material",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Upload timestamp",
    )

    def __repr__(self) -> str:
        return (
            f"<Resource id={self.id!r} seller_id={self.seller_id!r} "
            f"is_published={self.is_published!r}>"
        )
