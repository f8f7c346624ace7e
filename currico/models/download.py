"""
Currico - Download Model

Record of a free resource being added to a user's library. Paid downloads
are tracked as transactions instead.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import TIMESTAMP, ForeignKey, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from currico.models.base import Base, utcnow


class Download(Base):
    __tablename__ = "downloads"

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
        comment="Downloaded resource",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Downloading user",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Download timestamp",
    )

    def __repr__(self) -> str:
        return f"<Download id={self.id!r} resource_id={self.resource_id!r}>"
