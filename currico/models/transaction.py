"""
Currico - Transaction Model

Paid purchase of a resource. Only COMPLETED transactions count as sales
and downloads for the seller.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import INTEGER, TIMESTAMP, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from currico.config import TransactionStatus
from currico.models.base import Base, utcnow


class Transaction(Base):
    """Purchase record written by the payment webhook."""

    __tablename__ = "transactions"

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
        comment="Purchased resource",
    )
    buyer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="Buyer (nullable for guest checkout)",
    )
    amount: Mapped[int] = mapped_column(
        INTEGER,
        nullable=False,
        default=0,
        server_default="0",
        comment="Amount paid in Rappen",
    )
    status: Mapped[str] = mapped_column(
        String,
        nullable=False,
        default=TransactionStatus.PENDING.value,
        server_default=TransactionStatus.PENDING.value,
        comment="PENDING | COMPLETED | FAILED | REFUNDED",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Checkout timestamp",
    )

    __table_args__ = (
        Index("ix_transactions_resource_status", "resource_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction id={self.id!r} resource_id={self.resource_id!r} "
            f"status={self.status!r}>"
        )
