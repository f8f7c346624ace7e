"""
Currico - User Model

Core account record. Besides identity, a seller's row carries two groups
of derived fields maintained by the level engine:

  - verification: is_verified_seller / verified_seller_at / verified_seller_method
  - level cache:  seller_level / seller_xp

The level cache is a snapshot of the last computation, used only to detect
level-ups. Every read recomputes from live counts.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    BOOLEAN,
    INTEGER,
    TIMESTAMP,
    CheckConstraint,
    String,
    Uuid,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from currico.config import UserRole
from currico.models.base import Base, utcnow


class User(Base):
    """
    Marketplace account (buyer, seller or admin).

    Invariant: verified_seller_method is set iff is_verified_seller is true.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key",
    )
    email: Mapped[str | None] = mapped_column(
        String,
        unique=True,
        nullable=True,
        comment="Login email address",
    )
    display_name: Mapped[str | None] = mapped_column(
        String,
        nullable=True,
        comment="Public name shown on materials and profile",
    )
    role: Mapped[str] = mapped_column(
        String,
        nullable=False,
        default=UserRole.BUYER.value,
        server_default=UserRole.BUYER.value,
        comment="BUYER | SELLER | ADMIN",
    )
    is_protected: Mapped[bool] = mapped_column(
        BOOLEAN,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Protected accounts cannot be modified by admin actions",
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Account creation timestamp (drives the account-age criterion)",
    )

    # --- Level cache (snapshot, never authoritative) ---
    seller_level: Mapped[int] = mapped_column(
        INTEGER,
        nullable=False,
        default=0,
        server_default="0",
        comment="Last computed seller level",
    )
    seller_xp: Mapped[int] = mapped_column(
        INTEGER,
        nullable=False,
        default=0,
        server_default="0",
        comment="Last computed seller points",
    )

    # --- Verified seller badge ---
    is_verified_seller: Mapped[bool] = mapped_column(
        BOOLEAN,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Verified seller badge",
    )
    verified_seller_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=True,
        comment="When the badge was granted",
    )
    verified_seller_method: Mapped[str | None] = mapped_column(
        String,
        nullable=True,
        comment="auto | manual; only auto grants are auto-revoked",
    )

    __table_args__ = (
        CheckConstraint(
            "(is_verified_seller AND verified_seller_method IS NOT NULL)"
            " OR (NOT is_verified_seller AND verified_seller_method IS NULL)",
            name="ck_users_verified_seller_method",
        ),
    )

    @property
    def is_seller(self) -> bool:
        return self.role == UserRole.SELLER.value

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return (
            f"<User id={self.id!r} role={self.role!r} "
            f"seller_level={self.seller_level!r} "
            f"is_verified_seller={self.is_verified_seller!r}>"
        )
