"""Initial schema: users, resources, transactions, downloads, reviews, notifications

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Creates the tables read by the seller stats aggregator and written by the
level engine (level cache + verified-seller fields on users, notifications).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    # ------------------------------------------------------------------
    # 1. users (+ level cache, verified-seller badge)
    # ------------------------------------------------------------------
    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("role", sa.String(), server_default="BUYER", nullable=False),
        sa.Column("is_protected", sa.BOOLEAN(), server_default="false", nullable=False),
        _created_at_column(),
        sa.Column("seller_level", sa.INTEGER(), server_default="0", nullable=False),
        sa.Column("seller_xp", sa.INTEGER(), server_default="0", nullable=False),
        sa.Column("is_verified_seller", sa.BOOLEAN(), server_default="false", nullable=False),
        sa.Column("verified_seller_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("verified_seller_method", sa.String(), nullable=True),
        sa.CheckConstraint(
            "(is_verified_seller AND verified_seller_method IS NOT NULL)"
            " OR (NOT is_verified_seller AND verified_seller_method IS NULL)",
            name="ck_users_verified_seller_method",
        ),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # ------------------------------------------------------------------
    # 2. resources
    # ------------------------------------------------------------------
    op.create_table(
        "resources",
        _id_column(),
        sa.Column(
            "seller_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("price", sa.INTEGER(), server_default="0", nullable=False),
        sa.Column("is_published", sa.BOOLEAN(), server_default="false", nullable=False),
        sa.Column("is_approved", sa.BOOLEAN(), server_default="false", nullable=False),
        _created_at_column(),
    )
    op.create_index("ix_resources_seller_id", "resources", ["seller_id"])

    # ------------------------------------------------------------------
    # 3. transactions (paid purchases)
    # ------------------------------------------------------------------
    op.create_table(
        "transactions",
        _id_column(),
        sa.Column(
            "resource_id",
            UUID(as_uuid=True),
            sa.ForeignKey("resources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "buyer_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("amount", sa.INTEGER(), server_default="0", nullable=False),
        sa.Column("status", sa.String(), server_default="PENDING", nullable=False),
        _created_at_column(),
    )
    op.create_index(
        "ix_transactions_resource_status", "transactions", ["resource_id", "status"]
    )

    # ------------------------------------------------------------------
    # 4. downloads (free library additions)
    # ------------------------------------------------------------------
    op.create_table(
        "downloads",
        _id_column(),
        sa.Column(
            "resource_id",
            UUID(as_uuid=True),
            sa.ForeignKey("resources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at_column(),
    )
    op.create_index("ix_downloads_resource_id", "downloads", ["resource_id"])

    # ------------------------------------------------------------------
    # 5. reviews
    # ------------------------------------------------------------------
    op.create_table(
        "reviews",
        _id_column(),
        sa.Column(
            "resource_id",
            UUID(as_uuid=True),
            sa.ForeignKey("resources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("rating", sa.INTEGER(), nullable=False),
        sa.Column("content", sa.String(), nullable=True),
        _created_at_column(),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )
    op.create_index("ix_reviews_resource_id", "reviews", ["resource_id"])

    # ------------------------------------------------------------------
    # 6. notifications
    # ------------------------------------------------------------------
    op.create_table(
        "notifications",
        _id_column(),
        sa.Column(
            "user_id",
            UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(), server_default="SYSTEM", nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("body", sa.String(), nullable=True),
        sa.Column("link", sa.String(), nullable=True),
        sa.Column("read", sa.BOOLEAN(), server_default="false", nullable=False),
        _created_at_column(),
    )
    op.create_index(
        "ix_notifications_user_created", "notifications", ["user_id", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("ix_notifications_user_created", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_reviews_resource_id", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("ix_downloads_resource_id", table_name="downloads")
    op.drop_table("downloads")
    op.drop_index("ix_transactions_resource_status", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_resources_seller_id", table_name="resources")
    op.drop_table("resources")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
