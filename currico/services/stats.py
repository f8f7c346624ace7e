"""
Currico - Seller Stats Aggregator

Counts a seller's activity from live records:

- uploads:   every resource owned by the seller
- downloads: COMPLETED transactions + free download records on those resources
- reviews:   count and mean rating of reviews on those resources

The counts are independent reads, so each runs in its own short-lived
session and they are awaited jointly. Database errors propagate; no partial
snapshot is ever returned.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import datetime
from typing import Any

import structlog
from sqlalchemy import Select, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from currico.config import TransactionStatus
from currico.engine.stats import SellerStats
from currico.models.download import Download
from currico.models.resource import Resource
from currico.models.review import Review
from currico.models.transaction import Transaction

logger = structlog.get_logger(__name__)


async def _fetch_one(
    session_factory: async_sessionmaker[AsyncSession], stmt: Select[Any]
) -> tuple[Any, ...]:
    async with session_factory() as session:
        result = await session.execute(stmt)
        return tuple(result.one())


async def aggregate_seller_stats(
    session_factory: async_sessionmaker[AsyncSession],
    seller_id: uuid.UUID,
    account_created_at: datetime | None = None,
) -> SellerStats:
    """
    Build a fresh SellerStats snapshot for one seller.

    The caller is responsible for checking that the seller exists.

    Args:
        session_factory: Factory for independent read sessions.
        seller_id: Seller whose resources are counted.
        account_created_at: Passed through to the snapshot.
    """
    owned = Resource.seller_id == seller_id

    uploads_stmt = select(func.count(Resource.id)).where(owned)
    published_stmt = select(func.count(Resource.id)).where(
        and_(owned, Resource.is_published.is_(True), Resource.is_approved.is_(True))
    )
    sales_stmt = (
        select(func.count(Transaction.id))
        .join(Resource, Resource.id == Transaction.resource_id)
        .where(owned, Transaction.status == TransactionStatus.COMPLETED.value)
    )
    free_downloads_stmt = (
        select(func.count(Download.id))
        .join(Resource, Resource.id == Download.resource_id)
        .where(owned)
    )
    reviews_stmt = (
        select(func.count(Review.id), func.avg(Review.rating))
        .join(Resource, Resource.id == Review.resource_id)
        .where(owned)
    )

    (
        (uploads,),
        (published,),
        (sales,),
        (free_downloads,),
        (review_count, avg_rating),
    ) = await asyncio.gather(
        _fetch_one(session_factory, uploads_stmt),
        _fetch_one(session_factory, published_stmt),
        _fetch_one(session_factory, sales_stmt),
        _fetch_one(session_factory, free_downloads_stmt),
        _fetch_one(session_factory, reviews_stmt),
    )

    stats = SellerStats(
        uploads=int(uploads or 0),
        downloads=int(sales or 0) + int(free_downloads or 0),
        reviews=int(review_count or 0),
        avg_rating=float(avg_rating) if review_count else None,
        total_sales=int(sales or 0),
        published_resources=int(published or 0),
        account_created_at=account_created_at,
    )

    logger.debug(
        "seller_stats_aggregated",
        seller_id=str(seller_id),
        uploads=stats.uploads,
        downloads=stats.downloads,
        reviews=stats.reviews,
        avg_rating=stats.avg_rating,
        total_sales=stats.total_sales,
        published_resources=stats.published_resources,
    )
    return stats
