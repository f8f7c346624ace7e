"""
Currico - Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- File-backed aiosqlite database per test (independent connections, so the
  stats aggregator can run its counts concurrently)
- Background dispatcher and level service wired to that database
- Seeder for users, resources, sales, free downloads and reviews
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from currico.config import TransactionStatus, UserRole
from currico.models import Base, Download, Notification, Resource, Review, Transaction, User
from currico.services.background import BackgroundDispatcher
from currico.services.notifications import NotificationService
from currico.services.seller_level import SellerLevelService


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def session_factory(
    tmp_path: Path,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh SQLite database file for each test, all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'currico.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory

    await engine.dispose()


@pytest.fixture
def dispatcher() -> BackgroundDispatcher:
    return BackgroundDispatcher()


@pytest.fixture
def level_service(
    session_factory: async_sessionmaker[AsyncSession], dispatcher: BackgroundDispatcher
) -> SellerLevelService:
    return SellerLevelService(session_factory, dispatcher, NotificationService(session_factory))


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


class Seeder:
    """Inserts marketplace records for a seller."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def user(
        self,
        role: UserRole = UserRole.SELLER,
        account_age_days: int = 0,
        **fields,
    ) -> uuid.UUID:
        created_at = datetime.now(timezone.utc) - timedelta(days=account_age_days)
        user = User(role=role.value, created_at=created_at, **fields)
        async with self._session_factory() as session:
            session.add(user)
            await session.commit()
        return user.id

    async def resources(
        self, seller_id: uuid.UUID, count: int, published: bool = True
    ) -> list[uuid.UUID]:
        items = [
            Resource(
                seller_id=seller_id,
                title=f"Arbeitsblatt {i}",
                is_published=published,
                is_approved=published,
            )
            for i in range(count)
        ]
        async with self._session_factory() as session:
            session.add_all(items)
            await session.commit()
        return [r.id for r in items]

    async def _buyer(self) -> uuid.UUID:
        return await self.user(role=UserRole.BUYER)

    async def sales(
        self,
        resource_id: uuid.UUID,
        count: int,
        status: TransactionStatus = TransactionStatus.COMPLETED,
    ) -> None:
        buyer_id = await self._buyer()
        async with self._session_factory() as session:
            session.add_all(
                Transaction(resource_id=resource_id, buyer_id=buyer_id, amount=500, status=status.value)
                for _ in range(count)
            )
            await session.commit()

    async def free_downloads(self, resource_id: uuid.UUID, count: int) -> None:
        buyer_id = await self._buyer()
        async with self._session_factory() as session:
            session.add_all(
                Download(resource_id=resource_id, user_id=buyer_id) for _ in range(count)
            )
            await session.commit()

    async def reviews(self, resource_id: uuid.UUID, ratings: list[int]) -> None:
        buyer_id = await self._buyer()
        async with self._session_factory() as session:
            session.add_all(
                Review(resource_id=resource_id, user_id=buyer_id, rating=rating)
                for rating in ratings
            )
            await session.commit()

    async def get_user(self, user_id: uuid.UUID) -> User:
        async with self._session_factory() as session:
            user = await session.get(User, user_id)
        assert user is not None
        return user

    async def notifications(self, user_id: uuid.UUID) -> list[Notification]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(Notification)
                .where(Notification.user_id == user_id)
                .order_by(Notification.created_at)
            )
            return list(result.scalars())

    async def notification_count(self, user_id: uuid.UUID) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count(Notification.id)).where(Notification.user_id == user_id)
            )
            return result.scalar_one()


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]) -> Seeder:
    return Seeder(session_factory)


@pytest_asyncio.fixture
async def eligible_seller(seed: Seeder) -> uuid.UUID:
    """
    15 published uploads, 30 sales + 20 free downloads, 12 reviews averaging
    4.83, account 40 days old, not yet verified.
    """
    seller_id = await seed.user(account_age_days=40)
    resource_ids = await seed.resources(seller_id, 15)
    await seed.sales(resource_ids[0], 30)
    await seed.free_downloads(resource_ids[1], 20)
    await seed.reviews(resource_ids[0], [5] * 10 + [4] * 2)
    return seller_id
