"""
Currico - Database Setup

Async SQLAlchemy engine and session factory. The DATABASE_URL is read from
settings (env variable DATABASE_URL); asyncpg in production, aiosqlite in
tests.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from currico.config import settings

logger = structlog.get_logger(__name__)


def create_db_engine(
    database_url: str | None = None,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """
    Create SQLAlchemy async engine and session factory.

    Args:
        database_url: Override for settings.DATABASE_URL.

    Returns:
        (engine, session_factory) tuple.
    """
    url = database_url or settings.DATABASE_URL
    logger.info("database_engine_initializing", database_url=_redact(url))

    engine_kwargs: dict[str, Any] = {"echo": False, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        engine_kwargs.update(pool_size=5, max_overflow=10)

    engine = create_async_engine(url, **engine_kwargs)
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    logger.info("database_engine_ready")
    return engine, session_factory


async def check_database(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Health check: raises if the database is unreachable."""
    async with session_factory() as session:
        await session.execute(text("SELECT 1"))


def _redact(url: str) -> str:
    # Strip credentials before logging
    if "@" not in url:
        return url
    scheme, _, rest = url.partition("://")
    return f"{scheme}://***@{rest.split('@', 1)[1]}"
