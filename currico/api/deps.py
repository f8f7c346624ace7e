"""
Currico - FastAPI dependencies

Application-scoped services live on app.state (created in the lifespan)
and are handed to routes through these dependencies.

Authentication itself happens upstream: the gateway forwards the session's
user id in settings.AUTH_USER_HEADER.
"""

from __future__ import annotations

import uuid

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from currico.config import settings
from currico.errors import NotAnAdminError, NotAuthenticatedError
from currico.models.user import User
from currico.services.background import BackgroundDispatcher
from currico.services.notifications import NotificationService
from currico.services.rate_limit import SlidingWindowRateLimiter
from currico.services.seller_level import SellerLevelService


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_factory


def get_dispatcher(request: Request) -> BackgroundDispatcher:
    return request.app.state.dispatcher


def get_rate_limiter(request: Request) -> SlidingWindowRateLimiter:
    return request.app.state.rate_limiter


def get_notification_service(request: Request) -> NotificationService:
    return request.app.state.notification_service


def get_seller_level_service(request: Request) -> SellerLevelService:
    return request.app.state.seller_level_service


async def get_current_user_id(request: Request) -> uuid.UUID:
    raw = request.headers.get(settings.AUTH_USER_HEADER)
    if not raw:
        raise NotAuthenticatedError()
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise NotAuthenticatedError() from None


async def require_admin(
    user_id: uuid.UUID = Depends(get_current_user_id),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> uuid.UUID:
    async with session_factory() as session:
        user = await session.get(User, user_id)
    if user is None or not user.is_admin:
        raise NotAnAdminError()
    return user_id
