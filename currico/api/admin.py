"""
POST   /api/admin/users/{user_id}/verify-seller  - manual grant
DELETE /api/admin/users/{user_id}/verify-seller  - revoke (auto or manual)

Admin only. Protected users cannot be modified.
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from currico.api.deps import (
    get_dispatcher,
    get_notification_service,
    get_rate_limiter,
    get_session_factory,
    require_admin,
)
from currico.api.schemas import VerifiedUser, VerifySellerResponse
from currico.errors import CurricoError
from currico.models.user import User
from currico.services.background import BackgroundDispatcher
from currico.services.notifications import NotificationService
from currico.services.rate_limit import SlidingWindowRateLimiter
from currico.services.verification import grant_manual_verification, revoke_verification

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def _serialize(user: User) -> VerifiedUser:
    return VerifiedUser(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
        is_verified_seller=user.is_verified_seller,
        verified_seller_at=user.verified_seller_at,
        verified_seller_method=user.verified_seller_method,
    )


def _server_error(action: str, user_id: uuid.UUID, exc: Exception) -> JSONResponse:
    logger.error(
        "admin_verify_seller_failed",
        action=action,
        user_id=str(user_id),
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Interner Serverfehler", "code": "INTERNAL_ERROR"},
    )


@router.post("/users/{user_id}/verify-seller", response_model=VerifySellerResponse)
async def verify_seller(
    user_id: uuid.UUID,
    admin_id: uuid.UUID = Depends(require_admin),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    dispatcher: BackgroundDispatcher = Depends(get_dispatcher),
    notifications: NotificationService = Depends(get_notification_service),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
):
    rate_limiter.hit("admin:verify-seller", str(admin_id))

    try:
        async with session_factory() as session:
            user = await grant_manual_verification(session, user_id, admin_id=admin_id)
    except CurricoError:
        raise
    except Exception as exc:
        return _server_error("grant", user_id, exc)

    dispatcher.submit(
        "manual_verification_notification",
        notifications.notify_manual_verification(user_id),
    )
    return VerifySellerResponse(
        message="Verkäufer-Verifizierung erfolgreich",
        user=_serialize(user),
    )


@router.delete("/users/{user_id}/verify-seller", response_model=VerifySellerResponse)
async def unverify_seller(
    user_id: uuid.UUID,
    admin_id: uuid.UUID = Depends(require_admin),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
):
    rate_limiter.hit("admin:verify-seller", str(admin_id))

    try:
        async with session_factory() as session:
            user = await revoke_verification(session, user_id, admin_id=admin_id)
    except CurricoError:
        raise
    except Exception as exc:
        return _server_error("revoke", user_id, exc)

    return VerifySellerResponse(
        message="Verkäufer-Verifizierung entfernt",
        user=_serialize(user),
    )
