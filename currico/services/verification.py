"""
Currico - Administrative seller verification

Manual grant and revoke of the verified-seller badge. A manual grant replaces
an automatic one and is never revoked by the level engine; only revoke()
removes it.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from currico.config import VerificationMethod
from currico.errors import ProtectedUserError, UserNotFoundError
from currico.models.user import User

logger = structlog.get_logger(__name__)


async def _load_modifiable_user(session: AsyncSession, user_id: uuid.UUID) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise UserNotFoundError()
    if user.is_protected:
        raise ProtectedUserError()
    return user


async def grant_manual_verification(
    session: AsyncSession,
    user_id: uuid.UUID,
    admin_id: uuid.UUID | None = None,
) -> User:
    """
    Mark a user as a manually verified seller and commit.

    Raises:
        UserNotFoundError: Unknown user.
        ProtectedUserError: User is protected against admin changes.
    """
    user = await _load_modifiable_user(session, user_id)
    previous_method = user.verified_seller_method

    user.is_verified_seller = True
    user.verified_seller_at = datetime.now(timezone.utc)
    user.verified_seller_method = VerificationMethod.MANUAL.value
    await session.commit()

    logger.info(
        "seller_verification_granted",
        seller_id=str(user_id),
        method=VerificationMethod.MANUAL.value,
        previous_method=previous_method,
        admin_id=str(admin_id) if admin_id else None,
    )
    return user


async def revoke_verification(
    session: AsyncSession,
    user_id: uuid.UUID,
    admin_id: uuid.UUID | None = None,
) -> User:
    """
    Remove the verified-seller badge regardless of how it was granted.

    Raises:
        UserNotFoundError: Unknown user.
        ProtectedUserError: User is protected against admin changes.
    """
    user = await _load_modifiable_user(session, user_id)
    previous_method = user.verified_seller_method

    user.is_verified_seller = False
    user.verified_seller_at = None
    user.verified_seller_method = None
    await session.commit()

    logger.info(
        "seller_verification_revoked",
        seller_id=str(user_id),
        method="admin",
        previous_method=previous_method,
        admin_id=str(admin_id) if admin_id else None,
    )
    return user
