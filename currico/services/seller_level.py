"""
Currico - Seller Level & Verification Service

One computation per read:

1. Load the seller (precondition: exists and has the SELLER role)
2. Aggregate live stats
3. Check verified-seller eligibility and decide the verification transition
4. Compute points (with the post-transition verified bonus) and level
5. Dispatch best-effort side effects:
     - level cache write (+ level-up notification when the level rose)
     - verification write (+ "verified" notification on auto grant)
6. Return the report regardless of how the side effects fare

The persisted seller_level/seller_xp are a snapshot used only to detect
level-ups; the report is always recomputed from live counts.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from currico.config import VerificationMethod, VerificationState
from currico.engine.eligibility import EligibilityResult, check_verification_eligibility
from currico.engine.levels import LevelDefinition, LevelProgress, get_progress_to_next_level
from currico.engine.points import calculate_points, get_download_multiplier
from currico.engine.stats import SellerStats
from currico.engine.verification import (
    VerificationTransition,
    decide_verification_transition,
    resolve_verification_state,
    state_after,
)
from currico.errors import NotASellerError, UserNotFoundError
from currico.models.user import User
from currico.services.background import BackgroundDispatcher
from currico.services.notifications import NotificationService
from currico.services.stats import aggregate_seller_stats

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SellerLevelReport:
    seller_id: uuid.UUID
    points: int
    level: LevelDefinition
    stats: SellerStats
    download_multiplier: float
    progress: LevelProgress
    eligibility: EligibilityResult
    verification_state: VerificationState
    transition: VerificationTransition
    previous_level: int

    @property
    def is_verified_seller(self) -> bool:
        return self.verification_state is not VerificationState.UNVERIFIED

    @property
    def leveled_up(self) -> bool:
        return self.level.level > self.previous_level


class SellerLevelService:
    """
    Computes a seller's level and applies verification transitions.

    Dependencies are injected once at application startup.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        dispatcher: BackgroundDispatcher,
        notifications: NotificationService | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._dispatcher = dispatcher
        self._notifications = notifications or NotificationService(session_factory)

    async def _load_seller(self, user_id: uuid.UUID) -> User:
        async with self._session_factory() as session:
            user = await session.get(User, user_id)
        if user is None:
            raise UserNotFoundError()
        if not user.is_seller:
            raise NotASellerError()
        return user

    async def compute(
        self, user_id: uuid.UUID, now: datetime | None = None
    ) -> SellerLevelReport:
        """
        Compute the seller's current level report.

        Raises:
            UserNotFoundError: No user row for user_id.
            NotASellerError: User is not a seller.
            Any database error raised while aggregating.
        """
        now = now or datetime.now(timezone.utc)
        seller = await self._load_seller(user_id)
        stats = await aggregate_seller_stats(
            self._session_factory, seller.id, seller.created_at
        )

        eligibility = check_verification_eligibility(
            total_sales=stats.total_sales,
            avg_rating=stats.avg_rating,
            published_resource_count=stats.published_resources,
            account_created_at=stats.account_created_at,
            now=now,
        )
        state = resolve_verification_state(
            seller.is_verified_seller, seller.verified_seller_method
        )
        transition = decide_verification_transition(state, eligibility.eligible)
        new_state = state_after(state, transition)

        points = calculate_points(
            uploads=stats.uploads,
            downloads=stats.downloads,
            reviews=stats.reviews,
            avg_rating=stats.avg_rating,
            is_verified_seller=new_state is not VerificationState.UNVERIFIED,
        )
        progress = get_progress_to_next_level(points, stats)

        report = SellerLevelReport(
            seller_id=seller.id,
            points=points,
            level=progress.current,
            stats=stats,
            download_multiplier=get_download_multiplier(stats.avg_rating),
            progress=progress,
            eligibility=eligibility,
            verification_state=new_state,
            transition=transition,
            previous_level=seller.seller_level or 0,
        )

        logger.info(
            "seller_level_computed",
            seller_id=str(seller.id),
            points=points,
            level=report.level.level,
            previous_level=report.previous_level,
            eligible=eligibility.eligible,
            failed_criteria=eligibility.failed_criteria,
            verification_state=new_state.value,
            transition=transition.value,
        )

        self._dispatcher.submit(
            "seller_level_snapshot",
            self._persist_level_snapshot(report),
        )
        if transition is not VerificationTransition.NONE:
            self._dispatcher.submit(
                "seller_verification_transition",
                self._apply_verification_transition(seller.id, transition, now),
            )

        return report

    async def _persist_level_snapshot(self, report: SellerLevelReport) -> None:
        """
        Write the level cache, then announce a level-up if this write raised it.

        The raise is conditional on the stored level still being lower, so
        overlapping reads that both observed the old level announce it once.
        """
        level = report.level.level
        async with self._session_factory() as session:
            raised = await session.execute(
                update(User)
                .where(User.id == report.seller_id, User.seller_level < level)
                .values(seller_level=level, seller_xp=report.points)
            )
            if raised.rowcount != 1:
                # Same level or a level-down: plain cache overwrite
                await session.execute(
                    update(User)
                    .where(User.id == report.seller_id)
                    .values(seller_level=level, seller_xp=report.points)
                )
            await session.commit()

        if raised.rowcount == 1:
            logger.info(
                "seller_level_up",
                seller_id=str(report.seller_id),
                previous_level=report.previous_level,
                level=report.level.level,
                level_name=report.level.name,
            )
            await self._notifications.notify_level_up(report.seller_id, report.level)

    async def _apply_verification_transition(
        self,
        seller_id: uuid.UUID,
        transition: VerificationTransition,
        now: datetime,
    ) -> None:
        """
        Persist an automatic grant or revoke.

        Both writes are conditional on the row still being in the state the
        decision was made from, so a concurrent manual grant is never
        overwritten and a grant is announced at most once.
        """
        if transition is VerificationTransition.GRANT_AUTO:
            stmt = (
                update(User)
                .where(User.id == seller_id, User.is_verified_seller.is_(False))
                .values(
                    is_verified_seller=True,
                    verified_seller_at=now,
                    verified_seller_method=VerificationMethod.AUTO.value,
                )
            )
        else:
            stmt = (
                update(User)
                .where(
                    User.id == seller_id,
                    User.verified_seller_method == VerificationMethod.AUTO.value,
                )
                .values(
                    is_verified_seller=False,
                    verified_seller_at=None,
                    verified_seller_method=None,
                )
            )

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            await session.commit()

        if result.rowcount != 1:
            logger.info(
                "seller_verification_transition_skipped",
                seller_id=str(seller_id),
                transition=transition.value,
                reason="state changed concurrently",
            )
            return

        if transition is VerificationTransition.GRANT_AUTO:
            logger.info("seller_verification_granted", seller_id=str(seller_id), method="auto")
            await self._notifications.notify_seller_verified(seller_id)
        else:
            logger.info("seller_verification_revoked", seller_id=str(seller_id), method="auto")
