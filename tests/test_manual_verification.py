"""Tests for admin grant / revoke of the verified-seller badge."""

from __future__ import annotations

import uuid

import pytest

from currico.config import VerificationState
from currico.engine.verification import VerificationTransition
from currico.errors import ProtectedUserError, UserNotFoundError
from currico.services.verification import grant_manual_verification, revoke_verification


@pytest.mark.asyncio
class TestGrantManualVerification:
    async def test_grant_sets_manual_method(self, session_factory, seed) -> None:
        seller_id = await seed.user()

        async with session_factory() as session:
            user = await grant_manual_verification(session, seller_id)

        assert user.is_verified_seller is True
        assert user.verified_seller_method == "manual"
        assert user.verified_seller_at is not None

        stored = await seed.get_user(seller_id)
        assert stored.verified_seller_method == "manual"

    async def test_grant_replaces_auto_method(self, session_factory, seed) -> None:
        seller_id = await seed.user(is_verified_seller=True, verified_seller_method="auto")

        async with session_factory() as session:
            await grant_manual_verification(session, seller_id)

        stored = await seed.get_user(seller_id)
        assert stored.verified_seller_method == "manual"

    async def test_unknown_user(self, session_factory) -> None:
        async with session_factory() as session:
            with pytest.raises(UserNotFoundError):
                await grant_manual_verification(session, uuid.uuid4())

    async def test_protected_user_is_not_modified(self, session_factory, seed) -> None:
        seller_id = await seed.user(is_protected=True)

        async with session_factory() as session:
            with pytest.raises(ProtectedUserError):
                await grant_manual_verification(session, seller_id)

        stored = await seed.get_user(seller_id)
        assert stored.is_verified_seller is False


@pytest.mark.asyncio
class TestRevokeVerification:
    @pytest.mark.parametrize("method", ["auto", "manual"])
    async def test_revoke_clears_any_method(self, session_factory, seed, method: str) -> None:
        seller_id = await seed.user(is_verified_seller=True, verified_seller_method=method)

        async with session_factory() as session:
            user = await revoke_verification(session, seller_id)

        assert user.is_verified_seller is False
        assert user.verified_seller_method is None
        assert user.verified_seller_at is None

    async def test_revoke_unknown_user(self, session_factory) -> None:
        async with session_factory() as session:
            with pytest.raises(UserNotFoundError):
                await revoke_verification(session, uuid.uuid4())

    async def test_revoke_protected_user(self, session_factory, seed) -> None:
        seller_id = await seed.user(
            is_protected=True, is_verified_seller=True, verified_seller_method="manual"
        )
        async with session_factory() as session:
            with pytest.raises(ProtectedUserError):
                await revoke_verification(session, seller_id)


@pytest.mark.asyncio
class TestInteractionWithLevelEngine:
    async def test_manual_grant_survives_ineligible_reads(
        self, session_factory, level_service, dispatcher, seed
    ) -> None:
        seller_id = await seed.user()
        async with session_factory() as session:
            await grant_manual_verification(session, seller_id)

        for _ in range(2):
            report = await level_service.compute(seller_id)
            await dispatcher.drain()
            assert report.verification_state is VerificationState.VERIFIED_MANUAL
            assert report.transition is VerificationTransition.NONE

    async def test_manually_granted_seller_earns_verified_bonus(
        self, session_factory, level_service, dispatcher, seed
    ) -> None:
        seller_id = await seed.user()
        await seed.resources(seller_id, 10)
        async with session_factory() as session:
            await grant_manual_verification(session, seller_id)

        report = await level_service.compute(seller_id)
        await dispatcher.drain()

        # 100 base points + 10%
        assert report.points == 110

    async def test_revoked_eligible_seller_is_auto_verified_again(
        self, session_factory, level_service, dispatcher, seed, eligible_seller
    ) -> None:
        async with session_factory() as session:
            await grant_manual_verification(session, eligible_seller)
        async with session_factory() as session:
            await revoke_verification(session, eligible_seller)

        report = await level_service.compute(eligible_seller)
        await dispatcher.drain()

        assert report.transition is VerificationTransition.GRANT_AUTO
        stored = await seed.get_user(eligible_seller)
        assert stored.verified_seller_method == "auto"
