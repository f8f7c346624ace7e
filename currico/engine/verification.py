"""
Currico - Verified Seller State Machine

States: unverified, verified_auto, verified_manual.

    unverified     + eligible     -> GRANT_AUTO
    verified_auto  + not eligible -> REVOKE_AUTO
    verified_manual               -> never changed automatically

Everything else is a no-op. This module only decides; applying the
transition (persistence, notification) happens in
currico.services.seller_level.
"""

from __future__ import annotations

from enum import Enum

from currico.config import VerificationMethod, VerificationState


class VerificationTransition(str, Enum):
    NONE = "none"
    GRANT_AUTO = "grant_auto"
    REVOKE_AUTO = "revoke_auto"


def resolve_verification_state(
    is_verified_seller: bool, verified_seller_method: str | None
) -> VerificationState:
    """
    Map the persisted verification fields to a state.

    A verified row without a method predates method tracking and is treated
    as manual so it is never auto-revoked.
    """
    if not is_verified_seller:
        return VerificationState.UNVERIFIED
    if verified_seller_method == VerificationMethod.AUTO.value:
        return VerificationState.VERIFIED_AUTO
    return VerificationState.VERIFIED_MANUAL


def decide_verification_transition(
    state: VerificationState, eligible: bool
) -> VerificationTransition:
    if state is VerificationState.UNVERIFIED and eligible:
        return VerificationTransition.GRANT_AUTO
    if state is VerificationState.VERIFIED_AUTO and not eligible:
        return VerificationTransition.REVOKE_AUTO
    return VerificationTransition.NONE


def state_after(
    state: VerificationState, transition: VerificationTransition
) -> VerificationState:
    """State the seller ends up in once the transition is applied."""
    if transition is VerificationTransition.GRANT_AUTO:
        return VerificationState.VERIFIED_AUTO
    if transition is VerificationTransition.REVOKE_AUTO:
        return VerificationState.UNVERIFIED
    return state
