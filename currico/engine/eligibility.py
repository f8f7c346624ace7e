"""
Currico - Verified Seller Eligibility

Four independent checks, all of which must pass:
- total_sales >= VERIFICATION_MIN_SALES
- avg_rating >= VERIFICATION_MIN_RATING (no reviews always fails)
- published_resource_count >= VERIFICATION_MIN_RESOURCES
- account age in days >= VERIFICATION_ACCOUNT_AGE_DAYS
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from currico.config import VerificationCriterion, settings

TOTAL_CRITERIA = len(VerificationCriterion)


@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    failed_criteria: list[str] = field(default_factory=list)
    met_count: int = TOTAL_CRITERIA


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive timestamps; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def account_age_days(account_created_at: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed since account creation (never negative)."""
    current = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    return max(0, (current - _as_utc(account_created_at)).days)


def check_verification_eligibility(
    total_sales: int,
    avg_rating: float | None,
    published_resource_count: int,
    account_created_at: datetime,
    now: datetime | None = None,
) -> EligibilityResult:
    """
    Evaluate the verified-seller criteria.

    Args:
        total_sales: Completed paid sales across the seller's resources.
        avg_rating: Mean review rating, None when the seller has no reviews.
        published_resource_count: Published and approved resources.
        account_created_at: Account creation timestamp.
        now: Reference time (defaults to current UTC time).

    Returns:
        EligibilityResult with failed criteria in stable order.
    """
    failed: list[str] = []

    if total_sales < settings.VERIFICATION_MIN_SALES:
        failed.append(VerificationCriterion.MIN_SALES.value)

    if avg_rating is None or avg_rating < settings.VERIFICATION_MIN_RATING:
        failed.append(VerificationCriterion.MIN_RATING.value)

    if published_resource_count < settings.VERIFICATION_MIN_RESOURCES:
        failed.append(VerificationCriterion.MIN_RESOURCES.value)

    if account_age_days(account_created_at, now) < settings.VERIFICATION_ACCOUNT_AGE_DAYS:
        failed.append(VerificationCriterion.ACCOUNT_AGE.value)

    return EligibilityResult(
        eligible=not failed,
        failed_criteria=failed,
        met_count=TOTAL_CRITERIA - len(failed),
    )
