"""Tests for verified-seller eligibility."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from currico.config import settings
from currico.engine.eligibility import account_age_days, check_verification_eligibility

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
ALL_CRITERIA = ["minSales", "minRating", "minResources", "accountAge"]


def _check(**overrides):
    args = {
        "total_sales": settings.VERIFICATION_MIN_SALES,
        "avg_rating": settings.VERIFICATION_MIN_RATING,
        "published_resource_count": settings.VERIFICATION_MIN_RESOURCES,
        "account_created_at": NOW - timedelta(days=settings.VERIFICATION_ACCOUNT_AGE_DAYS),
        "now": NOW,
    }
    args.update(overrides)
    return check_verification_eligibility(**args)


def test_exact_thresholds_are_eligible() -> None:
    """All four thresholds are inclusive floors."""
    result = _check()
    assert result.eligible is True
    assert result.failed_criteria == []
    assert result.met_count == 4


def test_nothing_met_fails_all_in_stable_order() -> None:
    result = check_verification_eligibility(0, None, 0, NOW, now=NOW)
    assert result.eligible is False
    assert result.failed_criteria == ALL_CRITERIA
    assert result.met_count == 0


def test_missing_rating_always_fails() -> None:
    result = _check(avg_rating=None)
    assert result.failed_criteria == ["minRating"]


@pytest.mark.parametrize(
    ("overrides", "failed"),
    [
        ({"total_sales": settings.VERIFICATION_MIN_SALES - 1}, ["minSales"]),
        ({"avg_rating": 3.0}, ["minRating"]),
        ({"published_resource_count": settings.VERIFICATION_MIN_RESOURCES - 1}, ["minResources"]),
        (
            {"account_created_at": NOW - timedelta(days=settings.VERIFICATION_ACCOUNT_AGE_DAYS - 1)},
            ["accountAge"],
        ),
    ],
)
def test_single_failing_criterion(overrides: dict, failed: list[str]) -> None:
    result = _check(**overrides)
    assert result.eligible is False
    assert result.failed_criteria == failed
    assert result.met_count == 3


def test_eligible_iff_no_failures_iff_all_met() -> None:
    for sales in (0, 10):
        for rating in (None, 3.0, 4.5):
            for resources in (0, 5):
                for age in (0, 30):
                    result = check_verification_eligibility(
                        sales, rating, resources, NOW - timedelta(days=age), now=NOW
                    )
                    assert result.eligible == (len(result.failed_criteria) == 0)
                    assert result.eligible == (result.met_count == 4)
                    assert result.met_count == 4 - len(result.failed_criteria)


def test_naive_created_at_is_treated_as_utc() -> None:
    naive = (NOW - timedelta(days=31)).replace(tzinfo=None)
    assert account_age_days(naive, NOW) == 31
    assert _check(account_created_at=naive).eligible is True


def test_future_created_at_counts_as_zero_days() -> None:
    assert account_age_days(NOW + timedelta(days=2), NOW) == 0
