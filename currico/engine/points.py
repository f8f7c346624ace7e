"""
Currico - Seller Points Calculator

Points = uploads × POINTS_PER_UPLOAD
       + downloads × POINTS_PER_DOWNLOAD × download_multiplier(avg_rating)
       + reviews × POINTS_PER_REVIEW

Verified sellers receive VERIFIED_SELLER_BONUS_PERCENT on top, rounded down.

Download multiplier steps on average rating:
    None or < 4.0 -> 1.0
    >= 4.0        -> 2.0
    >= 4.5        -> 3.0
"""

from __future__ import annotations

import math

from currico.config import settings


def get_download_multiplier(avg_rating: float | None) -> float:
    """
    Quality weighting applied to download points.

    Args:
        avg_rating: Mean review rating (1-5) or None when there are no reviews.

    Returns:
        Multiplier, never below DOWNLOAD_MULTIPLIER_BASE.
    """
    if avg_rating is not None and avg_rating >= settings.RATING_GREAT_FLOOR:
        return settings.DOWNLOAD_MULTIPLIER_GREAT
    if avg_rating is not None and avg_rating >= settings.RATING_GOOD_FLOOR:
        return settings.DOWNLOAD_MULTIPLIER_GOOD
    return settings.DOWNLOAD_MULTIPLIER_BASE


def calculate_points(
    uploads: int,
    downloads: int,
    reviews: int,
    avg_rating: float | None,
    is_verified_seller: bool = False,
) -> int:
    """
    Map raw seller activity to a single point score.

    Monotonically non-decreasing in uploads, downloads and reviews; zero
    activity yields zero points.

    Raises:
        ValueError: If any counter is negative.
    """
    if uploads < 0 or downloads < 0 or reviews < 0:
        raise ValueError("uploads, downloads and reviews must be non-negative")

    download_points = math.floor(
        downloads * settings.POINTS_PER_DOWNLOAD * get_download_multiplier(avg_rating)
    )
    base = (
        uploads * settings.POINTS_PER_UPLOAD
        + download_points
        + reviews * settings.POINTS_PER_REVIEW
    )

    if is_verified_seller:
        base += base * settings.VERIFIED_SELLER_BONUS_PERCENT // 100

    return base
