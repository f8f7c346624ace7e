"""
Currico - Seller activity snapshot

Raw counters consumed by the points calculator, the level resolver and the
verification eligibility checker. Built fresh on every request by
currico.services.stats.aggregate_seller_stats; never cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SellerStats:
    """
    Attributes:
        uploads: All resources owned by the seller.
        downloads: Completed paid transactions + free download records.
        reviews: Reviews on the seller's resources.
        avg_rating: Arithmetic mean rating, None when there are no reviews.
        total_sales: Completed paid transactions only.
        published_resources: Resources both published and approved.
        account_created_at: Seller account creation timestamp (drives the
            account-age verification criterion).
    """

    uploads: int = 0
    downloads: int = 0
    reviews: int = 0
    avg_rating: float | None = None
    total_sales: int = 0
    published_resources: int = 0
    account_created_at: datetime | None = None
