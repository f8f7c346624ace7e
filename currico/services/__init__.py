from currico.services.background import BackgroundDispatcher
from currico.services.notifications import NotificationService
from currico.services.rate_limit import SlidingWindowRateLimiter
from currico.services.seller_level import SellerLevelReport, SellerLevelService
from currico.services.stats import aggregate_seller_stats
from currico.services.verification import grant_manual_verification, revoke_verification

__all__ = [
    "BackgroundDispatcher",
    "NotificationService",
    "SellerLevelReport",
    "SellerLevelService",
    "SlidingWindowRateLimiter",
    "aggregate_seller_stats",
    "grant_manual_verification",
    "revoke_verification",
]
