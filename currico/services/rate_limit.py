"""
Currico - Sliding-window rate limiter

Per-process store keyed by "route_key:identifier". The limiter is an
explicit object created once per application and injected into handlers,
so tests get a fresh store per app instance.
"""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from currico.config import settings
from currico.errors import RateLimitExceededError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RateLimitConfig:
    limit: int
    window_seconds: float


@dataclass(frozen=True)
class RateLimitResult:
    success: bool
    limit: int
    remaining: int
    retry_after: int | None = None


def default_rate_limits() -> dict[str, RateLimitConfig]:
    return {
        "seller:level": RateLimitConfig(
            limit=settings.RATE_LIMIT_SELLER_LEVEL,
            window_seconds=settings.RATE_LIMIT_SELLER_LEVEL_WINDOW_SECONDS,
        ),
        "admin:verify-seller": RateLimitConfig(
            limit=settings.RATE_LIMIT_ADMIN_VERIFY,
            window_seconds=settings.RATE_LIMIT_ADMIN_VERIFY_WINDOW_SECONDS,
        ),
    }


class SlidingWindowRateLimiter:
    def __init__(
        self,
        configs: dict[str, RateLimitConfig] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._configs = configs if configs is not None else default_rate_limits()
        self._clock = clock
        self._store: dict[str, list[float]] = {}

    def check(self, route_key: str, identifier: str) -> RateLimitResult:
        """
        Record a request and report whether it is allowed.

        Routes without a config are never limited.
        """
        config = self._configs.get(route_key)
        if config is None:
            return RateLimitResult(success=True, limit=0, remaining=0)

        now = self._clock()
        key = f"{route_key}:{identifier}"
        window_start = now - config.window_seconds
        timestamps = [t for t in self._store.get(key, []) if t > window_start]

        if len(timestamps) >= config.limit:
            self._store[key] = timestamps
            retry_after = max(1, math.ceil(timestamps[0] + config.window_seconds - now))
            return RateLimitResult(
                success=False,
                limit=config.limit,
                remaining=0,
                retry_after=retry_after,
            )

        timestamps.append(now)
        self._store[key] = timestamps
        return RateLimitResult(
            success=True,
            limit=config.limit,
            remaining=config.limit - len(timestamps),
        )

    def hit(self, route_key: str, identifier: str) -> RateLimitResult:
        """
        Like check(), but raises when the request is over the limit.

        Raises:
            RateLimitExceededError: With the seconds until a retry is allowed.
        """
        result = self.check(route_key, identifier)
        if not result.success:
            logger.warning(
                "rate_limit_exceeded",
                route_key=route_key,
                identifier=identifier,
                limit=result.limit,
                retry_after=result.retry_after,
            )
            raise RateLimitExceededError(retry_after=result.retry_after or 1)
        return result

    def cleanup(self) -> int:
        """Drop keys whose timestamps have all expired. Returns keys removed."""
        now = self._clock()
        expired = []
        for key, timestamps in self._store.items():
            window = max(
                (c.window_seconds for k, c in self._configs.items() if key.startswith(f"{k}:")),
                default=0,
            )
            if not timestamps or timestamps[-1] <= now - window:
                expired.append(key)
        for key in expired:
            del self._store[key]
        return len(expired)

    def reset(self) -> None:
        self._store.clear()

    @property
    def tracked_keys(self) -> int:
        return len(self._store)


async def run_periodic_cleanup(
    limiter: SlidingWindowRateLimiter,
    shutdown_event: asyncio.Event,
    interval_seconds: float | None = None,
) -> None:
    """
    Sweep expired keys from the limiter until shutdown_event is set.

    Started from the application lifespan; the store otherwise keeps one key
    per identifier that ever hit a limited route.
    """
    interval = interval_seconds or settings.RATE_LIMIT_CLEANUP_INTERVAL_SECONDS
    logger.info("rate_limit_cleanup_started", interval_seconds=interval)

    try:
        while not shutdown_event.is_set():
            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                removed = limiter.cleanup()
                if removed:
                    logger.debug(
                        "rate_limit_cleanup",
                        removed=removed,
                        remaining=limiter.tracked_keys,
                    )
    finally:
        logger.info("rate_limit_cleanup_stopped")
