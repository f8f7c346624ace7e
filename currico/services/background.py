"""
Currico - Best-effort background dispatcher

Runs side effects (cache writes, notifications) off the request's critical
path. submit() returns immediately and never raises because of the work it
schedules: failures are logged as background_task_failed and dropped.

One dispatcher is created per application in the lifespan and drained on
shutdown so in-flight writes are not cut off.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class BackgroundDispatcher:
    """
    Tracks fire-and-forget asyncio tasks.

    Usage:
        dispatcher = BackgroundDispatcher()
        dispatcher.submit("seller_level_cache_update", write_cache(...))
        ...
        await dispatcher.drain()
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()
        self._failures = 0

    @property
    def pending(self) -> int:
        return len(self._tasks)

    @property
    def failures(self) -> int:
        """Count of tasks that raised since the dispatcher was created."""
        return self._failures

    def submit(self, name: str, work: Coroutine[Any, Any, Any]) -> None:
        """
        Schedule work on the running loop and return without awaiting it.

        Args:
            name: Event-style task name used in logs.
            work: Coroutine to run. Its result is discarded.
        """
        task = asyncio.get_running_loop().create_task(self._run(name, work), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, name: str, work: Coroutine[Any, Any, Any]) -> None:
        try:
            await work
        except Exception as exc:
            self._failures += 1
            logger.error(
                "background_task_failed",
                task=name,
                error=str(exc),
                error_type=type(exc).__name__,
            )

    async def drain(self) -> None:
        """Wait for every submitted task, including ones submitted meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
