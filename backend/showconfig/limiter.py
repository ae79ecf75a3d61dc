"""Bounded concurrency for TMDB requests."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


class ConcurrencyLimiter:
    """Run coroutine factories with at most ``max_concurrency`` in flight.

    One limiter is shared by every request of a run so the cap applies to the
    run as a whole rather than to a single stage.
    """

    def __init__(self, max_concurrency: int) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.max_concurrency = max_concurrency
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self.active = 0
        self.peak = 0

    async def run(self, factory: Callable[[], Awaitable[T]]) -> T:
        """Wait for a free slot, then await the coroutine built by ``factory``."""

        async with self._semaphore:
            self.active += 1
            self.peak = max(self.peak, self.active)
            try:
                return await factory()
            finally:
                self.active -= 1
