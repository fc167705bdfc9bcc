"""Minimum-interval pacing for outbound generation calls."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable


class IntervalPacer:
    """Spaces successive :meth:`wait` returns at least ``min_interval`` apart.

    The first call returns immediately.  Concurrent callers queue on an
    internal lock, so the interval holds across tasks sharing one pacer.

    Args:
        min_interval: Minimum seconds between two calls.  ``0`` disables
            pacing.
        clock: Monotonic time source.
        sleep: Coroutine used to wait.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._min_interval = max(0.0, min_interval)
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def wait(self) -> None:
        async with self._lock:
            if self._last is not None and self._min_interval > 0:
                delay = self._min_interval - (self._clock() - self._last)
                if delay > 0:
                    await self._sleep(delay)
            self._last = self._clock()
