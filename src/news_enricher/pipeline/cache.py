"""Single-slot result cache with a single-flight guard.

One :class:`ResultCache` is owned by the serving layer.  It stores the last
successful pipeline payload together with the time its run *started*, and an
in-flight flag that allows at most one run at a time.  Every mutation goes
through one :class:`asyncio.Lock`.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable

from news_enricher.core.schemas import NewsPayload


class ResultCache:
    """TTL-bounded cache slot for :class:`NewsPayload`.

    Args:
        ttl_seconds: Age after which the stored payload is stale.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        self._payload: NewsPayload | None = None
        self._timestamp: float | None = None
        self._in_flight = False
        self._run_started_at: float | None = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    async def get(self) -> NewsPayload | None:
        """Return the stored payload if it is still fresh, else ``None``."""
        async with self._lock:
            if self._payload is None or self._timestamp is None:
                return None
            if self._clock() - self._timestamp >= self._ttl:
                return None
            return self._payload

    async def begin_run(self) -> bool:
        """Claim the in-flight flag.

        Returns:
            ``True`` if the caller now owns the run, ``False`` if another run
            is already in flight.
        """
        async with self._lock:
            if self._in_flight:
                return False
            self._in_flight = True
            self._run_started_at = self._clock()
            return True

    async def complete_run(self, payload: NewsPayload) -> None:
        """Store *payload*, stamped with the run's start time, and release the flag."""
        async with self._lock:
            self._payload = payload
            self._timestamp = (
                self._run_started_at if self._run_started_at is not None else self._clock()
            )
            self._in_flight = False
            self._run_started_at = None

    async def abort_run(self) -> None:
        """Release the flag without touching the stored payload."""
        async with self._lock:
            self._in_flight = False
            self._run_started_at = None

    def is_in_flight(self) -> bool:
        return self._in_flight
