from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Awaitable, Callable
from typing import Protocol

from loguru import logger

# Strava allows 100 requests every 15 minutes: one request per 9 seconds.
# See https://developers.strava.com/docs/rate-limits/.
STRAVA_REQUEST_INTERVAL_SECONDS = 15 * 60 / 100


class RateLimiter(Protocol):
    """Anything that can hand out request slots.

    acquire() blocks until the next request may be sent. It must stay
    cancellable: a cancelled or timed-out wait raises instead of sending.
    """

    async def acquire(self) -> None: ...


class NoopRateLimiter:
    """Rate limiter that never waits. Used by tests and local mocks."""

    async def acquire(self) -> None:
        return None


class IntervalRateLimiter:
    """Token bucket with capacity 1 refilled every `interval` seconds.

    Slots are reserved under a threading lock, so one instance can be shared by
    several clients (and several event loops) in the same process. The first
    acquisition never waits.
    """

    def __init__(
        self,
        interval: float = STRAVA_REQUEST_INTERVAL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_slot: float | None = None

    def _reserve(self) -> tuple[float, float]:
        with self._lock:
            now = self._clock()
            slot = now if self._next_slot is None else max(now, self._next_slot)
            self._next_slot = slot + self.interval
        return slot, slot - now

    def _release(self, slot: float) -> None:
        with self._lock:
            # Only hand the slot back if nobody queued behind it.
            if self._next_slot == slot + self.interval:
                self._next_slot = slot

    async def acquire(self) -> None:
        slot, delay = self._reserve()
        if delay <= 0:
            return

        logger.debug(f"[RATE_LIMIT] Waiting {delay:.2f}s for next Strava request slot")
        try:
            await self._sleep(delay)
        except asyncio.CancelledError:
            self._release(slot)
            raise


default_rate_limiter = IntervalRateLimiter()
