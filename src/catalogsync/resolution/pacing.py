"""Rate-limit governor spacing outbound metadata fetches."""

from __future__ import annotations

import asyncio
import logging
import time

from catalogsync.resolution.base import ClockFunc, SleepFunc, default_sleep

logger = logging.getLogger(__name__)


class RateLimitGovernor:
    """
    Enforces a minimum interval between successive paced calls.

    The only state is the time of the last paced call. One instance is
    shared by every aggregation pass of a client so that back-to-back
    passes do not burst the metadata gateway.
    """

    def __init__(
        self,
        interval: float = 0.5,
        *,
        clock: ClockFunc = time.monotonic,
        sleep: SleepFunc = default_sleep,
    ) -> None:
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_call(self) -> float | None:
        """Clock reading of the most recent paced call."""
        return self._last_call

    def wait_time(self) -> float:
        """Seconds the next pace() call would wait right now."""
        if self._last_call is None:
            return 0.0
        return max(0.0, self._last_call + self.interval - self._clock())

    async def pace(self) -> float:
        """
        Wait until the interval since the previous paced call has elapsed.

        Returns:
            Seconds spent waiting
        """
        async with self._lock:
            wait = self.wait_time()
            if wait > 0:
                logger.debug(f"Pacing metadata fetch for {wait:.3f}s")
                await self._sleep(wait)
            self._last_call = self._clock()
            return wait
