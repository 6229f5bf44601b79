"""
Minimum-interval rate limiter for outbound model calls.

One limiter instance holds a single cursor: the time the previous
acquisition was granted. The API shares one instance across requests, so
the check, the wait and the stamp happen under a lock and concurrent
callers are granted one at a time in arrival order.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional


logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


class RateLimiter:
    """
    Enforces a minimum spacing between granted acquisitions.

    The clock and sleep functions are injectable so tests can run on a
    fake clock.
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request_time: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def last_request_time(self) -> Optional[float]:
        return self._last_request_time

    async def acquire(self) -> None:
        """Suspend until min_interval has passed since the last grant."""
        async with self._lock:
            if self._last_request_time is not None:
                elapsed = self._clock() - self._last_request_time
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    logger.debug(f"[RateLimit] Waiting {delay:.3f}s before next model call")
                    await self._sleep(delay)
            self._last_request_time = self._clock()
