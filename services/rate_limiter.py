"""Minimum-interval throttle for outbound provider requests."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger("address_verifier.rate_limit")


class RateLimiter:
    """Space consecutive requests at least *min_interval* seconds apart.

    One instance is shared by every request a service instance makes.
    Overlapping callers queue on a lock, so concurrent requests are spaced
    out too.  Safe on a single event loop but not across threads.

    *clock* and *sleep* default to :func:`time.monotonic` and
    :func:`asyncio.sleep`.
    """

    def __init__(
        self,
        min_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: Optional[float] = None
        self._lock = asyncio.Lock()

    async def wait(self) -> float:
        """Sleep until the interval has elapsed; return the seconds waited."""
        async with self._lock:
            waited = 0.0
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    logger.debug("Rate limiting: waiting %.0fms", waited * 1000)
                    await self._sleep(waited)
            self._last_request = self._clock()
            return waited
