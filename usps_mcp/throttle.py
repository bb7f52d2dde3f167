"""Request spacing for the USPS Web Tools API.

USPS asks integrators not to hammer ShippingAPI.dll, so every outbound
request passes through a RequestThrottle that keeps request *starts* at
least ``min_interval`` seconds apart.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class RequestThrottle:
    """Serializes outbound requests behind a minimum start-to-start gap.

    The last-request instant is stamped when a caller is released, before
    its HTTP request goes out, so a slow response does not delay the next
    caller further. Read, wait and stamp all happen under one lock.

    Attributes:
        min_interval: Minimum seconds between two acquisitions.

    Example:
        throttle = RequestThrottle(min_interval=0.5)
        await throttle.acquire()
        response = await http.get(url)
    """

    def __init__(
        self,
        min_interval: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the throttle.

        Args:
            min_interval: Minimum seconds between request starts.
            clock: Monotonic time source in seconds.
            sleep: Coroutine used to wait; injectable for tests.
        """
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_request(self) -> float | None:
        """Clock reading of the most recent acquisition, if any."""
        return self._last_request

    async def acquire(self) -> None:
        """Wait until the interval since the previous request has elapsed."""
        async with self._lock:
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    logger.debug("Throttling USPS request for %.3fs", delay)
                    await self._sleep(delay)
            now = self._clock()
            if self._last_request is None or now > self._last_request:
                self._last_request = now
