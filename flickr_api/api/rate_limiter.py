"""
Provides a rate limiter that spaces outbound calls to stay within the Flickr
quota of 3600 requests per hour.
"""

import asyncio
import logging
import time
from typing import Optional

log = logging.getLogger(__name__)


class RateLimiter:
    """
    Admits one call per `min_interval` seconds, with no bursts.

    The wait happens while the lock is held, so concurrent callers are admitted
    strictly one after another at the configured cadence. The lock belongs to
    the event loop currently driving the limiter; a limiter reused from a later
    `asyncio.run()` gets a fresh lock and keeps its last admission time.
    """

    def __init__(self, min_interval: float = 1.0):
        """
        Args:
            min_interval: Minimum number of seconds between two admissions.
        """
        self.min_interval = min_interval
        self._last_call_time: Optional[float] = None
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def last_admitted(self) -> Optional[float]:
        """Monotonic timestamp of the most recent admission, if any."""
        return self._last_call_time

    def _loop_lock(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def acquire(self) -> None:
        """
        Waits if necessary to respect the minimum interval before allowing a
        call to proceed.
        """
        async with self._loop_lock():
            if self._last_call_time is not None:
                remaining = self.min_interval - (
                    time.monotonic() - self._last_call_time
                )
                if remaining > 0:
                    log.debug(f"Rate limiter delaying call by {remaining:.3f}s")
                # The event loop clock may wake us marginally early.
                while remaining > 0:
                    await asyncio.sleep(remaining)
                    remaining = self.min_interval - (
                        time.monotonic() - self._last_call_time
                    )

            self._last_call_time = time.monotonic()
