# site_mapper/crawler/rate_limiter.py
"""Smoothed request pacing shared by every crawl worker."""
from __future__ import annotations

import asyncio
import time


class RateLimiter:
    """Grants at most *rate_per_second* permits per second, spaced ``1/rate`` apart."""

    def __init__(self, rate_per_second: int) -> None:
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be > 0")
        self.rate = rate_per_second
        self.interval = 1.0 / rate_per_second
        self._lock = asyncio.Lock()
        self._last_permit_ts: float | None = None

    async def acquire(self) -> None:
        """Wait until the next permit is available."""
        async with self._lock:
            if self._last_permit_ts is not None:
                wait = self.interval - (time.monotonic() - self._last_permit_ts)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_permit_ts = time.monotonic()


__all__ = ("RateLimiter",)
