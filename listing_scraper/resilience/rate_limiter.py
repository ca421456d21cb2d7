"""
Fixed-delay pacing for requests against the listing server.
Keeps load on third-party servers predictable: one request at a time, with
a constant pause after each unit of work.
"""

import asyncio
import time
from typing import Optional


class RateLimiter:
    """Awaits a fixed delay between units of work."""

    def __init__(self, delay_ms: int = 1000):
        """
        Initialize rate limiter.

        Args:
            delay_ms: Pause in milliseconds; values below zero are treated as zero
        """
        self.delay_seconds = max(0, delay_ms) / 1000.0
        self._last_wait: Optional[float] = None
        self._waits = 0

    async def wait(self):
        """Sleep for the configured delay."""
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        self._waits += 1
        self._last_wait = time.time()

    def get_stats(self) -> dict:
        """
        Get rate limiter statistics.

        Returns:
            Dict with current state info
        """
        return {
            'delay_ms': int(self.delay_seconds * 1000),
            'waits': self._waits,
            'last_wait': self._last_wait,
        }
