"""
Cooperative cancellation for crawl jobs.
"""

import threading


class CancellationToken:
    """Stop flag passed down the traversal and polled at each checkpoint."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """Request a stop. In-flight requests are allowed to finish."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
