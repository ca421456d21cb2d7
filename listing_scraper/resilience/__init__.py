"""
Resilience components for the directory-listing scraper.
"""

from .cancellation import CancellationToken
from .progress_tracker import ProgressTracker
from .rate_limiter import RateLimiter

__all__ = [
    'CancellationToken',
    'ProgressTracker',
    'RateLimiter',
]
