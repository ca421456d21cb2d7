"""
Configuration dataclasses for the directory-listing scraper.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

VIDEO_EXTENSIONS: Tuple[str, ...] = (
    'mp4', 'avi', 'mkv', 'mov', 'wmv', 'flv', 'm4v', 'webm', 'mpg', 'mpeg'
)

MODE_MOVIES = "movies"
MODE_SERIES = "series"
VALID_MODES = (MODE_MOVIES, MODE_SERIES)


@dataclass
class CrawlConfig:
    """Static settings shared by every crawl job."""
    # Pacing
    delay_ms: int = 1000

    # HTTP
    timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT

    # Traversal
    max_depth: int = 10
    video_extensions: Tuple[str, ...] = VIDEO_EXTENSIONS

    # Initial guess for the progress percentage while the real total is unknown
    progress_estimate: int = 100


@dataclass
class CrawlOptions:
    """Per-job options supplied by the operator when a crawl is started."""
    root_url: str
    mode: str = MODE_MOVIES
    # None falls back to CrawlConfig.delay_ms
    delay_ms: Optional[int] = 1000
    max_depth: int = 10
