"""Process-wide crawl controller shared by all requests."""
from typing import Optional

from listing_scraper.config import CrawlConfig
from listing_scraper.crawl_controller import CrawlController

from listing_api.core.config import settings

_controller: Optional[CrawlController] = None


def get_controller() -> CrawlController:
    """Get or create the single crawl controller."""
    global _controller
    if _controller is None:
        _controller = CrawlController(CrawlConfig(delay_ms=settings.default_delay_ms))
    return _controller


def set_controller(controller: Optional[CrawlController]) -> None:
    """Replace the shared controller (used by tests)."""
    global _controller
    _controller = controller
