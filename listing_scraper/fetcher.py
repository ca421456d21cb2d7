"""
Deduplicated, timeout-bounded fetching of listing pages.
"""

import logging
from typing import Callable, Optional, Set

import httpx

from listing_scraper.config import CrawlConfig
from listing_scraper.utils import canonical_url

logger = logging.getLogger(__name__)


def get_headers(config: CrawlConfig) -> dict:
    """Get headers for listing requests. Some servers reject unknown clients."""
    return {
        "User-Agent": config.user_agent,
        "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
    }


def create_client(
    config: CrawlConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """
    Create the HTTP client used by one crawl job.

    Args:
        config: Crawl configuration (timeout, user agent)
        transport: Optional transport override, used by tests

    Returns:
        httpx.AsyncClient; the caller owns and closes it
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout),
        follow_redirects=True,
        headers=get_headers(config),
        transport=transport,
    )


class ListingFetcher:
    """
    Fetches each URL at most once per job.

    A URL that was already fetched and a URL that failed both yield None,
    which callers treat the same way: do not descend further here.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        visited: Optional[Set[str]] = None,
        on_error: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize fetcher.

        Args:
            client: Shared async HTTP client
            visited: Set of canonical URLs already fetched in this job
            on_error: Called with a message for every failed fetch
        """
        self.client = client
        self.visited = visited if visited is not None else set()
        self.on_error = on_error
        self.requests_made = 0

    async def fetch(self, url: str) -> Optional[str]:
        """
        GET a listing page.

        Args:
            url: Absolute URL

        Returns:
            Response body, or None if already visited or the request failed
        """
        key = canonical_url(url)
        if key in self.visited:
            logger.debug(f"Already fetched, skipping: {url}")
            return None
        self.visited.add(key)

        self.requests_made += 1
        try:
            response = await self.client.get(url)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            self._report(url, f"HTTP {e.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._report(url, f"{type(e).__name__}: {e}")
        return None

    def _report(self, url: str, reason: str):
        message = f"Failed to fetch: {url} - {reason}"
        logger.warning(message)
        if self.on_error:
            self.on_error(message)
