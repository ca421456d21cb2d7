"""
Job control for the directory-listing scraper.
Owns the single process-wide crawl: start, stop, status and export.
"""

import asyncio
import logging
from typing import Optional

import httpx

from listing_scraper.config import CrawlConfig, CrawlOptions, MODE_MOVIES, MODE_SERIES, VALID_MODES
from listing_scraper.crawlers import MovieCrawler, SeriesCrawler
from listing_scraper.exporter import export_to_bytes
from listing_scraper.fetcher import ListingFetcher, create_client
from listing_scraper.models import StartResult
from listing_scraper.resilience import CancellationToken, ProgressTracker, RateLimiter
from listing_scraper.utils import normalize_root_url

logger = logging.getLogger(__name__)

REASON_ALREADY_RUNNING = "already-running"
REASON_INVALID_URL = "invalid-url"
REASON_INVALID_MODE = "invalid-mode"


class CrawlController:
    """Main orchestrator that coordinates fetcher, crawler and job state."""

    def __init__(
        self,
        config: Optional[CrawlConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize controller with configuration.

        Args:
            config: CrawlConfig instance, uses defaults if None
            transport: Optional httpx transport (tests serve listings from memory)
        """
        self.config = config or CrawlConfig()
        self.tracker = ProgressTracker(progress_estimate=self.config.progress_estimate)
        self._transport = transport
        self._token: Optional[CancellationToken] = None
        self._task: Optional[asyncio.Task] = None
        self._limiter: Optional[RateLimiter] = None
        self._fetcher: Optional[ListingFetcher] = None

    @property
    def is_running(self) -> bool:
        return self.tracker.is_running

    def _prepare(self, options: CrawlOptions) -> StartResult:
        """Validate options and reset job state. Synchronous, so a second start is rejected immediately."""
        if self.tracker.is_running:
            return StartResult(accepted=False, reason=REASON_ALREADY_RUNNING)

        root_url = normalize_root_url(options.root_url)
        if root_url is None:
            return StartResult(accepted=False, reason=REASON_INVALID_URL)

        mode = options.mode or MODE_MOVIES
        if mode not in VALID_MODES:
            return StartResult(accepted=False, reason=REASON_INVALID_MODE)

        options.root_url = root_url
        options.mode = mode
        delay_ms = self.config.delay_ms if options.delay_ms is None else options.delay_ms
        options.delay_ms = max(0, int(delay_ms))

        self._token = CancellationToken()
        self.tracker.reset(root_url=root_url, mode=mode, delay_ms=options.delay_ms)
        logger.info(f"Starting {mode} crawl of {root_url} (delay {options.delay_ms}ms)")
        return StartResult(accepted=True)

    def start(self, options: CrawlOptions) -> StartResult:
        """
        Start a crawl in the background on the running event loop.

        Args:
            options: Root URL, mode, delay and depth limit

        Returns:
            StartResult; rejected with "already-running" or "invalid-url"
        """
        result = self._prepare(options)
        if result.accepted:
            self._task = asyncio.get_running_loop().create_task(
                self._run_job(options, self._token)
            )
        return result

    async def run(self, options: CrawlOptions) -> StartResult:
        """
        Start a crawl and wait for it to finish (CLI entry point).

        Returns:
            StartResult of the start request
        """
        result = self._prepare(options)
        if result.accepted:
            await self._run_job(options, self._token)
        return result

    async def wait(self):
        """Wait for the background job, if any, to finish."""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def _run_job(self, options: CrawlOptions, token: CancellationToken):
        self._limiter = RateLimiter(delay_ms=options.delay_ms)
        try:
            async with create_client(self.config, self._transport) as client:
                self._fetcher = ListingFetcher(
                    client,
                    visited=self.tracker.visited,
                    on_error=self.tracker.record_fetch_error,
                )
                crawler_cls = SeriesCrawler if options.mode == MODE_SERIES else MovieCrawler
                crawler = crawler_cls(
                    fetcher=self._fetcher,
                    tracker=self.tracker,
                    limiter=self._limiter,
                    token=token,
                    root_url=options.root_url,
                    config=self.config,
                    max_depth=options.max_depth,
                )
                await crawler.run()
        except asyncio.CancelledError:
            self.tracker.mark_error("Crawl task cancelled")
            raise
        except Exception as e:
            logger.exception(f"Crawl failed: {e}")
            self.tracker.mark_error(str(e))
            return

        self.tracker.mark_complete()
        stats = self.tracker.get_stats()
        logger.info(
            f"Crawl {'stopped' if token.cancelled else 'complete'}: "
            f"{len(self.tracker.results)} records, {len(self.tracker.failures)} failures, "
            f"{stats['processed']} files processed"
        )

    def stop(self) -> dict:
        """
        Request a cooperative stop. Work recorded so far is kept.

        Returns:
            Acknowledgement dict
        """
        if self._token is not None and self.tracker.is_running:
            logger.info("Stopping crawl at the next checkpoint...")
            self._token.cancel()
            self.tracker.mark_stopped()
        return {'message': 'Scraping stopped'}

    async def shutdown(self):
        """Stop the job and wait for it (application shutdown)."""
        self.stop()
        if self._task is not None and not self._task.done():
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    def get_status(self) -> dict:
        """
        Get current job state and statistics.

        Returns:
            Dict with status info
        """
        status = self.tracker.snapshot()
        status['rate_limiter'] = self._limiter.get_stats() if self._limiter else None
        status['requests_made'] = self._fetcher.requests_made if self._fetcher else 0
        return status

    def export_to_table(self) -> Optional[bytes]:
        """
        Export results and failures as an .xlsx workbook.

        Returns:
            Workbook bytes, or None when the job produced nothing
        """
        return export_to_bytes(
            self.tracker.mode,
            self.tracker.get_results(),
            self.tracker.get_failures(),
        )
