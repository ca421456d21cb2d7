"""
Depth-first, directories-first traversal strategies for movie and series
archives. Both share the fetcher and listing parser; only the way leaf files
are turned into records differs.
"""

import logging
from typing import List, Optional

from listing_scraper.config import CrawlConfig
from listing_scraper.fetcher import ListingFetcher
from listing_scraper.heuristics.movie import infer_movie_info
from listing_scraper.heuristics.series import infer_episode_info, is_season_folder, parse_series_title
from listing_scraper.listing_parser import parse_listing, split_nodes
from listing_scraper.models import DirectoryNode, EpisodeRecord, FailureRecord, MediaRecord, Structure
from listing_scraper.resilience import CancellationToken, ProgressTracker, RateLimiter
from listing_scraper.structure_detector import StructureReport, derive_series_name, detect_structure
from listing_scraper.utils import folder_name, strip_extension

logger = logging.getLogger(__name__)

STRAY_SEASON_FOLDER = "Season 1"


class CrawlError(Exception):
    """Job-level failure that ends the crawl in the error state."""


class BaseCrawler:
    """Shared plumbing: checkpoints, listing, pacing and progress logging."""

    def __init__(
        self,
        fetcher: ListingFetcher,
        tracker: ProgressTracker,
        limiter: RateLimiter,
        token: CancellationToken,
        root_url: str,
        config: Optional[CrawlConfig] = None,
        max_depth: Optional[int] = None
    ):
        self.fetcher = fetcher
        self.tracker = tracker
        self.limiter = limiter
        self.token = token
        self.root_url = root_url
        self.config = config or CrawlConfig()
        self.max_depth = self.config.max_depth if max_depth is None else max_depth

    def should_stop(self) -> bool:
        """Checkpoint: a stop was requested by the operator."""
        return self.token.cancelled

    async def run(self):
        raise NotImplementedError

    async def list_directory(self, url: str) -> Optional[List[DirectoryNode]]:
        """
        Fetch and parse one listing.

        Returns:
            Child nodes, or None when the listing was unavailable or already seen
        """
        html = await self.fetcher.fetch(url)
        if html is None:
            return None
        nodes = parse_listing(html, url, self.root_url, self.config.video_extensions)
        self.tracker.add_discovered(sum(1 for n in nodes if not n.is_directory))
        return nodes

    def _log_progress(self):
        stats = self.tracker.get_stats()
        if stats['processed'] and stats['processed'] % 10 == 0:
            logger.info(f"  Progress: {stats['processed']} files ({stats['percent']}%)")


class MovieCrawler(BaseCrawler):
    """Every media file anywhere under the root is a movie."""

    async def run(self):
        self.tracker.set_current_directory(folder_name(self.root_url))
        nodes = await self.list_directory(self.root_url)
        if nodes is None:
            raise CrawlError(f"Root listing unavailable: {self.root_url}")

        self.tracker.begin_scraping()
        await self._walk(nodes, 0)

    async def crawl_directory(self, url: str, depth: int):
        """
        Recursively crawl one directory.

        Args:
            url: Directory URL
            depth: Distance from the root (root is 0)
        """
        if depth > self.max_depth or self.should_stop():
            return

        self.tracker.set_current_directory(folder_name(url))
        logger.info(f"Crawling directory: {url}")

        nodes = await self.list_directory(url)
        if nodes is None:
            return
        await self._walk(nodes, depth)

    async def _walk(self, nodes: List[DirectoryNode], depth: int):
        directories, files = split_nodes(nodes)

        for directory in directories:
            if self.should_stop():
                return
            await self.crawl_directory(directory.url, depth + 1)
            await self.limiter.wait()

        for node in files:
            if self.should_stop():
                return
            self.process_file(node)
            await self.limiter.wait()

    def process_file(self, node: DirectoryNode):
        """Classify one movie file into a result or a failure."""
        filename = node.url.rsplit('/', 1)[-1]
        try:
            info = infer_movie_info(filename, node.url)
        except Exception as e:
            logger.warning(f"  ✗ Could not classify {node.url}: {e}")
            self.tracker.record_failure(FailureRecord(
                title=strip_extension(node.name),
                year='',
                url=node.url,
                error=str(e),
            ))
            return

        self.tracker.set_current_item(f"{info.title} ({info.year or 'Unknown Year'})")
        self.tracker.record_result(MediaRecord(
            title=info.title,
            year=info.year,
            source_url=node.url,
        ))
        self._log_progress()


class SeriesCrawler(BaseCrawler):
    """Series roots are classified first, then walked by structure."""

    async def run(self):
        self.tracker.set_current_directory(folder_name(self.root_url))
        report = await self._detect(self.root_url)
        if report is None:
            raise CrawlError(f"Root listing unavailable: {self.root_url}")

        self.tracker.begin_scraping()
        await self._process_report(self.root_url, report, 0)

    async def _detect(self, url: str) -> Optional[StructureReport]:
        report = await detect_structure(url, self.fetcher, self.root_url, self.config.video_extensions)
        if report is not None:
            self.tracker.add_discovered(len(report.files))
        return report

    async def process_series_root(self, url: str, depth: int):
        """
        Classify a candidate series root and walk it.

        Args:
            url: Directory URL
            depth: Distance from the crawl root
        """
        if depth > self.max_depth or self.should_stop():
            return

        self.tracker.set_current_directory(folder_name(url))
        report = await self._detect(url)
        if report is None:
            return
        await self._process_report(url, report, depth)

    async def _process_report(self, url: str, report: StructureReport, depth: int):
        if report.structure == Structure.SINGLE_SERIES:
            await self._process_single_series(url, report, depth)
        elif report.structure == Structure.SINGLE_SEASON:
            await self._process_single_season(url, report, depth)
        else:
            for directory in report.directories:
                if self.should_stop():
                    return
                await self.process_series_root(directory.url, depth + 1)
                await self.limiter.wait()

    async def _process_single_series(self, url: str, report: StructureReport, depth: int):
        series_name = folder_name(url)
        logger.info(f"Series: {series_name} ({len(report.season_directories)} season folders)")

        for directory in report.directories:
            if self.should_stop():
                return
            if not is_season_folder(directory.name):
                logger.info(f"  Skipping non-season folder: {directory.name}")
                continue
            await self.crawl_season(directory.url, series_name, directory.name, depth + 1)
            await self.limiter.wait()

        for node in report.files:
            if self.should_stop():
                return
            self.process_episode(node, series_name, STRAY_SEASON_FOLDER)
            await self.limiter.wait()

    async def _process_single_season(self, url: str, report: StructureReport, depth: int):
        series_name = derive_series_name(url)
        current = folder_name(url)
        season_folder = current if is_season_folder(current) else None
        logger.info(f"Series: {series_name} (episodes directly in {current})")

        for directory in report.directories:
            if self.should_stop():
                return
            await self.process_series_root(directory.url, depth + 1)
            await self.limiter.wait()

        for node in report.files:
            if self.should_stop():
                return
            self.process_episode(node, series_name, season_folder)
            await self.limiter.wait()

    async def crawl_season(self, url: str, series_name: str, season_name: str, depth: int):
        """
        Walk a season folder; nested folders keep the season context.

        Args:
            url: Season folder URL
            series_name: Raw series folder name
            season_name: Raw season folder name
            depth: Distance from the crawl root
        """
        if depth > self.max_depth or self.should_stop():
            return

        self.tracker.set_current_directory(f"{series_name} / {season_name}")
        logger.info(f"Crawling season: {url}")

        nodes = await self.list_directory(url)
        if nodes is None:
            return
        directories, files = split_nodes(nodes)

        for directory in directories:
            if self.should_stop():
                return
            await self.crawl_season(directory.url, series_name, season_name, depth + 1)
            await self.limiter.wait()

        for node in files:
            if self.should_stop():
                return
            self.process_episode(node, series_name, season_name)
            await self.limiter.wait()

    def process_episode(self, node: DirectoryNode, series_name: str, season_folder: Optional[str]):
        """Classify one episode file into a result or a failure."""
        filename = node.url.rsplit('/', 1)[-1]
        try:
            info = infer_episode_info(series_name, season_folder, filename)
        except Exception as e:
            logger.warning(f"  ✗ Could not classify {node.url}: {e}")
            title, year = parse_series_title(series_name)
            self.tracker.record_failure(FailureRecord(
                title=title or strip_extension(node.name),
                year=year,
                url=node.url,
                error=str(e),
            ))
            return

        self.tracker.set_current_item(
            f"{info.series_title} S{info.season_number:02d}E{info.episode_number:02d} - {info.episode_title}"
        )
        self.tracker.record_result(EpisodeRecord(
            series_title=info.series_title,
            series_year=info.series_year,
            season_number=info.season_number,
            season_title=info.season_title,
            episode_number=info.episode_number,
            episode_title=info.episode_title,
            source_url=node.url,
        ))
        self._log_progress()
