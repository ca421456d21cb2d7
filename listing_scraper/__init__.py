"""
Directory-listing media scraper.
Crawls Apache/Nginx "Index of" pages and catalogs movies or TV episodes.
"""

from listing_scraper.config import CrawlConfig, CrawlOptions
from listing_scraper.crawl_controller import CrawlController
from listing_scraper.models import EpisodeRecord, FailureRecord, JobState, MediaRecord

__all__ = [
    'CrawlConfig',
    'CrawlOptions',
    'CrawlController',
    'EpisodeRecord',
    'FailureRecord',
    'JobState',
    'MediaRecord',
]
