"""
Data models for the directory-listing scraper.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import List, Optional


class JobState(str, Enum):
    """Lifecycle of the single process-wide crawl job."""
    IDLE = "idle"
    SCANNING = "scanning"
    SCRAPING = "scraping"
    COMPLETE = "complete"
    ERROR = "error"

    @property
    def is_running(self) -> bool:
        return self in (JobState.SCANNING, JobState.SCRAPING)


class Structure(str, Enum):
    """Layout of a series-mode root directory."""
    SINGLE_SERIES = "single_series"
    SINGLE_SEASON = "single_season"
    MULTI_SERIES = "multi_series"


@dataclass(frozen=True)
class DirectoryNode:
    """One child link of a directory listing."""
    url: str
    is_directory: bool
    name: str


@dataclass(frozen=True)
class MediaRecord:
    """A movie file discovered during a crawl."""
    title: str
    year: str
    source_url: str
    # Filled in later by the enrichment stage
    plot: str = ""
    rating: str = ""
    image_url: str = ""
    duration: str = ""
    imdb_id: str = ""

    def to_row(self) -> dict:
        """Spreadsheet row in the import layout expected downstream."""
        return {
            'movie_title': self.title,
            'release_year': self.year,
            'release_date': '',
            'download_url': self.source_url,
            'plot': self.plot,
            'duration': self.duration,
            'rating': self.rating,
            'image_url': self.image_url,
            'trailer': '',
            'imdb_id': self.imdb_id,
            'type_id': '1',
            'category_id': '',
            'download_count': '0',
        }


@dataclass(frozen=True)
class EpisodeRecord:
    """An episode file discovered during a series crawl."""
    series_title: str
    series_year: str
    season_number: int
    season_title: str
    episode_number: int
    episode_title: str
    source_url: str

    def to_row(self) -> dict:
        return {
            'serie_title': self.series_title,
            'release_year': self.series_year,
            'season_number': self.season_number,
            'season_title': self.season_title,
            'episode_number': self.episode_number,
            'episode_title': self.episode_title,
            'download_url': self.source_url,
        }


@dataclass(frozen=True)
class FailureRecord:
    """A media file that could not be classified."""
    title: str
    year: str
    url: str
    error: str


@dataclass
class Progress:
    """Live progress counters for the running job."""
    processed: int = 0
    total: int = 0
    percent: int = 0
    current_directory: str = ""
    current_item: str = ""


@dataclass
class StartResult:
    """Outcome of a start request."""
    accepted: bool
    reason: Optional[str] = None


@dataclass
class SeriesSummary:
    """Per-series totals produced by the aggregator."""
    series_title: str
    series_year: str
    total_seasons: int
    total_episodes: int

    def to_row(self) -> dict:
        return {
            'serie_title': self.series_title,
            'release_year': self.series_year,
            'total_seasons': self.total_seasons,
            'total_episodes': self.total_episodes,
        }


@dataclass
class SeasonSummary:
    """Per-season episode count produced by the aggregator."""
    series_title: str
    series_year: str
    season_number: int
    season_title: str
    episode_count: int

    def to_row(self) -> dict:
        return {
            'serie_title': self.series_title,
            'release_year': self.series_year,
            'season_number': self.season_number,
            'season_title': self.season_title,
            'episode_count': self.episode_count,
        }


@dataclass
class CatalogSummary:
    """Series and season summaries for an export."""
    series: List[SeriesSummary] = field(default_factory=list)
    seasons: List[SeasonSummary] = field(default_factory=list)


def record_to_dict(record) -> dict:
    """Convert a result or failure record to a plain dict."""
    return asdict(record)
