"""
One-level lookahead that classifies a series-mode directory.

Archives vary between "series/season/episodes", "series/episodes" and
"language/series/season/episodes"; looking at the immediate children avoids
hard-coding a depth.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from listing_scraper.config import VIDEO_EXTENSIONS
from listing_scraper.fetcher import ListingFetcher
from listing_scraper.heuristics.series import is_season_folder
from listing_scraper.listing_parser import parse_listing, split_nodes
from listing_scraper.models import DirectoryNode, Structure
from listing_scraper.utils import path_segments

logger = logging.getLogger(__name__)

TV_PATH_MARKERS = ('tv', 'tv series', 'tv shows', 'tv-series', 'tv-shows', 'tvshows', 'series', 'shows')


@dataclass
class StructureReport:
    """Classification of a directory plus the children it was based on."""
    structure: Structure
    directories: List[DirectoryNode] = field(default_factory=list)
    files: List[DirectoryNode] = field(default_factory=list)

    @property
    def season_directories(self) -> List[DirectoryNode]:
        return [d for d in self.directories if is_season_folder(d.name)]


def classify(nodes: Sequence[DirectoryNode]) -> StructureReport:
    """
    Classify a parsed listing.

    Args:
        nodes: Children of the directory (directories and media files)

    Returns:
        StructureReport
    """
    directories, files = split_nodes(nodes)

    if any(is_season_folder(d.name) for d in directories):
        structure = Structure.SINGLE_SERIES
    elif files:
        structure = Structure.SINGLE_SEASON
    else:
        structure = Structure.MULTI_SERIES

    return StructureReport(structure=structure, directories=directories, files=files)


async def detect_structure(
    url: str,
    fetcher: ListingFetcher,
    root_url: str,
    extensions: Sequence[str] = VIDEO_EXTENSIONS
) -> Optional[StructureReport]:
    """
    Fetch the listing at url and classify it.

    Args:
        url: Candidate series root
        fetcher: Job fetcher (the listing is fetched at most once per job)
        root_url: Crawl root, bounds the parsed children
        extensions: Media file extension allow-list

    Returns:
        StructureReport, or None when the listing is unavailable
    """
    html = await fetcher.fetch(url)
    if html is None:
        return None

    report = classify(parse_listing(html, url, root_url, extensions))
    logger.info(
        f"Structure of {url}: {report.structure.value} "
        f"({len(report.directories)} dirs, {len(report.files)} files)"
    )
    return report


def derive_series_name(url: str) -> str:
    """
    Series name for a directory that holds episodes directly.

    The segment right after a TV marker (".../TV Series/<name>/...") wins;
    otherwise the nearest segment that is not a season folder.

    Args:
        url: Directory URL

    Returns:
        Decoded series folder name, or "Unknown"
    """
    segments = path_segments(url)

    for i, segment in enumerate(segments[:-1]):
        if segment.strip().lower() in TV_PATH_MARKERS:
            for candidate in segments[i + 1:]:
                if not is_season_folder(candidate):
                    return candidate

    for segment in reversed(segments):
        if not is_season_folder(segment):
            return segment

    return 'Unknown'
