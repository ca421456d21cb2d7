"""
Folds scraped episodes into per-series and per-season summaries for export.
"""

from collections import OrderedDict
from typing import Dict, Iterable, Set, Tuple

from listing_scraper.models import CatalogSummary, EpisodeRecord, SeasonSummary, SeriesSummary


def summarize_episodes(episodes: Iterable[EpisodeRecord]) -> CatalogSummary:
    """
    Group episodes by series and by season.

    Pure function: the input is not modified and the output depends only on
    the input order and contents. Series and seasons appear in the order they
    were first seen.

    Args:
        episodes: Episode records from a finished (or stopped) crawl

    Returns:
        CatalogSummary with series totals and per-season episode counts
    """
    series_seasons: "OrderedDict[Tuple[str, str], Set[int]]" = OrderedDict()
    series_episodes: Dict[Tuple[str, str], int] = {}
    season_counts: "OrderedDict[Tuple[str, str, int], int]" = OrderedDict()
    season_titles: Dict[Tuple[str, str, int], str] = {}

    for episode in episodes:
        series_key = (episode.series_title, episode.series_year)
        season_key = series_key + (episode.season_number,)

        series_seasons.setdefault(series_key, set()).add(episode.season_number)
        series_episodes[series_key] = series_episodes.get(series_key, 0) + 1
        season_counts[season_key] = season_counts.get(season_key, 0) + 1
        season_titles.setdefault(season_key, episode.season_title)

    summary = CatalogSummary()
    for (title, year), seasons in series_seasons.items():
        summary.series.append(SeriesSummary(
            series_title=title,
            series_year=year,
            total_seasons=len(seasons),
            total_episodes=series_episodes[(title, year)],
        ))

    for key, count in season_counts.items():
        title, year, number = key
        summary.seasons.append(SeasonSummary(
            series_title=title,
            series_year=year,
            season_number=number,
            season_title=season_titles[key],
            episode_count=count,
        ))

    return summary
