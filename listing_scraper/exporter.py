"""
Spreadsheet export of crawl results in the layout the import stage expects.
"""

from datetime import date
from io import BytesIO
from typing import Dict, List, Optional, Sequence

from openpyxl import Workbook

from listing_scraper.aggregator import summarize_episodes
from listing_scraper.config import MODE_SERIES
from listing_scraper.models import EpisodeRecord, FailureRecord

MOVIE_COLUMNS = [
    'movie_title', 'release_year', 'release_date', 'download_url', 'plot',
    'duration', 'rating', 'image_url', 'trailer', 'imdb_id', 'type_id',
    'category_id', 'download_count',
]
SERIE_COLUMNS = ['serie_title', 'release_year', 'total_seasons', 'total_episodes']
SEASON_COLUMNS = ['serie_title', 'release_year', 'season_number', 'season_title', 'episode_count']
EPISODE_COLUMNS = [
    'serie_title', 'release_year', 'season_number', 'season_title',
    'episode_number', 'episode_title', 'download_url',
]
FAILURE_COLUMNS = ['title', 'year', 'url', 'error']


def _append_sheet(wb: Workbook, title: str, headers: List[str], rows: List[Dict]):
    ws = wb.create_sheet(title=title)
    ws.append(headers)
    for row in rows:
        ws.append([row.get(h, '') for h in headers])


def _failure_rows(failures: Sequence[FailureRecord]) -> List[Dict]:
    return [
        {'title': f.title, 'year': f.year, 'url': f.url, 'error': f.error}
        for f in failures
    ]


def build_workbook(mode: str, results: Sequence, failures: Sequence[FailureRecord]) -> Workbook:
    """
    Build the export workbook.

    Movies: "Movies" and "Failures" sheets.
    Series: "Serie", "Season", "Episodes" and "Failures" sheets.
    """
    wb = Workbook()
    wb.remove(wb.active)

    if mode == MODE_SERIES:
        episodes = [r for r in results if isinstance(r, EpisodeRecord)]
        summary = summarize_episodes(episodes)
        _append_sheet(wb, 'Serie', SERIE_COLUMNS, [s.to_row() for s in summary.series])
        _append_sheet(wb, 'Season', SEASON_COLUMNS, [s.to_row() for s in summary.seasons])
        _append_sheet(wb, 'Episodes', EPISODE_COLUMNS, [e.to_row() for e in episodes])
    else:
        _append_sheet(wb, 'Movies', MOVIE_COLUMNS, [r.to_row() for r in results])

    _append_sheet(wb, 'Failures', FAILURE_COLUMNS, _failure_rows(failures))
    return wb


def export_to_bytes(mode: str, results: Sequence, failures: Sequence[FailureRecord]) -> Optional[bytes]:
    """
    Serialize results as an .xlsx file.

    Returns:
        Workbook bytes, or None when there is nothing to export
    """
    if not results and not failures:
        return None

    buffer = BytesIO()
    build_workbook(mode, results, failures).save(buffer)
    return buffer.getvalue()


def export_filename(mode: str, day: Optional[date] = None) -> str:
    """Download name, e.g. movies_2024-05-01.xlsx."""
    day = day or date.today()
    prefix = 'series' if mode == MODE_SERIES else 'movies'
    return f"{prefix}_{day.isoformat()}.xlsx"
