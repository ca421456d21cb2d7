"""
Series/season/episode inference from folder names and episode filenames.

Explicit markers (S01E03, 1x03, E03, "Episode 3") outrank positional ones
(a leading number, then any number at all). Numbers that cannot be
recovered default to 1.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import unquote

from listing_scraper.heuristics.rules import ClassificationError, Rule, clean_name, first_match
from listing_scraper.utils import strip_extension

logger = logging.getLogger(__name__)

DEFAULT_NUMBER = 1

SERIES_PAREN_YEAR = re.compile(r'^(.+?)\s*\((\d{4})\)\s*$')
ANY_YEAR = re.compile(r'\d{4}')
EMPTY_BRACKETS = re.compile(r'\(\s*\)|\[\s*\]')

SEASON_TOKEN = re.compile(r'(?:^|[\s._\-\[(])s(\d{1,3})(?=$|[\s._\-\])])', re.IGNORECASE)
SEASON_WORD = re.compile(r'season[\s._-]?(\d+)', re.IGNORECASE)
ANY_NUMBER = re.compile(r'(\d+)')

EPISODE_SE = re.compile(r'(?:^|[^a-z0-9])s(\d{1,3})[\s._-]*e(\d{1,4})(?![0-9])(.*)$', re.IGNORECASE)
EPISODE_X = re.compile(r'(?<![0-9])(\d{1,2})x(\d{1,3})(?![0-9])(.*)$', re.IGNORECASE)
EPISODE_E = re.compile(r'(?:^|[^a-z0-9])ep?(\d{1,4})(?![0-9])(.*)$', re.IGNORECASE)
EPISODE_WORD = re.compile(r'episode[\s._-]*(\d+)(.*)$', re.IGNORECASE)
EPISODE_LEADING = re.compile(r'^(\d+)[\s._-]+(.*)$')

RELEASE_TAGS = re.compile(
    r'\b(?:2160p|1080p|720p|576p|480p|4k|uhd|x264|x265|h\.?264|h\.?265|hevc|avc|10bit|'
    r'web[-.]?dl|webrip|bluray|blu[-.]?ray|brrip|bdrip|hdrip|hdtv|dvdrip|'
    r'aac(?:2\.0)?|ac3|dts|ddp?5\.1|proper|repack)\b',
    re.IGNORECASE
)
EDGE_SEPARATORS = ' ._-'


@dataclass(frozen=True)
class EpisodeInfo:
    series_title: str
    series_year: str
    season_number: int
    season_title: str
    episode_number: int
    episode_title: str
    season_rule: str
    episode_rule: str


def _positive(text: str) -> Optional[int]:
    value = int(text)
    return value if value > 0 else None


# ==================== SERIES TITLE ====================

def parse_series_title(raw: str) -> Tuple[str, str]:
    """
    Split a series folder name into (title, year).

    Args:
        raw: Folder name, possibly percent-encoded (e.g., "Breaking%20Bad%20(2008)")

    Returns:
        (title, year); year is "" when none is found
    """
    name = unquote(raw or '').strip()

    match = SERIES_PAREN_YEAR.match(name)
    if match:
        return clean_name(match.group(1)), match.group(2)

    match = ANY_YEAR.search(name)
    if match:
        remainder = name[:match.start()] + name[match.end():]
        title = clean_name(EMPTY_BRACKETS.sub('', remainder)).strip(EDGE_SEPARATORS)
        if title:
            return title, match.group(0)

    return clean_name(name), ''


# ==================== SEASON NUMBER ====================

def _season_token(name: str) -> Optional[int]:
    match = SEASON_TOKEN.search(name)
    return _positive(match.group(1)) if match else None


def _season_word(name: str) -> Optional[int]:
    match = SEASON_WORD.search(name)
    return _positive(match.group(1)) if match else None


def _season_any_number(name: str) -> Optional[int]:
    match = ANY_NUMBER.search(name)
    return _positive(match.group(1)) if match else None


SEASON_RULES = (
    Rule('season_token', _season_token),
    Rule('season_word', _season_word),
    Rule('season_any_number', _season_any_number),
)


def is_season_folder(name: str) -> bool:
    """True for folder names like "S1", "s02" or "Season 3"."""
    name = unquote(name or '')
    return bool(SEASON_TOKEN.search(name) or SEASON_WORD.search(name))


def parse_season_number(raw: str) -> Tuple[int, str]:
    """
    Season number from a season folder name.

    Returns:
        (number, rule name); ("default" rule when nothing matched)
    """
    rule, value = first_match(SEASON_RULES, unquote(raw or ''))
    if value is None:
        return DEFAULT_NUMBER, 'default'
    return value, rule


def _season_from_filename(stem: str) -> Optional[int]:
    match = EPISODE_SE.search(stem) or EPISODE_X.search(stem)
    return _positive(match.group(1)) if match else None


# ==================== EPISODE NUMBER + TITLE ====================

def clean_episode_title(text: str) -> str:
    """Strip separators and release tags from trailing filename text."""
    text = RELEASE_TAGS.sub(' ', text or '')
    text = clean_name(text).strip(EDGE_SEPARATORS)
    return re.sub(r'\s+', ' ', text)


def _episode_with_title(pattern, number_group: int, title_group: int):
    def extract(stem: str) -> Optional[Tuple[int, str]]:
        match = pattern.search(stem)
        if not match:
            return None
        number = _positive(match.group(number_group))
        if number is None:
            return None
        return number, match.group(title_group)
    return extract


def _episode_bare_number(stem: str) -> Optional[Tuple[int, str]]:
    match = ANY_NUMBER.search(stem)
    if not match:
        return None
    number = _positive(match.group(1))
    return (number, '') if number is not None else None


EPISODE_RULES = (
    Rule('season_episode', _episode_with_title(EPISODE_SE, 2, 3)),
    Rule('cross', _episode_with_title(EPISODE_X, 2, 3)),
    Rule('e_marker', _episode_with_title(EPISODE_E, 1, 2)),
    Rule('episode_word', _episode_with_title(EPISODE_WORD, 1, 2)),
    Rule('leading_number', _episode_with_title(EPISODE_LEADING, 1, 2)),
    Rule('bare_number', _episode_bare_number),
)


def parse_episode(filename: str) -> Tuple[int, str, str]:
    """
    Episode number and title from an episode filename.

    Args:
        filename: File name with extension, possibly percent-encoded

    Returns:
        (number, title, rule name)
    """
    stem = strip_extension(unquote(filename or ''))
    rule, value = first_match(EPISODE_RULES, stem)
    if value is None:
        return DEFAULT_NUMBER, f"Episode {DEFAULT_NUMBER}", 'default'

    number, trailing = value
    title = clean_episode_title(trailing)
    if not title or title.isdigit():
        title = f"Episode {number}"
    return number, title, rule


def infer_episode_info(
    series_title_raw: str,
    season_folder_raw: Optional[str],
    episode_filename_raw: str
) -> EpisodeInfo:
    """
    Infer series, season and episode fields for one episode file.

    Args:
        series_title_raw: Series folder name (or derived series name)
        season_folder_raw: Season folder name, or None when the file is not
            inside a season folder
        episode_filename_raw: Episode file name

    Returns:
        EpisodeInfo

    Raises:
        ClassificationError: if no usable series title can be derived
    """
    series_title, series_year = parse_series_title(series_title_raw)
    if not series_title:
        raise ClassificationError(f"No usable series title in '{series_title_raw}'")

    if season_folder_raw:
        season_number, season_rule = parse_season_number(season_folder_raw)
    else:
        stem = strip_extension(unquote(episode_filename_raw or ''))
        season_number = _season_from_filename(stem)
        season_rule = 'filename_marker'
        if season_number is None:
            season_number, season_rule = DEFAULT_NUMBER, 'default'

    episode_number, episode_title, episode_rule = parse_episode(episode_filename_raw)

    logger.debug(
        f"Episode rules {season_rule}/{episode_rule}: '{episode_filename_raw}' -> "
        f"{series_title} S{season_number}E{episode_number}"
    )
    return EpisodeInfo(
        series_title=series_title,
        series_year=series_year,
        season_number=season_number,
        season_title=f"Season {season_number}",
        episode_number=episode_number,
        episode_title=episode_title,
        season_rule=season_rule,
        episode_rule=episode_rule,
    )
