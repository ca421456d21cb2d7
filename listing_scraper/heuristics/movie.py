"""
Movie title/year inference from URL path segments and filenames.

Archives mix "folder encodes metadata" and "filename encodes metadata"
conventions, so the rules go from the most reliable signal (a year in
parentheses) to the noisiest (any 4-digit run in the path).
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import unquote, urlsplit

from listing_scraper.heuristics.rules import ClassificationError, Rule, dots_to_spaces, first_match
from listing_scraper.utils import strip_extension

logger = logging.getLogger(__name__)

PAREN_YEAR = re.compile(r'^(.+?)\s*\((\d{4})\)$')
DOT_YEAR_IN_FOLDER = re.compile(r'^(.+)\.(\d{4})\.')
DOT_YEAR_AT_END = re.compile(r'^(.+)\.(\d{4})$')
ANY_YEAR = re.compile(r'(\d{4})')
TRAILING_DOT_YEAR = re.compile(r'\.\d{4}\..+$')


@dataclass(frozen=True)
class MovieInfo:
    title: str
    year: str
    rule: str


@dataclass(frozen=True)
class _MovieContext:
    """Decoded inputs shared by every rule."""
    stem: str
    folder: str
    folder_path: str


def _split_path(full_path: str) -> List[str]:
    if '://' in full_path:
        full_path = urlsplit(full_path).path
    return [s for s in full_path.split('/') if s]


def _folder_paren_year(ctx: _MovieContext) -> Optional[tuple]:
    match = PAREN_YEAR.match(ctx.folder)
    if match:
        return dots_to_spaces(match.group(1)), match.group(2)
    return None


def _folder_dot_year(ctx: _MovieContext) -> Optional[tuple]:
    match = DOT_YEAR_IN_FOLDER.match(ctx.folder)
    if match:
        return dots_to_spaces(match.group(1)), match.group(2)
    return None


def _file_paren_year(ctx: _MovieContext) -> Optional[tuple]:
    match = PAREN_YEAR.match(ctx.stem)
    if match:
        return dots_to_spaces(match.group(1)), match.group(2)
    return None


def _file_dot_year(ctx: _MovieContext) -> Optional[tuple]:
    match = DOT_YEAR_AT_END.match(ctx.stem)
    if match:
        return dots_to_spaces(match.group(1)), match.group(2)
    return None


def _path_year(ctx: _MovieContext) -> Optional[tuple]:
    match = ANY_YEAR.search(ctx.folder_path)
    if match:
        title = TRAILING_DOT_YEAR.sub('', ctx.folder)
        return dots_to_spaces(title), match.group(1)
    return None


def _filename_only(ctx: _MovieContext) -> Optional[tuple]:
    return dots_to_spaces(ctx.stem), ''


MOVIE_RULES = (
    Rule('folder_paren_year', _folder_paren_year),
    Rule('folder_dot_year', _folder_dot_year),
    Rule('file_paren_year', _file_paren_year),
    Rule('file_dot_year', _file_dot_year),
    Rule('path_year', _path_year),
    Rule('filename', _filename_only),
)


def infer_movie_info(filename: str, full_path: str) -> MovieInfo:
    """
    Infer {title, year} for a movie file.

    Args:
        filename: Last URL segment, possibly percent-encoded
        full_path: Full URL (or path) of the file, possibly percent-encoded

    Returns:
        MovieInfo with the name of the rule that matched

    Raises:
        ClassificationError: if no usable title can be derived
    """
    decoded_name = unquote(filename)
    segments = [unquote(s) for s in _split_path(full_path)]
    directories = segments[:-1] if segments else []

    ctx = _MovieContext(
        stem=strip_extension(decoded_name),
        folder=directories[-1] if directories else '',
        folder_path='/'.join(directories),
    )

    rule, value = first_match(MOVIE_RULES, ctx)
    title, year = value
    if not title:
        raise ClassificationError(f"No usable title for '{decoded_name}' (rule {rule})")

    logger.debug(f"Movie rule {rule}: '{decoded_name}' -> {title} ({year or 'no year'})")
    return MovieInfo(title=title, year=year, rule=rule)
