"""
Shared URL helpers for the scraper.
"""

import re
from typing import List, Optional, Sequence
from urllib.parse import unquote, urlparse, urlsplit, urlunsplit


def normalize_root_url(url: str) -> Optional[str]:
    """
    Validate and normalize a crawl root URL.

    Args:
        url: Operator-supplied listing URL

    Returns:
        URL ending with "/", or None if it is not an absolute http(s) URL
    """
    if not url or not isinstance(url, str):
        return None

    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        return None

    if not url.endswith('/'):
        url += '/'
    return url


def canonical_url(url: str) -> str:
    """
    Canonical form used for visited-set membership and subtree checks.

    Percent-encoding and fragments are ignored so that "/a%20b/" and
    "/a b/" count as the same listing.
    """
    parts = urlsplit(url)
    return urlunsplit((
        parts.scheme.lower(),
        parts.netloc.lower(),
        unquote(parts.path),
        parts.query,
        ''
    ))


def is_within(url: str, root_url: str) -> bool:
    """Check whether url lives inside the subtree rooted at root_url."""
    return canonical_url(url).startswith(canonical_url(root_url))


def path_segments(url: str) -> List[str]:
    """Decoded, non-empty path segments of a URL."""
    path = urlsplit(url).path
    return [unquote(s) for s in path.split('/') if s]


def folder_name(url: str) -> str:
    """
    Last path segment of a URL, decoded.

    Args:
        url: Directory or file URL (e.g., http://host/Movies/Inception%20(2010)/)

    Returns:
        Display name (e.g., "Inception (2010)") or "Unknown"
    """
    segments = path_segments(url)
    return segments[-1] if segments else 'Unknown'


def file_extension(url: str) -> str:
    """Lower-cased text after the last "." of the URL path, or ""."""
    name = urlsplit(url).path.rsplit('/', 1)[-1]
    if '.' not in name:
        return ''
    return name.rsplit('.', 1)[-1].lower()


def is_video_file(url: str, extensions: Sequence[str]) -> bool:
    """Check the URL's extension against the media allow-list."""
    ext = file_extension(url)
    return bool(ext) and ext in extensions


def strip_extension(filename: str) -> str:
    """Filename without its final extension."""
    return re.sub(r'\.[^/.]+$', '', filename)
