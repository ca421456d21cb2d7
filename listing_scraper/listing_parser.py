"""
Parsing of Apache/Nginx "Index of" pages into child links.
"""

from typing import List, Sequence
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from listing_scraper.config import VIDEO_EXTENSIONS
from listing_scraper.models import DirectoryNode
from listing_scraper.utils import canonical_url, folder_name, is_video_file, is_within

PARENT_LINKS = ('../', '..', './', '.')


def parse_listing(
    html: str,
    base_url: str,
    root_url: str,
    extensions: Sequence[str] = VIDEO_EXTENSIONS
) -> List[DirectoryNode]:
    """
    Extract sub-directories and media files from a listing page.

    Parent links, sort/query links, links leaving the root subtree,
    non-media files and files that live in another folder are dropped.
    Order follows the page.

    Args:
        html: Listing page body
        base_url: URL the page was fetched from
        root_url: Root of the crawl; nothing outside it is returned
        extensions: Media file extension allow-list

    Returns:
        List of DirectoryNode
    """
    soup = BeautifulSoup(html, 'html.parser')
    base_key = canonical_url(base_url)
    nodes: List[DirectoryNode] = []
    seen = set()

    for link in soup.find_all('a', href=True):
        href = link['href'].strip()
        if not href or href in PARENT_LINKS:
            continue
        # Column sort links (?C=N;O=D), anchors and non-http schemes
        if href.startswith(('?', '#', 'mailto:', 'javascript:')):
            continue

        full_url = urljoin(base_url, href)
        parts = urlsplit(full_url)
        if parts.scheme not in ('http', 'https'):
            continue
        full_url = parts._replace(fragment='').geturl()

        key = canonical_url(full_url)
        if key == base_key or key in seen:
            continue
        if not is_within(full_url, root_url):
            continue

        is_directory = parts.path.endswith('/')
        if not is_directory:
            if not is_video_file(full_url, extensions):
                continue
            # Files are only taken from their own folder's listing
            if _parent_key(key) != base_key:
                continue

        seen.add(key)
        nodes.append(DirectoryNode(
            url=full_url,
            is_directory=is_directory,
            name=folder_name(full_url),
        ))

    return nodes


def _parent_key(key: str) -> str:
    """Canonical URL of the folder holding a canonical file URL."""
    return key.rsplit('/', 1)[0] + '/'


def split_nodes(nodes: Sequence[DirectoryNode]):
    """
    Split listing nodes into (directories, files), keeping page order.
    """
    directories = [n for n in nodes if n.is_directory]
    files = [n for n in nodes if not n.is_directory]
    return directories, files
