"""Pytest configuration and fixtures."""

from collections import Counter
from typing import Callable, Dict, List, Optional
from urllib.parse import quote

import httpx
import pytest

from listing_scraper.config import CrawlOptions
from listing_scraper.crawl_controller import CrawlController

BASE = "http://listing.test"


def render_listing(path: str, entries: List[str]) -> str:
    """Render an Apache-style autoindex page for the given child names."""
    rows = [
        '<a href="?C=N;O=D">Name</a>',
        '<a href="?C=M;O=A">Last modified</a>',
        '<a href="../">Parent Directory</a>',
    ]
    for entry in entries:
        href = entry if entry.startswith(("http://", "https://", "/")) else quote(entry)
        rows.append(f'<a href="{href}">{entry}</a>')
    body = "\n".join(rows)
    return f"<html><head><title>Index of {path}</title></head><body><h1>Index of {path}</h1><pre>{body}</pre></body></html>"


class ListingServer:
    """
    In-memory directory tree served through httpx.MockTransport.

    Paths are decoded and end with "/"; unknown paths return 404.
    """

    def __init__(self, tree: Dict[str, List[str]]):
        self.tree = tree
        self.hits: Counter = Counter()
        self.status_overrides: Dict[str, int] = {}
        self.on_request: Optional[Callable[[str], None]] = None
        self.transport = httpx.MockTransport(self.handle)

    def url(self, path: str) -> str:
        return BASE + quote(path)

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.hits[path] += 1
        if self.on_request:
            self.on_request(path)
        if path in self.status_overrides:
            return httpx.Response(self.status_overrides[path], text="error")
        if path not in self.tree:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, html=render_listing(path, self.tree[path]))


@pytest.fixture
def movie_server() -> ListingServer:
    """Movie archive mixing folder-encoded and filename-encoded metadata."""
    return ListingServer({
        "/Data/movies/": ["MovieA (1999)/", "Inception.2010.1080p/", "Random/", "Heat (1995).mp4"],
        "/Data/movies/MovieA (1999)/": ["movie.mkv", "notes.txt", "poster.jpg"],
        "/Data/movies/Inception.2010.1080p/": ["Inception.2010.1080p.mkv"],
        "/Data/movies/Random/": ["file.mkv", "/Data/movies/"],
    })


@pytest.fixture
def series_server() -> ListingServer:
    """TV archive with one multi-season series and one flat series."""
    return ListingServer({
        "/TV/": ["Breaking Bad (2008)/", "Dark/"],
        "/TV/Breaking Bad (2008)/": ["Season 1/", "Season 2/", "Extras/"],
        "/TV/Breaking Bad (2008)/Season 1/": ["S01E01 - Pilot.mkv", "S01E02.mkv"],
        "/TV/Breaking Bad (2008)/Season 2/": ["02.mkv"],
        "/TV/Breaking Bad (2008)/Extras/": ["making-of.mkv"],
        "/TV/Dark/": ["Dark.S01E01.mkv"],
    })


@pytest.fixture
def make_options():
    """Build CrawlOptions with no pacing delay."""
    def _make(url: str, mode: str = "movies", max_depth: int = 10) -> CrawlOptions:
        return CrawlOptions(root_url=url, mode=mode, delay_ms=0, max_depth=max_depth)
    return _make


@pytest.fixture
def controller_for():
    """Build a CrawlController that talks to a ListingServer."""
    def _make(server: ListingServer) -> CrawlController:
        return CrawlController(transport=server.transport)
    return _make
