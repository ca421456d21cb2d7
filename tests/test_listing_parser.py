"""Tests for autoindex page parsing."""

from listing_scraper.listing_parser import parse_listing, split_nodes
from listing_scraper.utils import canonical_url, folder_name, is_within, normalize_root_url

from tests.conftest import render_listing

ROOT = "http://listing.test/movies/"


def test_parse_listing_keeps_subdirectories_and_media_files() -> None:
    html = render_listing("/movies/", ["Movie A/", "film.mkv", "readme.txt", "cover.jpg"])
    nodes = parse_listing(html, ROOT, ROOT)

    assert [(n.name, n.is_directory) for n in nodes] == [("Movie A", True), ("film.mkv", False)]
    assert nodes[0].url == "http://listing.test/movies/Movie%20A/"


def test_parse_listing_drops_navigation_and_foreign_links() -> None:
    html = """
    <pre>
    <a href="../">Parent</a>
    <a href="./">Self</a>
    <a href="?C=S;O=A">Size</a>
    <a href="#top">Top</a>
    <a href="mailto:admin@listing.test">Mail</a>
    <a href="javascript:void(0)">JS</a>
    <a href="/movies/">Root again</a>
    <a href="/outside/">Outside</a>
    <a href="http://other.test/movies/x.mkv">Other host</a>
    <a href="ftp://listing.test/movies/y.mkv">FTP</a>
    <a href="/movies/sub/">Absolute child</a>
    <a href="sub/">Duplicate</a>
    </pre>
    """
    nodes = parse_listing(html, ROOT, ROOT)

    assert [n.url for n in nodes] == ["http://listing.test/movies/sub/"]


def test_parse_listing_extension_check_is_case_insensitive() -> None:
    html = render_listing("/movies/", ["LOUD.MKV", "clip.Mp4", "archive.zip"])
    nodes = parse_listing(html, ROOT, ROOT)

    assert [n.name for n in nodes] == ["LOUD.MKV", "clip.Mp4"]


def test_split_nodes_preserves_page_order() -> None:
    html = render_listing("/movies/", ["b.mkv", "B/", "a.mkv", "A/"])
    directories, files = split_nodes(parse_listing(html, ROOT, ROOT))

    assert [d.name for d in directories] == ["B", "A"]
    assert [f.name for f in files] == ["b.mkv", "a.mkv"]


def test_normalize_root_url() -> None:
    assert normalize_root_url("http://host/Data/movies") == "http://host/Data/movies/"
    assert normalize_root_url("https://host/") == "https://host/"
    assert normalize_root_url("ftp://host/movies/") is None
    assert normalize_root_url("not a url") is None
    assert normalize_root_url("") is None


def test_canonical_url_ignores_encoding_and_fragment() -> None:
    assert canonical_url("http://h/a%20b/#x") == canonical_url("http://h/a b/")
    assert is_within("http://h/movies/a%20b/c.mkv", "http://h/movies/")
    assert not is_within("http://h/moviesX/", "http://h/movies/")
    assert folder_name("http://h/Inception%20(2010)/") == "Inception (2010)"
    assert folder_name("http://h/") == "Unknown"


def test_parse_listing_drops_files_from_other_folders() -> None:
    html = render_listing("/movies/", ["Sub/", "Sub/inner.mkv", "/movies/Other/deep.mkv", "own.mkv"])
    nodes = parse_listing(html, ROOT, ROOT)

    assert [n.name for n in nodes] == ["Sub", "own.mkv"]
