"""Tests for series-mode structure detection."""

import asyncio

import httpx

from listing_scraper.fetcher import ListingFetcher
from listing_scraper.models import DirectoryNode, Structure
from listing_scraper.structure_detector import classify, derive_series_name, detect_structure


def _dir(name: str) -> DirectoryNode:
    return DirectoryNode(url=f"http://h/TV/{name}/", is_directory=True, name=name)


def _file(name: str) -> DirectoryNode:
    return DirectoryNode(url=f"http://h/TV/{name}", is_directory=False, name=name)


def test_season_folders_mean_single_series() -> None:
    report = classify([_dir("Season 1"), _dir("Extras"), _file("trailer.mkv")])
    assert report.structure == Structure.SINGLE_SERIES
    assert [d.name for d in report.season_directories] == ["Season 1"]


def test_files_without_season_folders_mean_single_season() -> None:
    assert classify([_file("01.mkv"), _dir("Subs")]).structure == Structure.SINGLE_SEASON


def test_plain_folders_mean_multi_series() -> None:
    assert classify([_dir("Dark"), _dir("Lost")]).structure == Structure.MULTI_SERIES
    assert classify([]).structure == Structure.MULTI_SERIES


def test_derive_series_name_after_tv_marker() -> None:
    assert derive_series_name("http://h/Data/TV%20Series/Friends/Season%202/") == "Friends"
    assert derive_series_name("http://h/media/Dark/S1/") == "Dark"
    assert derive_series_name("http://h/S1/") == "Unknown"


def test_detect_structure_fetches_listing(series_server) -> None:
    async def scenario():
        async with httpx.AsyncClient(transport=series_server.transport) as client:
            fetcher = ListingFetcher(client)
            url = series_server.url("/TV/Breaking Bad (2008)/")
            report = await detect_structure(url, fetcher, series_server.url("/TV/"))
            missing = await detect_structure(series_server.url("/TV/Nope/"), fetcher, series_server.url("/TV/"))
            return report, missing

    report, missing = asyncio.run(scenario())

    assert report.structure == Structure.SINGLE_SERIES
    assert [d.name for d in report.directories] == ["Season 1", "Season 2", "Extras"]
    assert missing is None
