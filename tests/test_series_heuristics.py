"""Tests for series, season and episode inference."""

import pytest

from listing_scraper.heuristics import infer_episode_info, is_season_folder
from listing_scraper.heuristics.series import parse_episode, parse_season_number, parse_series_title


def test_full_episode_inference() -> None:
    info = infer_episode_info("Breaking%20Bad%20(2008)", "Season%201", "S01E03%20-%20The%20Beginning.mkv")

    assert info.series_title == "Breaking Bad"
    assert info.series_year == "2008"
    assert info.season_number == 1
    assert info.season_title == "Season 1"
    assert info.episode_number == 3
    assert info.episode_title == "The Beginning"
    assert info.episode_rule == "season_episode"


def test_bare_number_episode_gets_generated_title() -> None:
    info = infer_episode_info("The Wire", "S2", "03.mkv")

    assert info.season_number == 2
    assert info.episode_number == 3
    assert info.episode_title == "Episode 3"
    assert info.episode_rule == "bare_number"


@pytest.mark.parametrize("raw, expected", [
    ("Breaking Bad (2008)", ("Breaking Bad", "2008")),
    ("The.Office.2005", ("The Office", "2005")),
    ("Friends", ("Friends", "")),
    ("2012", ("2012", "")),
])
def test_parse_series_title(raw, expected) -> None:
    assert parse_series_title(raw) == expected


@pytest.mark.parametrize("name, expected", [
    ("Season 3", (3, "season_word")),
    ("S02", (2, "season_token")),
    ("Staffel 4", (4, "season_any_number")),
    ("Extras", (1, "default")),
    ("S00", (1, "default")),
])
def test_parse_season_number(name, expected) -> None:
    assert parse_season_number(name) == expected


@pytest.mark.parametrize("filename, expected", [
    ("Show.S02E10.1080p.WEB-DL.mkv", (10, "Episode 10", "season_episode")),
    ("1x05 Pilot.mp4", (5, "Pilot", "cross")),
    ("E07 - Reunion.mkv", (7, "Reunion", "e_marker")),
    ("Episode 12.mkv", (12, "Episode 12", "episode_word")),
    ("04 - The Trial.mkv", (4, "The Trial", "leading_number")),
    ("finale.mkv", (1, "Episode 1", "default")),
])
def test_parse_episode(filename, expected) -> None:
    assert parse_episode(filename) == expected


def test_season_from_filename_marker_without_season_folder() -> None:
    info = infer_episode_info("Dark", None, "Dark.S03E02.mkv")
    assert (info.season_number, info.episode_number) == (3, 2)
    assert info.season_rule == "filename_marker"


def test_is_season_folder() -> None:
    assert is_season_folder("S1")
    assert is_season_folder("s02")
    assert is_season_folder("Season%203")
    assert not is_season_folder("Extras")
    assert not is_season_folder("Breaking Bad (2008)")


def test_markers_under_short_season_folder() -> None:
    info = infer_episode_info("Show", "S1", "S01E03 - The Beginning.mkv")
    assert (info.season_number, info.episode_number, info.episode_title) == (1, 3, "The Beginning")
