"""Tests for TV filename heuristics."""

import pytest

from torrent_processor.classification.tv_names import (
    TvInfo,
    clean_show_name,
    parse_tv_episode,
    parse_tv_season,
)
from torrent_processor.exceptions import ProcessingError, TvNameError


class TestTvInfo:
    """Tests for TvInfo.to_episode_name."""

    def test_pads_numbers(self):
        """Season and episode are zero-padded to two digits."""
        info = TvInfo(name="Show", season=1, episode=2)
        assert info.to_episode_name(".mkv") == "Show S01E02.mkv"

    def test_keeps_large_numbers(self):
        """Numbers above 99 are not truncated."""
        info = TvInfo(name="Soap", season=12, episode=104)
        assert info.to_episode_name(".mp4") == "Soap S12E104.mp4"


class TestCleanShowName:
    """Tests for clean_show_name."""

    @pytest.mark.parametrize("raw,expected", [
        ("Show.", "Show"),
        ("The.Office.US.", "The Office US"),
        ("Some_Show_", "Some Show"),
        ("Show - ", "Show"),
        ("  Spaced   Out  ", "Spaced Out"),
    ])
    def test_cleans(self, raw, expected):
        """Separators become spaces and edges are trimmed."""
        assert clean_show_name(raw) == expected


class TestParseTvEpisode:
    """Tests for parse_tv_episode."""

    def test_parses_dotted_name(self):
        """Parses a dotted release name."""
        info = parse_tv_episode("Show.S01E02.Title")
        assert info == TvInfo(name="Show", season=1, episode=2)

    def test_case_insensitive(self):
        """Markers match in lower case."""
        info = parse_tv_episode("show.s03e10.720p")
        assert (info.name, info.season, info.episode) == ("show", 3, 10)

    def test_allows_dot_between_season_and_episode(self):
        """S01.E02 is accepted."""
        info = parse_tv_episode("Show S01.E02")
        assert (info.season, info.episode) == (1, 2)

    def test_uses_first_marker(self):
        """The first season/episode marker wins."""
        info = parse_tv_episode("Show.S02E05.S03E06")
        assert (info.season, info.episode) == (2, 5)

    def test_show_name_with_s_words(self):
        """Words starting with S are not mistaken for markers."""
        info = parse_tv_episode("Sons.of.Anarchy.S07E13.mkv")
        assert info.name == "Sons of Anarchy"

    @pytest.mark.parametrize("name", ["Movie.2020.1080p", "Show.S01", "S01E02.mkv"])
    def test_fails_without_marker_or_name(self, name):
        """Missing marker or empty show name raises TvNameError."""
        with pytest.raises(TvNameError):
            parse_tv_episode(name)

    def test_error_is_processing_error(self):
        """Name errors fail the entry like other processing errors."""
        with pytest.raises(ProcessingError):
            parse_tv_episode("nothing here")


class TestParseTvSeason:
    """Tests for parse_tv_season."""

    def test_parses_season(self):
        """Parses show name and season."""
        info = parse_tv_season("Show.S01")
        assert info == TvInfo(name="Show", season=1, episode=0)

    def test_parses_season_with_trailing_tags(self):
        """Tags after the season are ignored."""
        info = parse_tv_season("The.Wire.s04.1080p.BluRay")
        assert (info.name, info.season) == ("The Wire", 4)

    def test_fails_without_season(self):
        """No season marker raises TvNameError."""
        with pytest.raises(TvNameError):
            parse_tv_season("Complete.Collection")
