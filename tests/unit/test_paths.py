"""Tests for library directory resolution."""

import pytest

from torrent_processor.exceptions import ProcessingError
from torrent_processor.filesystem.paths import find_matching_folder, resolve_show_directory


class TestFindMatchingFolder:
    """Tests for find_matching_folder function."""

    def test_finds_exact_match(self, tmp_path):
        """Finds a folder with the same name."""
        (tmp_path / "Show").mkdir()
        assert find_matching_folder(tmp_path, "Show") == tmp_path / "Show"

    def test_ignores_case(self, tmp_path):
        """Finds a folder whose name differs only in case."""
        (tmp_path / "the office").mkdir()
        assert find_matching_folder(tmp_path, "The Office") == tmp_path / "the office"

    def test_ignores_files(self, tmp_path):
        """Files with a matching name are not folders."""
        (tmp_path / "Show").touch()
        assert find_matching_folder(tmp_path, "Show") is None

    def test_returns_none_when_absent(self, tmp_path):
        """Returns None when nothing matches."""
        (tmp_path / "Other").mkdir()
        assert find_matching_folder(tmp_path, "Show") is None

    def test_missing_root_raises(self, tmp_path):
        """An unreadable root raises ProcessingError."""
        with pytest.raises(ProcessingError, match="failed to read dir"):
            find_matching_folder(tmp_path / "missing", "Show")


class TestResolveShowDirectory:
    """Tests for resolve_show_directory function."""

    def test_reuses_existing_directory(self, tmp_path):
        """Reuses an existing directory with different casing."""
        (tmp_path / "SHOW").mkdir()

        result = resolve_show_directory(tmp_path, "Show")

        assert result == tmp_path / "SHOW"
        assert [p.name for p in tmp_path.iterdir()] == ["SHOW"]

    def test_creates_missing_directory(self, tmp_path):
        """Creates the directory when none matches."""
        result = resolve_show_directory(tmp_path, "Show")

        assert result == tmp_path / "Show"
        assert result.is_dir()

    def test_dry_run_does_not_create(self, tmp_path):
        """Dry run returns the path without creating it."""
        result = resolve_show_directory(tmp_path, "Show", dry_run=True)

        assert result == tmp_path / "Show"
        assert not result.exists()

    def test_nul_byte_in_name_raises(self, tmp_path):
        """A name the filesystem cannot take raises ProcessingError."""
        with pytest.raises(ProcessingError):
            resolve_show_directory(tmp_path, "Bad\x00Show")

        assert list(tmp_path.iterdir()) == []

    def test_mkdir_failure_raises(self, tmp_path):
        """A failing mkdir raises ProcessingError."""
        (tmp_path / "file").touch()

        with pytest.raises(ProcessingError):
            resolve_show_directory(tmp_path / "file", "Show")
