"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from torrent_processor.config.context import AppConfig, ProcessConfig
from torrent_processor.models.category import Category
from torrent_processor.models.entry import Entry


class FakeCancelEvent:
    """Stand-in for threading.Event that records waits instead of sleeping."""

    def __init__(self, cancel_after: int = -1):
        self.waits = []
        self.cancel_after = cancel_after
        self._set = False

    def wait(self, timeout=None):
        self.waits.append(timeout)
        if self.cancel_after >= 0 and len(self.waits) > self.cancel_after:
            self._set = True
        return self._set

    def is_set(self):
        return self._set

    def set(self):
        self._set = True


def set_mtime(path: Path, seconds: int) -> None:
    """Give a file a fixed modification time."""
    os.utime(path, ns=(seconds * 1_000_000_000, seconds * 1_000_000_000))


@pytest.fixture
def library(tmp_path):
    """Create work, movie and TV directories."""
    dirs = {name: tmp_path / name for name in ("work", "movies", "tv", "downloads")}
    for path in dirs.values():
        path.mkdir()
    return dirs


@pytest.fixture
def app_config(library):
    """AppConfig pointing at the temporary library."""
    return AppConfig(
        work_path=library["work"],
        movie_output_path=library["movies"],
        tv_output_path=library["tv"],
        dormant_period=30.0,
        max_retries=5,
    )


@pytest.fixture
def process_config(app_config):
    """ProcessConfig for a normal (non dry-run) run."""
    return ProcessConfig(app=app_config)


@pytest.fixture
def dry_run_config(app_config):
    """ProcessConfig for a simulated run."""
    return ProcessConfig(app=app_config, dry_run=True)


@pytest.fixture
def make_entry():
    """Factory for entries with sensible defaults."""
    def factory(**kwargs) -> Entry:
        values = dict(
            output_path="/library",
            name="Foo 2020",
            category=Category.MovieSingle,
            content_path="/downloads/Foo.2020.1080p",
            number_of_files=1,
            size=1024,
            tracker="https://tracker.example/announce",
            hash="6c9b2e9ea8b2857cd58870db45b26c9205d68a82",
            save_path="/downloads",
        )
        values.update(kwargs)
        return Entry(**values)
    return factory


@pytest.fixture
def movie_download(library):
    """Multi-file movie torrent with one video and one subtitle."""
    content = library["downloads"] / "Foo.2020.1080p"
    content.mkdir()
    (content / "movie.mkv").write_bytes(b"video data")
    (content / "movie.srt").write_text("1\n00:00:01,000 --> 00:00:02,000\nHi\n")
    return content


@pytest.fixture
def cancel_event():
    """Factory for FakeCancelEvent instances."""
    return FakeCancelEvent


@pytest.fixture
def mtime():
    """Helper setting a file's modification time."""
    return set_mtime
