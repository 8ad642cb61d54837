"""Integration tests for the queue-to-library pipeline."""

import json
import threading

import pytest

from torrent_processor.config import ConfigurationManager, ProcessConfig
from torrent_processor.exceptions import EntryFailedError, RetriesExceededError
from torrent_processor.models import Category
from torrent_processor.pipeline import CategoryProcessor, QueueOrchestrator
from torrent_processor.work import WorkQueue


class TestPipeline:
    """End-to-end runs over real directories."""

    def _orchestrator(self, config, event):
        return QueueOrchestrator(
            WorkQueue(config.work_path), CategoryProcessor(config), config, event
        )

    def _tv_downloads(self, library):
        single = library["downloads"] / "Show.S01E02.Title.mkv"
        single.write_bytes(b"single")
        season = library["downloads"] / "Other.Show.S02"
        season.mkdir()
        for episode in (1, 2, 3):
            (season / f"Other.Show.S02E0{episode}.720p.mkv").write_bytes(b"ep")
        (season / "sample.txt").write_text("skip me")
        return single, season

    def test_organizes_mixed_queue(self, library, process_config, make_entry, movie_download,
                                   mtime, cancel_event):
        """Movies, episodes and season packs end up in the library."""
        single, season = self._tv_downloads(library)
        queue = WorkQueue(library["work"])
        entries = [
            make_entry(hash="m1", content_path=str(movie_download), number_of_files=2),
            make_entry(hash="t1", name="Show.S01E02.Title", category=Category.TvSingle,
                       content_path=str(single)),
            make_entry(hash="t2", name="Other.Show.S02", category=Category.TvSeason,
                       content_path=str(season), number_of_files=4),
            make_entry(hash="i1", category=Category.Ignore, content_path=str(movie_download)),
        ]
        for age, entry in enumerate(entries):
            queue.add(entry)
            mtime(queue.job_path(entry), 1000 + age)

        event = cancel_event(cancel_after=0)
        stats = self._orchestrator(process_config, event).run()

        assert stats.processed == 4
        assert stats.stopped_by == "cancelled"
        assert list(library["work"].iterdir()) == []
        assert sorted(p.name for p in library["movies"].iterdir()) == [
            "Foo 2020.en.srt", "Foo 2020.mkv",
        ]
        assert (library["tv"] / "Show" / "Show S01E02.mkv").read_bytes() == b"single"
        assert sorted(p.name for p in (library["tv"] / "Other Show").iterdir()) == [
            "Other Show S02E01.mkv", "Other Show S02E02.mkv", "Other Show S02E03.mkv",
        ]
        # Downloads are copied, never moved
        assert (movie_download / "movie.mkv").exists()

    def test_dry_run_leaves_disk_untouched(self, library, dry_run_config, make_entry,
                                           movie_download, cancel_event):
        """A simulated run changes no file and keeps every job."""
        queue = WorkQueue(library["work"])
        queue.add(make_entry(content_path=str(movie_download), number_of_files=2))
        before = sorted(p for root in library.values() for p in root.rglob("*"))

        event = cancel_event(cancel_after=0)
        stats = self._orchestrator(dry_run_config, event).run()

        assert stats.processed == 1
        assert sorted(p for root in library.values() for p in root.rglob("*")) == before

    def test_failure_keeps_job_for_next_run(self, library, process_config, make_entry,
                                            movie_download, cancel_event):
        """A failed job stays on disk and is retried by a fresh run."""
        (library["movies"] / "Foo 2020.mkv").write_bytes(b"old")
        queue = WorkQueue(library["work"])
        queue.add(make_entry(hash="dup", content_path=str(movie_download), number_of_files=2))

        with pytest.raises(EntryFailedError):
            self._orchestrator(process_config, cancel_event()).run()

        assert (library["work"] / "dup.json").exists()

        (library["movies"] / "Foo 2020.mkv").unlink()
        stats = self._orchestrator(process_config, cancel_event(cancel_after=0)).run()

        assert stats.processed == 1
        assert (library["movies"] / "Foo 2020.mkv").read_bytes() == b"video data"

    def test_corrupt_job_exhausts_retries(self, library, process_config, cancel_event):
        """A job that never parses ends the run after the retries."""
        (library["work"] / "bad.json").write_text("{")
        event = cancel_event()

        with pytest.raises(RetriesExceededError):
            self._orchestrator(process_config, event).run()

        assert event.waits == [1, 2, 5, 10, 30]
        assert (library["work"] / "bad.json").exists()

    def test_stops_on_real_event(self, library, process_config):
        """A set threading.Event ends a dormant run."""
        event = threading.Event()
        event.set()

        stats = self._orchestrator(process_config, event).run()

        assert stats.stopped_by == "cancelled"


class TestConfiguredRun:
    """Runs driven by a loaded config file."""

    def test_config_file_to_library(self, library, tmp_path, make_entry, movie_download,
                                    cancel_event):
        """Config, queue and processor work together."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "WorkPath": str(library["work"]),
            "MovieOutputPath": str(library["movies"]),
            "TvOutputPath": str(library["tv"]),
            "DormantPeriod": "5m",
        }))
        app = ConfigurationManager(search_dirs=[tmp_path]).load()
        config = ProcessConfig(app=app, limit=1)

        queue = WorkQueue(config.work_path)
        queue.add(make_entry(content_path=str(movie_download), number_of_files=2))
        queue.add(make_entry(hash="second", content_path=str(movie_download), number_of_files=2))

        event = cancel_event()
        stats = QueueOrchestrator(queue, CategoryProcessor(config), config, event).run()

        assert stats.processed == 1
        assert stats.stopped_by == "limit"
        assert len(list(library["work"].iterdir())) == 1
        assert event.waits == []
