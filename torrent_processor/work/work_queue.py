"""Directory-backed queue of pending torrent jobs.

Each job is a JSON file named after the torrent hash. Jobs are served
oldest first by modification time. Jobs that must not be served again
(poisoned or ignored) are remembered in memory for the lifetime of the
WorkQueue instance only; a restart forgets them.
"""

import json
import os
from pathlib import Path
from typing import FrozenSet, List, Optional, Set, Tuple

from loguru import logger

from torrent_processor.config.settings import JOB_FILE_INDENT, JOB_FILE_SUFFIX
from torrent_processor.exceptions import EntryParseError, PoisonedEntryError, WorkQueueError
from torrent_processor.models.entry import Entry


class WorkQueue:
    """
    FIFO-by-age job store over a plain directory.

    Attributes:
        work_dir: Directory holding `<hash>.json` job files.
    """

    def __init__(self, work_dir: Path) -> None:
        """
        Open the queue.

        Args:
            work_dir: Existing directory holding job files.

        Raises:
            WorkQueueError: If the path is missing or not a directory.
        """
        work_dir = Path(work_dir)
        if not work_dir.exists():
            raise WorkQueueError(f"invalid path '{work_dir}': does not exist")
        if not work_dir.is_dir():
            raise WorkQueueError(f"path is not a directory: '{work_dir}'")

        self.work_dir = work_dir
        # Filenames never to serve again during this run
        self._processed: Set[str] = set()

    def job_path(self, entry: Entry) -> Path:
        """Return the path an entry is stored at."""
        return self.work_dir / entry.job_filename

    @property
    def processed(self) -> FrozenSet[str]:
        """Filenames excluded from selection for the rest of this run."""
        return frozenset(self._processed)

    def is_processed(self, entry: Entry) -> bool:
        """Check if an entry is excluded for the rest of this run."""
        return entry.job_filename in self._processed

    def _candidates(self) -> List[Tuple[int, str, Path]]:
        """List unprocessed job files as (mtime, name, path)."""
        try:
            children = list(self.work_dir.iterdir())
        except OSError as e:
            raise WorkQueueError(f"failed to read dir {self.work_dir}: {e}") from e

        candidates = []
        for path in children:
            if path.suffix != JOB_FILE_SUFFIX or path.name in self._processed:
                continue
            try:
                if not path.is_file():
                    continue
                mtime = path.stat().st_mtime_ns
            except FileNotFoundError:
                logger.debug(f"Job file vanished while scanning: {path}")
                continue
            except OSError as e:
                raise WorkQueueError(f"failed to get entry info for {path}: {e}") from e
            candidates.append((mtime, path.name, path))
        return candidates

    def next(self) -> Optional[Entry]:
        """
        Load the oldest job not yet processed in this run.

        Returns:
            The Entry, or None when no job remains.

        Raises:
            EntryParseError: If the job file cannot be read or decoded.
                The file stays eligible so a later call can retry it.
            PoisonedEntryError: If the filename disagrees with the hash.
                The file is excluded from now on.
            WorkQueueError: If the directory cannot be listed.
        """
        candidates = self._candidates()
        if not candidates:
            return None

        _, name, path = min(candidates)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            entry = Entry.from_dict(data)
        except OSError as e:
            raise EntryParseError(path, f"failed to read: {e}") from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors too
            raise EntryParseError(path, str(e)) from e

        if entry.job_filename != name:
            self._processed.add(name)
            raise PoisonedEntryError(path, self.job_path(entry))

        logger.debug(f"Next entry: {path}")
        return entry

    def add(self, entry: Entry) -> Path:
        """
        Store a new job, never replacing an existing one.

        Args:
            entry: Entry to queue.

        Returns:
            Path of the created job file.

        Raises:
            ValueError: If the hash cannot be used as a filename.
            WorkQueueError: If the job already exists or cannot be written.
        """
        if not entry.hash or os.sep in entry.hash or (os.altsep and os.altsep in entry.hash):
            raise ValueError(f"invalid hash for a job file: {entry.hash!r}")

        data = json.dumps(entry.to_dict(), indent=JOB_FILE_INDENT)
        path = self.job_path(entry)

        try:
            handle = open(path, "x", encoding="utf-8")
        except OSError as e:
            raise WorkQueueError(f"failed to open file '{path}': {e}") from e

        try:
            with handle:
                handle.write(data)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise WorkQueueError(f"failed to write file '{path}': {e}") from e

        logger.info(f"Entry added: {path}")
        return path

    def remove(self, entry: Entry) -> None:
        """
        Delete a finished job.

        Raises:
            WorkQueueError: If the file cannot be removed.
        """
        path = self.job_path(entry)
        try:
            path.unlink()
        except OSError as e:
            raise WorkQueueError(f"failed to remove file '{path}': {e}") from e
        logger.debug(f"Entry removed: {path}")

    def ignore(self, entry: Entry) -> None:
        """Exclude a job for the rest of this run, leaving its file in place."""
        self._processed.add(entry.job_filename)
        logger.debug(f"Entry ignored until restart: {self.job_path(entry)}")
