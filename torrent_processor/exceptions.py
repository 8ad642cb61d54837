"""Exception hierarchy for the torrent processor."""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from torrent_processor.models.entry import Entry


class TorrentProcessorError(Exception):
    """Base class for every error raised by the package."""

    pass


class ConfigurationError(TorrentProcessorError):
    """Configuration could not be loaded or failed validation."""

    pass


class WorkQueueError(TorrentProcessorError):
    """The work directory could not be read or written."""

    pass


class EntryParseError(WorkQueueError):
    """A job file could not be read or decoded. Retryable."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        message = f"failed to parse job file '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class PoisonedEntryError(WorkQueueError):
    """A job file's name disagrees with the hash it contains."""

    def __init__(self, path: Path, expected_path: Path):
        self.path = path
        self.expected_path = expected_path
        super().__init__(
            f"file '{path}' should actually be named '{expected_path}' based on the contents"
        )


class ProcessingError(TorrentProcessorError):
    """An entry could not be organized into the library."""

    pass


class TvNameError(ProcessingError):
    """Show, season or episode could not be extracted from a name."""

    pass


class DestinationExistsError(ProcessingError):
    """Refused to overwrite existing library content."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"destination already exists: {path}")


class CopyError(ProcessingError):
    """A file copy failed part way."""

    pass


class EntryFailedError(TorrentProcessorError):
    """Processing an entry failed; the entry is ignored until restart."""

    def __init__(self, entry: "Entry"):
        self.entry = entry
        super().__init__(
            f"failed to process entry {entry.hash} ({entry.name!r}), ignoring until restart"
        )


class RetriesExceededError(TorrentProcessorError):
    """Too many consecutive transient queue failures."""

    def __init__(self, max_retries: int):
        self.max_retries = max_retries
        super().__init__(f"exceeded {max_retries} retries reading the work queue")
