"""Resolved runtime configuration for the torrent processor."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from torrent_processor.config.settings import (
    DEFAULT_DORMANT_PERIOD,
    DEFAULT_LIMIT,
    DEFAULT_MAX_RETRIES,
)

# Go-style duration units, in seconds
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: Union[str, int, float]) -> float:
    """
    Parse a duration into seconds.

    Accepts a plain number of seconds or a Go-style duration string
    made of number/unit pairs.

    Args:
        value: Number of seconds, or a string such as "30s" or "1h30m".

    Returns:
        Duration in seconds.

    Raises:
        ValueError: If the value is negative or not a duration.

    Examples:
        >>> parse_duration("1m30s")
        90.0
        >>> parse_duration(5)
        5.0
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")

    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = value.strip()
        try:
            seconds = float(text)
        except ValueError:
            position = 0
            seconds = 0.0
            for match in _DURATION_PART.finditer(text):
                if match.start() != position:
                    break
                seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
                position = match.end()
            if not text or position != len(text):
                raise ValueError(f"invalid duration: {value!r}") from None

    if seconds < 0:
        raise ValueError(f"duration must not be negative: {value!r}")
    return seconds


@dataclass
class AppConfig:
    """
    Settings loaded from the config file.

    Attributes:
        work_path: Directory holding pending job files.
        movie_output_path: Library root for movies.
        tv_output_path: Library root for TV shows.
        dormant_period: Seconds to wait when the queue is empty.
        max_retries: Consecutive parse failures tolerated (negative = unlimited).
    """

    work_path: Path
    movie_output_path: Path
    tv_output_path: Path
    dormant_period: float = DEFAULT_DORMANT_PERIOD
    max_retries: int = DEFAULT_MAX_RETRIES


@dataclass
class ProcessConfig:
    """
    Settings for one `process` run.

    Attributes:
        app: Loaded application settings.
        dry_run: If True, simulate copies and leave job files in place.
        limit: Stop after this many entries (non-positive = unlimited).
    """

    app: AppConfig
    dry_run: bool = False
    limit: int = DEFAULT_LIMIT

    @property
    def work_path(self) -> Path:
        return self.app.work_path

    @property
    def movie_output_path(self) -> Path:
        return self.app.movie_output_path

    @property
    def tv_output_path(self) -> Path:
        return self.app.tv_output_path

    @property
    def dormant_period(self) -> float:
        return self.app.dormant_period

    @property
    def max_retries(self) -> int:
        return self.app.max_retries

    @property
    def is_simulation(self) -> bool:
        """Alias for dry_run for readability."""
        return self.dry_run
