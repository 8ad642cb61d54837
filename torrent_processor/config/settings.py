"""Configuration settings and constants for the torrent_processor package."""

from typing import FrozenSet, Tuple

# Subtitle file extensions (compared lower-cased)
SUBTITLE_EXTENSIONS: FrozenSet[str] = frozenset({".srt", ".smi", ".ssa", ".ass", ".vtt"})

# Only these files are picked up from a season pack
SEASON_EPISODE_EXTENSION: str = ".mkv"

# Language tag added to copied subtitles
SUBTITLE_LANGUAGE: str = "en"

# Delays in seconds between attempts after a job file fails to parse.
# The last value is reused once the attempts run past the end.
BACKOFF_DELAYS: Tuple[float, ...] = (1.0, 2.0, 5.0, 10.0, 30.0)

# Defaults for values missing from the config file
DEFAULT_DORMANT_PERIOD: float = 30.0
DEFAULT_MAX_RETRIES: int = 5
DEFAULT_LIMIT: int = -1
DEFAULT_CONFIG_NAME: str = "config"

# Job files
JOB_FILE_SUFFIX: str = ".json"
JOB_FILE_INDENT: int = 2

# Suffix of a copy still in flight
PARTIAL_COPY_SUFFIX: str = ".part"

# Environment variables overriding the config file
ENV_PREFIX: str = "TORRENT_PROCESSOR_"

# Log files
LOG_FILE_TEMPLATE: str = "torrent-processor-{command}.log"
LOG_ROTATION: str = "5 MB"
LOG_RETENTION: str = "365 days"
