"""Configuration loading and runtime settings."""

from torrent_processor.config.context import (
    AppConfig,
    ProcessConfig,
    parse_duration,
)
from torrent_processor.config.manager import (
    ConfigurationManager,
    ValidationResult,
    PATH_FIELDS,
)

__all__ = [
    "AppConfig",
    "ProcessConfig",
    "parse_duration",
    "ConfigurationManager",
    "ValidationResult",
    "PATH_FIELDS",
]
