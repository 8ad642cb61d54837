"""Configuration loading and validation for the torrent processor."""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from loguru import logger

from torrent_processor.config.context import AppConfig, parse_duration
from torrent_processor.config.settings import (
    DEFAULT_CONFIG_NAME,
    DEFAULT_DORMANT_PERIOD,
    DEFAULT_MAX_RETRIES,
    ENV_PREFIX,
)
from torrent_processor.exceptions import ConfigurationError

# AppConfig attributes that must name an existing path
PATH_FIELDS: Tuple[str, ...] = ("work_path", "movie_output_path", "tv_output_path")

CONFIG_FIELDS: Tuple[str, ...] = PATH_FIELDS + ("dormant_period", "max_retries")


@dataclass
class ValidationResult:
    """Result of a configuration validation."""

    valid: bool
    errors: Optional[List[str]] = None

    @property
    def error_message(self) -> str:
        return "; ".join(self.errors or [])


def _canonical_key(key: str) -> str:
    """Map `WorkPath`, `work_path` and `WORK-PATH` onto one form."""
    return key.replace("_", "").replace("-", "").lower()


_KEY_LOOKUP: Dict[str, str] = {_canonical_key(name): name for name in CONFIG_FIELDS}


class ConfigurationManager:
    """
    Loads and validates the application configuration.

    Settings come from a JSON config file, then environment variables
    (a `.env` file is read first) override individual values.
    """

    def __init__(self, search_dirs: Optional[List[Path]] = None):
        """
        Initialize the manager.

        Args:
            search_dirs: Directories searched for a config name without
                suffix (default: current directory, then the script's).
        """
        if search_dirs is None:
            search_dirs = [Path.cwd(), Path(sys.argv[0]).resolve().parent]
        self.search_dirs = search_dirs
        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        """Return the loaded configuration."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load() first.")
        return self._config

    def find_config_file(self, config_path: Optional[str] = None) -> Path:
        """
        Locate the config file.

        A path with a suffix is used as given. A bare name (default
        "config") gets a `.json` suffix and is looked up in each search
        directory in turn.

        Raises:
            ConfigurationError: If no config file is found.
        """
        if config_path and Path(config_path).suffix:
            path = Path(config_path)
            if not path.is_file():
                raise ConfigurationError(f"config file not found: {path}")
            return path

        name = f"{config_path or DEFAULT_CONFIG_NAME}.json"
        for directory in self.search_dirs:
            candidate = directory / name
            if candidate.is_file():
                return candidate

        searched = ", ".join(str(d) for d in self.search_dirs)
        raise ConfigurationError(f"config file {name} not found in {searched}")

    def read_config_file(self, path: Path) -> Dict[str, Any]:
        """Read the config file into a dict keyed by AppConfig field names."""
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"failed to read config file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"invalid JSON in config file {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigurationError(f"config file {path} must contain a JSON object")

        values: Dict[str, Any] = {}
        for key, value in raw.items():
            field_name = _KEY_LOOKUP.get(_canonical_key(key))
            if field_name is None:
                logger.warning(f"Unknown config key ignored: {key}")
                continue
            values[field_name] = value
        return values

    def read_environment(self) -> Dict[str, Any]:
        """
        Collect overrides from TORRENT_PROCESSOR_* environment variables.

        A `.env` file in any search directory is loaded first; variables
        already set in the environment take precedence over it.
        """
        for directory in self.search_dirs:
            env_path = directory / ".env"
            if env_path.is_file():
                load_dotenv(dotenv_path=env_path)
        values: Dict[str, Any] = {}
        for field_name in CONFIG_FIELDS:
            value = os.getenv(ENV_PREFIX + field_name.upper())
            if value:
                values[field_name] = value
        return values

    def build_config(self, values: Dict[str, Any]) -> AppConfig:
        """
        Build an AppConfig from raw values.

        Raises:
            ConfigurationError: On a missing path or a badly typed value.
        """
        missing = [name for name in PATH_FIELDS if not values.get(name)]
        if missing:
            raise ConfigurationError(f"missing config values: {', '.join(missing)}")
        for name in PATH_FIELDS:
            if not isinstance(values[name], str):
                raise ConfigurationError(f"{name} must be a string, got {values[name]!r}")

        try:
            dormant_period = parse_duration(values.get("dormant_period", DEFAULT_DORMANT_PERIOD))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"invalid dormant_period: {e}") from e

        max_retries = values.get("max_retries", DEFAULT_MAX_RETRIES)
        if isinstance(max_retries, bool):
            raise ConfigurationError(f"invalid max_retries: {max_retries!r}")
        try:
            max_retries = int(max_retries)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"invalid max_retries: {max_retries!r}") from e

        return AppConfig(
            work_path=Path(values["work_path"]),
            movie_output_path=Path(values["movie_output_path"]),
            tv_output_path=Path(values["tv_output_path"]),
            dormant_period=dormant_period,
            max_retries=max_retries,
        )

    def validate(self, config: AppConfig) -> ValidationResult:
        """
        Check that every path setting exists.

        Returns:
            ValidationResult listing every missing path.
        """
        errors = []
        for name in PATH_FIELDS:
            path = getattr(config, name)
            if not path.exists():
                errors.append(f"{name} doesn't exist: {path}")
        return ValidationResult(valid=not errors, errors=errors)

    def load(self, config_path: Optional[str] = None) -> AppConfig:
        """
        Load, merge and validate the configuration.

        Args:
            config_path: Config file path or bare name (None for default).

        Returns:
            Validated AppConfig.

        Raises:
            ConfigurationError: If loading or validation fails.
        """
        path = self.find_config_file(config_path)
        logger.debug(f"Loading config file {path}")

        values = self.read_config_file(path)
        values.update(self.read_environment())
        config = self.build_config(values)

        result = self.validate(config)
        if not result.valid:
            raise ConfigurationError(f"invalid app config: {result.error_message}")

        self._config = config
        return config
