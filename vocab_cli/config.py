"""
YAML settings loader for the vocab command-line tool.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from custom_vocabulary.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".custom_vocabulary.yaml"
DEFAULT_DB_PATH = Path.home() / ".custom_vocabulary.db"

KNOWN_KEYS = {"database", "quiz_size", "export_dir", "log_level"}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Settings:
    """Resolved settings for one CLI run."""
    database: Path = DEFAULT_DB_PATH
    quiz_size: int = 5
    export_dir: Path = Path(".")
    log_level: str = "WARNING"

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from a YAML file.

    Args:
        path: Settings file; defaults to ~/.custom_vocabulary.yaml.
            A missing default file yields default settings.

    Returns:
        Settings object

    Raises:
        ConfigError: If the file is invalid
        FileNotFoundError: If an explicitly given file does not exist
    """
    if path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return Settings()
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"File not found: {config_path}")

    return _parse_settings(_load_yaml_file(config_path), config_path)


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load YAML from a file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line_info = f" (line {mark.line + 1})" if mark else ""
        raise ConfigError(f"Invalid YAML in {path}{line_info}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Settings root must be a mapping (dictionary)")

    return data


def _parse_settings(data: Dict[str, Any], source: Path) -> Settings:
    """Parse a dictionary into a Settings object."""
    unknown = set(data) - KNOWN_KEYS
    if unknown:
        raise ConfigError(
            f"Unknown setting(s) in {source}: {', '.join(sorted(unknown))}"
        )

    settings = Settings()

    if "database" in data:
        if not isinstance(data["database"], str) or not data["database"]:
            raise ConfigError("Setting 'database' must be a path string")
        settings.database = _resolve(data["database"], source)

    if "quiz_size" in data:
        size = data["quiz_size"]
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ConfigError("Setting 'quiz_size' must be a positive integer")
        settings.quiz_size = size

    if "export_dir" in data:
        if not isinstance(data["export_dir"], str) or not data["export_dir"]:
            raise ConfigError("Setting 'export_dir' must be a path string")
        settings.export_dir = _resolve(data["export_dir"], source)

    if "log_level" in data:
        level = str(data["log_level"]).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"Setting 'log_level' must be one of: {', '.join(sorted(LOG_LEVELS))}"
            )
        settings.log_level = level

    return settings


def _resolve(value: str, source: Path) -> Path:
    """Expand ~ and resolve relative paths against the settings file."""
    p = Path(value).expanduser()
    if not p.is_absolute():
        p = source.parent / p
    return p
