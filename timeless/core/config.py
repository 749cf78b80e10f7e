#!/usr/bin/env python3
"""
config.py
---------
Optional YAML configuration for the Timeless CLI.

A configuration file overrides the default locations from paths.py:

    diary_path: ~/Dropbox/Apps/Timeless/calendar/diary.md
    calendar_json: data/diary/calendar.json
    log_dir: logs
    backup_dir: backups

Relative paths are resolved against the directory holding the
configuration file. Keys not listed above are rejected.

Usage:
    from timeless.core.config import load_config

    config = load_config(Path("timeless.yaml"))
    parsed = read_diary(config.diary_path)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third-party imports ---
import yaml

# --- Local imports ---
from timeless.core.exceptions import ConfigError
from timeless.core.paths import (
    BACKUP_DIR,
    CALENDAR_JSON,
    CONFIG_PATH,
    DIARY_PATH,
    LOG_DIR,
)


@dataclass(frozen=True)
class DiaryConfig:
    """
    Resolved file locations used by the CLI.

    Attributes:
        diary_path: Markdown diary document
        calendar_json: JSON calendar file (load-response shape)
        log_dir: Directory for rotating log files
        backup_dir: Directory for JSON/CSV backups
    """

    diary_path: Path = DIARY_PATH
    calendar_json: Path = CALENDAR_JSON
    log_dir: Path = LOG_DIR
    backup_dir: Path = BACKUP_DIR


def load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load a YAML mapping from disk.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML content as a dict (empty for an empty file)

    Raises:
        ConfigError: If the file is unreadable, malformed or not a mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping: {path}")
    return data


def load_config(path: Optional[Union[str, Path]] = None) -> DiaryConfig:
    """
    Build a DiaryConfig from defaults and an optional YAML file.

    When no path is given, ROOT/timeless.yaml is used if it exists;
    otherwise the defaults from paths.py apply.

    Args:
        path: Explicit configuration file

    Returns:
        Resolved DiaryConfig

    Raises:
        ConfigError: If an explicit file is missing or contains unknown keys
    """
    config = DiaryConfig()

    if path is None:
        if not CONFIG_PATH.is_file():
            return config
        config_path = CONFIG_PATH
    else:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Configuration file not found: {config_path}")

    data = load_yaml(config_path)
    allowed = {f.name for f in fields(DiaryConfig)}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

    overrides: Dict[str, Path] = {}
    for key, value in data.items():
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Configuration value for '{key}' must be a path string")
        resolved = Path(value).expanduser()
        if not resolved.is_absolute():
            resolved = config_path.parent / resolved
        overrides[key] = resolved

    return replace(config, **overrides)
