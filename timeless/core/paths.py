#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Timeless project.

The project structure:
    ROOT/
    ├── timeless/      # Package code
    ├── data/          # User data (diary, calendar exports)
    ├── logs/          # Application logs
    └── backups/       # JSON/CSV backups

Paths are computed at import time. Nothing here creates directories;
commands create what they write to.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/timeless/core/paths.py.

    Returns:
        Path object for project root
    """
    # paths.py -> core/ -> timeless/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
DATA_DIR = ROOT / "data"

# ---- Diary ----
DIARY_DIR = DATA_DIR / "diary"
DIARY_PATH = DIARY_DIR / "timeless-diary.md"
CALENDAR_JSON = DIARY_DIR / "calendar.json"

# ---- Logs & Backups ----
LOG_DIR = ROOT / "logs"
BACKUP_DIR = ROOT / "backups"

# ---- Configuration ----
CONFIG_PATH = ROOT / "timeless.yaml"
