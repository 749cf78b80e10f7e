#!/usr/bin/env python3
"""
json2md.py
-------------------
Write a Markdown diary document from a JSON calendar file.

The input may be any of the JSON shapes the calendar produces:
- a save request body ({DateKey: [...], "lastSavedTimestamp": ...})
- a load response body (same shape, string timestamp)
- a backup envelope ({"version", "exportDate", "appName", "data"})

Pipeline Position:
    calendar JSON → diary .md (the document the sync endpoints store)

Usage:
    from timeless.pipeline.json2md import load_calendar_json, write_diary

    calendar, timestamp = load_calendar_json(Path("calendar.json"))
    stats = write_diary(calendar, Path("diary.md"), timestamp)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# --- Local imports ---
from timeless.core.cli import ConversionStats
from timeless.core.exceptions import BackupError, DiaryFileError
from timeless.core.logging_manager import TimelessLogger, safe_logger
from timeless.dataclasses.diary_event import is_empty_day
from timeless.diary import collect_days, format_calendar
from timeless.pipeline.backup import unwrap_backup
from timeless.pipeline.payload import calendar_from_payload
from timeless.utils.dates import parse_date_key, resolve_timestamp


def load_calendar_json(path: Path) -> Tuple[Dict[str, List[Any]], Any]:
    """
    Read a JSON calendar file.

    Args:
        path: JSON file (payload, load response or backup envelope)

    Returns:
        Tuple of (raw_calendar, timestamp); timestamp is None when the
        file carries none

    Raises:
        DiaryFileError: If the file is missing, unreadable or not a
            JSON object
    """
    path = Path(path)
    if not path.is_file():
        raise DiaryFileError(f"Calendar file not found: {path}")

    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise DiaryFileError(f"Cannot read calendar file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DiaryFileError(f"Invalid JSON in {path}: {e}") from e

    try:
        data = unwrap_backup(document)
    except BackupError as e:
        raise DiaryFileError(f"{path}: {e}") from e

    return calendar_from_payload(data)


def write_diary(
    calendar: Dict[str, Any],
    output_path: Path,
    timestamp: Any = None,
    force: bool = False,
    logger: Optional[TimelessLogger] = None,
) -> ConversionStats:
    """
    Format a calendar and write it as a diary document.

    Args:
        calendar: DateKey -> raw events
        output_path: Destination .md file
        timestamp: Save time in ms (defaults to now)
        force: Overwrite an existing file
        logger: Optional logger

    Returns:
        ConversionStats for the write

    Raises:
        DiaryFileError: If the output exists without force, or cannot be written
    """
    log = safe_logger(logger)
    stats = ConversionStats()
    output_path = Path(output_path)

    if output_path.exists() and not force:
        raise DiaryFileError(f"Output exists (use --force to overwrite): {output_path}")

    stats.timestamp = resolve_timestamp(timestamp)
    days = collect_days(calendar)
    stats.days_written = len(days)
    stats.events_written = sum(len(events) for _, events in days)
    skipped = [
        key for key, raw_events in calendar.items()
        if parse_date_key(key) is None or is_empty_day(raw_events)
    ]
    stats.days_skipped = len(skipped)

    markdown = format_calendar(calendar, stats.timestamp)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(markdown, encoding="utf-8")
    except OSError as e:
        raise DiaryFileError(f"Cannot write diary {output_path}: {e}") from e

    stats.files_processed += 1
    for key in skipped:
        log.log_debug("Skipped day", {"key": key})
    log.log_operation(
        "write_diary",
        {"output": str(output_path), **stats.to_dict()},
    )
    if stats.days_skipped:
        log.log_warning(
            f"Skipped {stats.days_skipped} day(s) with no events or undecodable keys",
            {"output": str(output_path)},
        )
    return stats
