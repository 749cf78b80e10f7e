#!/usr/bin/env python3
"""
md2json.py
-------------------
Read a Markdown diary document and write its calendar as JSON.

The JSON written is the load-response shape the browser calendar
consumes: one key per day holding event objects, plus a string
"lastSavedTimestamp".

Pipeline Position:
    diary .md → calendar JSON

Usage:
    from timeless.pipeline.md2json import read_diary, write_calendar_json

    parsed = read_diary(Path("diary.md"))
    write_calendar_json(parsed, Path("calendar.json"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from timeless.core.cli import ConversionStats
from timeless.core.exceptions import DiaryFileError
from timeless.core.logging_manager import TimelessLogger, safe_logger
from timeless.dataclasses.diary_event import calendar_to_dict
from timeless.diary import ParsedDiary, parse_diary
from timeless.utils.md import TIMESTAMP_KEY


def read_diary_text(path: Path) -> str:
    """
    Read a diary document as UTF-8 text, dropping a leading byte order mark.

    Raises:
        DiaryFileError: If the file is missing or unreadable
    """
    path = Path(path)
    if not path.is_file():
        raise DiaryFileError(f"Diary file not found: {path}")

    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise DiaryFileError(f"Cannot read diary {path}: {e}") from e


def read_diary(path: Path) -> ParsedDiary:
    """Read and parse a diary document."""
    return parse_diary(read_diary_text(path))


def to_load_shape(parsed: ParsedDiary) -> Dict[str, Any]:
    """Calendar days plus the document timestamp as a string."""
    document: Dict[str, Any] = calendar_to_dict(parsed.calendar_map)
    document[TIMESTAMP_KEY] = str(parsed.last_saved_timestamp)
    return document


def write_calendar_json(
    parsed: ParsedDiary,
    output_path: Path,
    force: bool = False,
    logger: Optional[TimelessLogger] = None,
) -> ConversionStats:
    """
    Write a parsed diary as a JSON calendar file.

    Args:
        parsed: Result of parse_diary/read_diary
        output_path: Destination .json file
        force: Overwrite an existing file
        logger: Optional logger

    Returns:
        ConversionStats for the write

    Raises:
        DiaryFileError: If the output exists without force, or cannot be written
    """
    log = safe_logger(logger)
    stats = ConversionStats(timestamp=parsed.last_saved_timestamp)
    output_path = Path(output_path)

    if output_path.exists() and not force:
        raise DiaryFileError(f"Output exists (use --force to overwrite): {output_path}")

    stats.days_written = len(parsed.calendar_map)
    stats.events_written = sum(len(events) for events in parsed.calendar_map.values())

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(to_load_shape(parsed), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise DiaryFileError(f"Cannot write calendar {output_path}: {e}") from e

    stats.files_processed += 1
    log.log_operation(
        "write_calendar_json",
        {"output": str(output_path), **stats.to_dict()},
    )
    return stats
