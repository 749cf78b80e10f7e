#!/usr/bin/env python3
"""
backup.py
---------
JSON backups and CSV export of a calendar.

Backup envelope (what the calendar's "export JSON" writes):

    {
      "version": "1.0",
      "exportDate": "2024-03-14T09:30:00+00:00",
      "appName": "Timeless Calendar",
      "data": {"2_14_2024": [{"text": ..., "completed": ..., "tags": [...]}]}
    }

Importing accepts either the envelope or raw calendar data.

CSV export writes one row per event in chronological order:

    Date,Note,Completed,Tags
    2024-03-14,Finish report,true,#work #urgent
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import csv
import io
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional

# --- Local imports ---
from timeless.core.exceptions import BackupError
from timeless.dataclasses.diary_event import calendar_to_dict, normalize_events
from timeless.diary import collect_days
from timeless.utils.dates import is_date_key

BACKUP_VERSION = "1.0"
APP_NAME = "Timeless Calendar"
CSV_FIELDS = ("Date", "Note", "Completed", "Tags")

_BACKUP_NAMES = {
    "json": "timeless-calendar-backup-{day}.json",
    "markdown": "timeless-diary-{day}.md",
    "csv": "timeless-calendar-{day}.csv",
}


def build_backup(
    calendar: Mapping[str, Any], exported_at: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Wrap a calendar in the JSON backup envelope.

    Days are normalized; empty days and non-DateKey entries are dropped.

    Args:
        calendar: DateKey -> raw events
        exported_at: Export time (defaults to now, UTC)

    Returns:
        Backup document ready for json.dumps
    """
    exported_at = exported_at or datetime.now(timezone.utc)
    data = {}
    for key, raw_events in calendar.items():
        if not is_date_key(key):
            continue
        events = normalize_events(raw_events)
        if events:
            data[key] = events

    return {
        "version": BACKUP_VERSION,
        "exportDate": exported_at.isoformat(),
        "appName": APP_NAME,
        "data": calendar_to_dict(data),
    }


def unwrap_backup(document: Any) -> Dict[str, Any]:
    """
    Extract calendar data from a backup envelope or raw calendar data.

    Raises:
        BackupError: If the document or its data is not a JSON object
    """
    if not isinstance(document, dict):
        raise BackupError("Backup document is not a JSON object")

    if "data" in document:
        data = document["data"]
        if not isinstance(data, dict):
            raise BackupError("Backup 'data' field is not a JSON object")
        return data

    return document


def calendar_to_csv(calendar: Mapping[str, Any]) -> str:
    """
    Render a calendar as CSV text, one row per event.

    Days are ordered chronologically; undecodable keys are skipped.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_FIELDS)

    for day, events in collect_days(calendar):
        for event in events:
            writer.writerow([
                day.isoformat(),
                event.text.strip(),
                "true" if event.completed else "false",
                " ".join(f"#{tag}" for tag in event.tags),
            ])

    return buffer.getvalue()


def default_backup_name(kind: str, today: Optional[date] = None) -> str:
    """
    Default file name for an export.

    Args:
        kind: 'json', 'markdown' or 'csv'
        today: Date stamped into the name (defaults to today)

    Raises:
        ValueError: For an unknown kind

    Examples:
        >>> default_backup_name("json", date(2024, 3, 14))
        'timeless-calendar-backup-2024-03-14.json'
    """
    if kind not in _BACKUP_NAMES:
        raise ValueError(f"Unknown export kind: {kind}")
    return _BACKUP_NAMES[kind].format(day=(today or date.today()).isoformat())
