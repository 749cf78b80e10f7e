#!/usr/bin/env python3
"""
formatter.py
-------------------
CalendarMap -> Markdown diary document.

Output layout:

    <!-- lastSavedTimestamp: 1700000000000 -->

    # 2024

    ## March 2024

    3/14/2024
      - Pick up dry cleaning
      - Finish report [✓] #work #urgent

Days are emitted in chronological order with a year header at every
year change and a month header at every (month, year) change. Days
whose key cannot be decoded, or that have no event with text, are left
out. The function never raises and never mutates its input.
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
import logging
from datetime import date
from typing import Any, List, Mapping, Optional, Tuple

# ---- Local imports ----
from timeless.dataclasses.diary_event import DiaryEvent, normalize_events
from timeless.utils.dates import (
    MONTH_NAMES,
    format_date_line,
    parse_date_key,
    resolve_timestamp,
)
from timeless.utils.md import (
    TIMESTAMP_KEY,
    finalize_document,
    format_bullet,
    format_metadata_comment,
)

logger = logging.getLogger(__name__)


def collect_days(calendar_map: Mapping[str, Any]) -> List[Tuple[date, List[DiaryEvent]]]:
    """
    Resolve, normalize and sort the days of a calendar.

    Returns (date, events) pairs in ascending date order. Keys that map
    to the same resolved date keep their input order.
    """
    days: List[Tuple[date, List[DiaryEvent]]] = []
    for key, raw_events in calendar_map.items():
        day = parse_date_key(key)
        if day is None:
            logger.debug(f"Dropping undecodable date key: {key!r}")
            continue

        events = normalize_events(raw_events)
        if not events:
            continue
        days.append((day, events))

    days.sort(key=lambda pair: pair[0])
    return days


def format_calendar(
    calendar_map: Optional[Mapping[str, Any]] = None,
    timestamp: Any = None,
) -> str:
    """
    Serialize a calendar to the Markdown diary format.

    Args:
        calendar_map: DateKey -> list of raw events (DiaryEvent, dict or str)
        timestamp: Save time in ms; int, float or numeric string. Missing
            or unusable values are replaced with the current time.

    Returns:
        The document text, ending with exactly one newline.

    Examples:
        >>> format_calendar({}, 123)
        '<!-- lastSavedTimestamp: 123 -->\\n'
    """
    resolved_timestamp = resolve_timestamp(timestamp)
    lines: List[str] = [format_metadata_comment(TIMESTAMP_KEY, resolved_timestamp), ""]

    current_year: Optional[int] = None
    current_month: Optional[int] = None

    if not isinstance(calendar_map, Mapping):
        calendar_map = {}

    for day, events in collect_days(calendar_map):
        if day.year != current_year:
            current_year = day.year
            current_month = None
            lines.extend([f"# {day.year}", ""])

        if day.month != current_month:
            current_month = day.month
            lines.extend([f"## {MONTH_NAMES[day.month - 1]} {day.year}", ""])

        lines.append(format_date_line(day))
        lines.extend(
            format_bullet(event.text.strip(), event.completed, event.tags)
            for event in events
        )
        lines.append("")

    return finalize_document(lines)
