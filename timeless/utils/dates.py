#!/usr/bin/env python3
"""
dates.py
-------------------
Date key and timestamp helpers for the Timeless diary.

A calendar day is identified by a DateKey of the form
"{monthIndex}_{day}_{year}" with a ZERO-based month, so "2_14_2024" is
14 March 2024. The browser application builds these keys from
JavaScript Date objects; decoding a key here reproduces what
`new Date(year, monthIndex, day)` yields, including its rollover of
out-of-range days and months ("1_30_2024" -> 1 March 2024).

Timestamps are integer milliseconds since the Unix epoch.
"""
from __future__ import annotations

# --- Standard library imports ---
import math
import re
import time
from datetime import date, timedelta
from typing import Any, Optional

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
"""Fixed English month names; never locale-dependent."""

DATE_KEY_PATTERN = re.compile(r"^\d+_\d+_\d+$", re.ASCII)

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)", re.ASCII)
_KEY_PART = re.compile(r"\s*[+-]?[0-9]+\s*", re.ASCII)


# ----- Date keys -----
def make_date_key(day: date) -> str:
    """
    Build the DateKey for a date.

    Examples:
        >>> make_date_key(date(2024, 3, 14))
        '2_14_2024'
    """
    return f"{day.month - 1}_{day.day}_{day.year}"


def is_date_key(key: Any) -> bool:
    """True if key has the DateKey shape (three groups of digits)."""
    return isinstance(key, str) and DATE_KEY_PATTERN.match(key) is not None


def parse_date_key(key: str) -> Optional[date]:
    """
    Decode a DateKey the way the JavaScript Date constructor would.

    Month and day overflow roll forward (or back) into neighbouring
    months and years. Returns None when the key does not split into
    three integer tokens or the resulting date is out of range.

    Examples:
        >>> parse_date_key("2_14_2024")
        datetime.date(2024, 3, 14)
        >>> parse_date_key("1_30_2024")
        datetime.date(2024, 3, 1)
        >>> parse_date_key("2024-03-14") is None
        True
    """
    if not isinstance(key, str):
        return None

    parts = key.split("_")
    if len(parts) != 3:
        return None

    # ASCII digits only
    if not all(_KEY_PART.fullmatch(part) for part in parts):
        return None
    month_index, day, year = (int(part) for part in parts)

    year_offset, month_index = divmod(month_index, 12)
    try:
        first = date(year + year_offset, month_index + 1, 1)
        return first + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def rolls_over(key: str) -> bool:
    """
    True if a DateKey decodes to a different calendar day than it names.

    "1_30_2024" names 30 February, which resolves to 1 March.
    """
    resolved = parse_date_key(key)
    if resolved is None:
        return False
    return make_date_key(resolved) != "_".join(str(int(p)) for p in key.split("_"))


def format_date_line(day: date) -> str:
    """
    Diary date line: 1-based month, no zero padding.

    Examples:
        >>> format_date_line(date(2024, 3, 4))
        '3/4/2024'
    """
    return f"{day.month}/{day.day}/{day.year}"


# ----- Timestamps -----
def now_ms() -> int:
    """Current time in integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def parse_int_prefix(value: str) -> Optional[int]:
    """
    Read a leading integer like JavaScript parseInt(value, 10).

    Examples:
        >>> parse_int_prefix("  42abc")
        42
        >>> parse_int_prefix("abc") is None
        True
    """
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else None


def resolve_timestamp(timestamp: Any = None) -> int:
    """
    Coerce a caller-supplied save timestamp to integer milliseconds.

    Accepts ints, finite floats (truncated) and numeric strings. Anything
    else (None, booleans, NaN, infinities, non-numeric text) resolves to
    the current time.
    """
    if isinstance(timestamp, bool):
        return now_ms()
    if isinstance(timestamp, int):
        return timestamp
    if isinstance(timestamp, float):
        return int(timestamp) if math.isfinite(timestamp) else now_ms()
    if isinstance(timestamp, str):
        parsed = parse_int_prefix(timestamp)
        return parsed if parsed is not None else now_ms()
    return now_ms()
