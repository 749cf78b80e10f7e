"""
Timeless Diary
==============

Storage layer of the Timeless infinite-scrolling calendar.

The calendar keeps its notes as a map of day keys ("{monthIndex}_{day}_{year}",
zero-based month) to ordered event lists. This package converts that map to
and from a Markdown diary document: a plain-text file with year/month
headers, one M/D/YYYY line per day and one bullet per event, which is what
the sync endpoints store remotely.

Main Components:
    - diary: the codec (format_calendar, parse_diary) and diary statistics
    - dataclasses: DiaryEvent and event normalization
    - pipeline: payload adapters, JSON/Markdown files, backups, CLI
    - core: logging, exceptions, paths, configuration
    - utils: date keys, timestamps, Markdown tokens

Example Usage:
    >>> from timeless import format_calendar, parse_diary
    >>> text = format_calendar({"2_14_2024": ["Dinner with Ana"]}, 1700000000000)
    >>> parse_diary(text).calendar_map["2_14_2024"][0].text
    'Dinner with Ana'

License: MIT
"""

__version__ = "1.0.0"
__author__ = "Timeless Project"

from timeless.dataclasses import DiaryEvent, normalize_events
from timeless.diary import ParsedDiary, format_calendar, parse_diary

__all__ = [
    "DiaryEvent",
    "normalize_events",
    "ParsedDiary",
    "format_calendar",
    "parse_diary",
]
