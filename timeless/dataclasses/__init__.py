"""
Diary data structures.
"""
from .diary_event import (
    CalendarMap,
    DiaryEvent,
    RawEvent,
    calendar_to_dict,
    is_empty_day,
    normalize_events,
)

__all__ = [
    "CalendarMap",
    "DiaryEvent",
    "RawEvent",
    "calendar_to_dict",
    "is_empty_day",
    "normalize_events",
]
