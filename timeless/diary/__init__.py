"""
Markdown diary codec.

    from timeless.diary import format_calendar, parse_diary

    text = format_calendar({"2_14_2024": [{"text": "Dinner"}]}, 1700000000000)
    parsed = parse_diary(text)
    parsed.calendar_map["2_14_2024"][0].text  # 'Dinner'

Both functions are pure and never raise on malformed content.
"""
from .formatter import collect_days, format_calendar
from .parser import (
    DiaryParseState,
    ParsedDiary,
    consume_line,
    parse_bullet,
    parse_diary,
)
from .stats import DiaryStats, summarize_calendar

__all__ = [
    "collect_days",
    "format_calendar",
    "DiaryParseState",
    "ParsedDiary",
    "consume_line",
    "parse_bullet",
    "parse_diary",
    "DiaryStats",
    "summarize_calendar",
]
