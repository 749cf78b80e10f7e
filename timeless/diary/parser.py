#!/usr/bin/env python3
"""
parser.py
-------------------
Markdown diary document -> CalendarMap.

The parser is total: any string parses. Lines it does not recognize
are treated as free-form prose and skipped, so hand-edited diaries with
notes between entries still load.

Recognized lines (classified after trimming):
- ``<!-- lastSavedTimestamp: N -->`` and other ``<!-- key: value -->``
  comments, collected into metadata
- ``# ...`` headers, ignored (date lines carry the full year)
- ``M/D/YYYY`` date lines, which open a day
- ``- text [✓] #tag`` bullets (``-`` or ``*``) under an open day

The scan is a fold over lines with an explicit DiaryParseState, so
single lines can be fed and inspected in isolation.
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
import logging
import re
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Dict, List, Optional

# ---- Local imports ----
from timeless.dataclasses.diary_event import CalendarMap, DiaryEvent, normalize_events
from timeless.utils.md import (
    BULLET_LINE,
    COMPLETED_MARKER,
    TIMESTAMP_COMMENT,
    TIMESTAMP_KEY,
    is_comment_line,
    parse_metadata_comment,
    split_trailing_tags,
)

logger = logging.getLogger(__name__)

DATE_LINE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$", re.ASCII)
_LINE_BREAK = re.compile(r"\r?\n")
# Whitespace plus U+FEFF, which editors prepend to UTF-8 files
_EDGE_SPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


@dataclass
class ParsedDiary:
    """
    Result of parsing a diary document.

    Attributes:
        calendar_map: DateKey -> non-empty list of events
        last_saved_timestamp: Value of the timestamp comment (0 if absent)
        metadata: Every ``<!-- key: value -->`` comment, raw string values
    """

    calendar_map: CalendarMap = field(default_factory=dict)
    last_saved_timestamp: int = 0
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass
class DiaryParseState:
    """
    Accumulator threaded through the line scan.

    Attributes:
        current_date_id: DateKey of the open day, or None outside a day
        scratch: Events collected so far, per DateKey
        last_saved_timestamp: Most recent timestamp comment value
        metadata: Collected metadata comments
    """

    current_date_id: Optional[str] = None
    scratch: Dict[str, List[DiaryEvent]] = field(default_factory=dict)
    last_saved_timestamp: int = 0
    metadata: Dict[str, str] = field(default_factory=dict)


# ----- Line handlers -----
def _consume_comment(state: DiaryParseState, line: str) -> DiaryParseState:
    timestamp_match = TIMESTAMP_COMMENT.match(line)
    if timestamp_match:
        state.last_saved_timestamp = int(timestamp_match.group(1))
        state.metadata[TIMESTAMP_KEY] = timestamp_match.group(1)
        return state

    pair = parse_metadata_comment(line)
    if pair:
        key, value = pair
        state.metadata[key] = value
    return state


def _consume_date_line(state: DiaryParseState, match: "re.Match[str]") -> DiaryParseState:
    month, day, year = (int(group) for group in match.groups())
    month_index = month - 1

    if not 0 <= month_index <= 11:
        logger.debug(f"Ignoring date line with invalid month: {match.group(0)}")
        state.current_date_id = None
        return state

    state.current_date_id = f"{month_index}_{day}_{year}"
    state.scratch.setdefault(state.current_date_id, [])
    return state


def parse_bullet(remainder: str) -> Optional[DiaryEvent]:
    """
    Parse the text after a bullet marker into an event.

    Trailing ``#tag`` tokens become tags, then a trailing ``[✓]`` marks
    the event completed. The remaining tokens, joined by single spaces,
    are the text. Returns None when no text is left.

    Examples:
        >>> parse_bullet("Submit taxes [✓] #finance #Q1")
        DiaryEvent(text='Submit taxes', completed=True, tags=['finance', 'Q1'])
        >>> parse_bullet("[✓] #done") is None
        True
    """
    tokens, tags = split_trailing_tags(remainder.split())

    completed = False
    if tokens and tokens[-1] == COMPLETED_MARKER:
        completed = True
        tokens.pop()

    text = " ".join(tokens)
    if not text:
        return None
    return DiaryEvent(text=text, completed=completed, tags=tags)


def consume_line(state: DiaryParseState, raw_line: str) -> DiaryParseState:
    """
    Feed one raw line into the parse state.

    Args:
        state: Accumulator from the previous lines
        raw_line: Line without its line terminator

    Returns:
        The updated state
    """
    line = _EDGE_SPACE.sub("", raw_line)
    if not line:
        return state

    if is_comment_line(line):
        return _consume_comment(state, line)

    if line.startswith("#"):
        return state

    date_match = DATE_LINE.match(line)
    if date_match:
        return _consume_date_line(state, date_match)

    if state.current_date_id is None:
        return state

    bullet_match = BULLET_LINE.match(line)
    if not bullet_match:
        return state

    event = parse_bullet(bullet_match.group(1).strip())
    if event is not None:
        state.scratch.setdefault(state.current_date_id, []).append(event)
    return state


def parse_diary(markdown_text: Any = "") -> ParsedDiary:
    """
    Parse a Markdown diary document.

    Args:
        markdown_text: Document text; None is treated as empty

    Returns:
        ParsedDiary with the calendar map, timestamp and metadata. Days
        opened by a date line but left without events are not included.

    Examples:
        >>> parse_diary("")
        ParsedDiary(calendar_map={}, last_saved_timestamp=0, metadata={})
    """
    text = "" if markdown_text is None else str(markdown_text)
    state = reduce(consume_line, _LINE_BREAK.split(text), DiaryParseState())

    calendar_map: CalendarMap = {}
    for key, events in state.scratch.items():
        normalized = normalize_events(events)
        if normalized:
            calendar_map[key] = normalized

    return ParsedDiary(
        calendar_map=calendar_map,
        last_saved_timestamp=state.last_saved_timestamp,
        metadata=dict(state.metadata),
    )
