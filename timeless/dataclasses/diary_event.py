#!/usr/bin/env python3
"""
diary_event.py
-------------------
Dataclass representing a single diary entry attached to a calendar day.

Events arrive from several places in two shapes:
- objects: {"text": ..., "completed": ..., "tags": [...]}
- legacy plain strings written by older versions of the calendar

DiaryEvent.from_raw() is the only place that understands both shapes.
Everything past it works with DiaryEvent instances, and every layer
(formatter, parser, payload adapters) decides emptiness with the same
rule: an event whose trimmed text is empty does not exist.

A CalendarMap is a plain dict of DateKey -> List[DiaryEvent].
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

RawEvent = Union[str, Mapping[str, Any], "DiaryEvent"]
CalendarMap = Dict[str, List["DiaryEvent"]]


@dataclass
class DiaryEvent:
    """
    One diary entry.

    Attributes:
        text (str): Entry content.
        completed (bool): Done/not-done marker.
        tags (List[str]): Hashtag labels without the leading '#', in order.
    """

    text: str
    completed: bool = False
    tags: List[str] = field(default_factory=list)

    # ---- Construction ----
    @classmethod
    def from_raw(cls, raw: Any) -> DiaryEvent:
        """
        Shape a raw event into a DiaryEvent.

        Strings become uncompleted, untagged events with trimmed text.
        Mappings and DiaryEvents keep their text verbatim (non-string text
        becomes empty), coerce `completed` to a strict bool and keep
        non-empty string tags plus non-zero numbers written as text
        (5.0 becomes "5"). Anything else yields an empty event.
        """
        if isinstance(raw, str):
            return cls(text=raw.strip())

        if isinstance(raw, DiaryEvent):
            text, completed, tags = raw.text, raw.completed, raw.tags
        elif isinstance(raw, Mapping):
            text = raw.get("text")
            completed = raw.get("completed")
            tags = raw.get("tags")
        else:
            return cls(text="")

        return cls(
            text=text if isinstance(text, str) else "",
            completed=completed is True,
            tags=_clean_tags(tags),
        )

    # ---- Queries ----
    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    # ---- Serialization ----
    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "completed": self.completed,
            "tags": list(self.tags),
        }

    # ---- Copies ----
    def toggle_completed(self) -> DiaryEvent:
        """Return a copy with the completion flag flipped."""
        return DiaryEvent(self.text, not self.completed, list(self.tags))

    def with_tags(self, tags: Any) -> DiaryEvent:
        """Return a copy with its tags replaced; non-lists clear them."""
        return DiaryEvent(self.text, self.completed, _clean_tags(tags))

    def with_text(self, text: str) -> DiaryEvent:
        """Return a copy with new (trimmed) text."""
        return DiaryEvent(text.strip(), self.completed, list(self.tags))


def _tag_text(tag: Any) -> str:
    if isinstance(tag, str):
        return tag
    # bool is an int subclass; True is not a tag
    if isinstance(tag, bool) or not isinstance(tag, (int, float)):
        return ""
    if not math.isfinite(tag) or tag == 0:
        return ""
    if isinstance(tag, float) and tag.is_integer():
        return str(int(tag))
    return str(tag)


def _clean_tags(tags: Any) -> List[str]:
    if not isinstance(tags, (list, tuple)):
        return []
    return [text for text in map(_tag_text, tags) if text]


def normalize_events(raw_events: Any) -> List[DiaryEvent]:
    """
    Normalize a day's raw event list.

    Shapes every entry with DiaryEvent.from_raw and drops events whose
    trimmed text is empty. Idempotent; never mutates its input.

    Examples:
        >>> normalize_events(["  Buy milk ", {"text": "Call", "completed": True}, ""])
        [DiaryEvent(text='Buy milk', completed=False, tags=[]), DiaryEvent(text='Call', completed=True, tags=[])]
        >>> normalize_events(None)
        []
    """
    if not isinstance(raw_events, (list, tuple)):
        return []
    events = (DiaryEvent.from_raw(raw) for raw in raw_events)
    return [event for event in events if not event.is_empty]


def is_empty_day(raw_events: Any) -> bool:
    """True if a day has no event with non-empty text and must be pruned."""
    return not normalize_events(raw_events)


def calendar_to_dict(calendar: CalendarMap) -> Dict[str, List[Dict[str, Any]]]:
    """Convert a CalendarMap to plain JSON-ready dicts."""
    return {key: [event.to_dict() for event in events] for key, events in calendar.items()}
