#!/usr/bin/env python3
"""
stats.py
--------
Summary statistics over a calendar, for `timeless stats`.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from timeless.diary.formatter import collect_days
from timeless.utils.dates import rolls_over


@dataclass
class DiaryStats:
    """
    Attributes:
        days: Days with at least one event
        events: Total events
        completed: Events marked done
        tags: Tag -> number of events carrying it
        first_day: Earliest day with events
        last_day: Latest day with events
        rollover_keys: Keys naming an impossible day (e.g. 30 February)
    """

    days: int = 0
    events: int = 0
    completed: int = 0
    tags: Counter = field(default_factory=Counter)
    first_day: Optional[date] = None
    last_day: Optional[date] = None
    rollover_keys: List[str] = field(default_factory=list)

    def summary(self) -> str:
        span = (
            f"{self.first_day.isoformat()} → {self.last_day.isoformat()}"
            if self.first_day and self.last_day
            else "empty"
        )
        return (
            f"{self.days} days, {self.events} events "
            f"({self.completed} completed), {len(self.tags)} tags, {span}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": self.days,
            "events": self.events,
            "completed": self.completed,
            "tags": dict(self.tags.most_common()),
            "first_day": self.first_day.isoformat() if self.first_day else None,
            "last_day": self.last_day.isoformat() if self.last_day else None,
            "rollover_keys": list(self.rollover_keys),
        }


def summarize_calendar(calendar: Mapping[str, Any]) -> DiaryStats:
    """Count days, events, completion and tags of a calendar."""
    stats = DiaryStats()
    days = collect_days(calendar)

    for day, events in days:
        stats.days += 1
        stats.events += len(events)
        stats.completed += sum(1 for event in events if event.completed)
        for event in events:
            stats.tags.update(event.tags)

    if days:
        stats.first_day = days[0][0]
        stats.last_day = days[-1][0]

    stats.rollover_keys = sorted(key for key in calendar if isinstance(key, str) and rolls_over(key))
    return stats
