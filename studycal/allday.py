"""
All-day vs. timed classification.

A task/deadline is all-day iff its due time is the 23:59 "no time chosen"
default (or its time could not be read). Course meetings always carry
explicit times and are always timed.
"""

from __future__ import annotations

from typing import Iterable

from studycal.model import ALL_DAY_SENTINEL, CalendarEvent, DaySplit, EventKind


def is_all_day(event: CalendarEvent) -> bool:
    if event.kind == EventKind.COURSE:
        return False
    return event.due_time is None or event.due_time == ALL_DAY_SENTINEL


def separate_all_day(events: Iterable[CalendarEvent]) -> DaySplit:
    split = DaySplit()
    for event in events:
        if is_all_day(event):
            split.all_day.append(event)
        else:
            split.timed.append(event)
    return split
