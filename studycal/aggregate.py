"""
Aggregation of projected events for a date or a date range.

Ordering within a date:
    course meetings < deadlines < tasks,
    then start time ascending (events without a start time first).
Python's sort is stable, so equal keys keep catalog order.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from studycal.exclusions import ExclusionRegistry
from studycal.model import CalendarEvent, Course, DateKey, DateLike, EventKind, PunctualItem, iter_days
from studycal.projection import project_punctual, project_recurring
from studycal.recurrence import Exclusions
from studycal.timeutil import parse_hhmm

KIND_PRIORITY: Dict[EventKind, int] = {
    EventKind.COURSE: 0,
    EventKind.DEADLINE: 1,
    EventKind.TASK: 2,
}


def event_sort_key(event: CalendarEvent) -> Tuple[int, int]:
    minutes = parse_hhmm(event.start)
    return (KIND_PRIORITY[event.kind], -1 if minutes is None else minutes)


def events_for_date(
    date: DateLike,
    courses: Iterable[Course],
    items: Iterable[PunctualItem],
    exclusions: Exclusions = None,
) -> List[CalendarEvent]:
    courses = list(courses)
    events: List[CalendarEvent] = []
    events.extend(project_recurring(courses, date, exclusions))
    events.extend(project_punctual(items, date, courses))
    return sorted(events, key=event_sort_key)


def events_for_range(
    start: DateLike,
    end: DateLike,
    courses: Iterable[Course],
    items: Iterable[PunctualItem],
    exclusions: Exclusions = None,
) -> Dict[DateKey, List[CalendarEvent]]:
    """
    Events per day for [start, end] inclusive.

    Days without events are left out. An inverted or unreadable range
    gives an empty mapping.
    """
    first = DateKey.of(start)
    last = DateKey.of(end)
    if first is None or last is None:
        return {}

    courses = list(courses)
    items = list(items)
    registry = ExclusionRegistry.coerce(exclusions)

    out: Dict[DateKey, List[CalendarEvent]] = {}
    for day in iter_days(first, last):
        events = events_for_date(day, courses, items, registry)
        if events:
            out[day] = events
    return out
