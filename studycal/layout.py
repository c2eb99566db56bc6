"""
Overlap layout for one day's timed events.

Overlap rule (half-open intervals [start, end)):
    start < other_end AND end > other_start
so back-to-back events (end == start) do not overlap.

Events without an end time occupy DEFAULT_DURATION_MINUTES from their start.
Events without a readable start time cannot be placed and are left out.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from studycal.model import DEFAULT_DURATION_MINUTES, CalendarEvent, ColumnAssignment
from studycal.timeutil import parse_hhmm

logger = logging.getLogger(__name__)


def event_interval(event: CalendarEvent) -> Optional[Tuple[int, int]]:
    """(start, end) in minutes since midnight, or None if the event has no start."""
    start = parse_hhmm(event.start)
    if start is None:
        return None
    end = parse_hhmm(event.end)
    if end is None or end <= start:
        end = start + DEFAULT_DURATION_MINUTES
    return start, end


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def _placeable(events: Sequence[CalendarEvent]) -> List[Tuple[int, int, int]]:
    parsed: List[Tuple[int, int, int]] = []
    for idx, ev in enumerate(events):
        interval = event_interval(ev)
        if interval is None:
            logger.debug("Event %s has no start time, not laid out", ev.event_id)
            continue
        parsed.append((interval[0], interval[1], idx))
    return parsed


def layout_overlaps(timed_events: Sequence[CalendarEvent]) -> List[ColumnAssignment]:
    """
    Assign every timed event a display column so that overlapping events
    never share a column, using as few columns as possible.

    Greedy interval partitioning: events sorted by (start, end) go into the
    first column whose last event has ended; otherwise a new column opens.
    Assignments are returned in input order. Events without a readable
    start time (e.g. a task due at midnight, shown the day before) get no
    assignment; callers render them outside the hour grid.
    """
    placed = sorted(_placeable(timed_events))

    # column index -> end of the latest event placed in it
    column_ends: List[int] = []
    column_of: Dict[int, int] = {}

    for start, end, idx in placed:
        column = None
        for i, col_end in enumerate(column_ends):
            if col_end <= start:
                column = i
                break
        if column is None:
            column = len(column_ends)
            column_ends.append(end)
        column_ends[column] = max(column_ends[column], end)
        column_of[idx] = column

    total = len(column_ends)
    return [
        ColumnAssignment(event=ev, column=column_of[idx], total_columns=total)
        for idx, ev in enumerate(timed_events)
        if idx in column_of
    ]


def find_conflicts(timed_events: Sequence[CalendarEvent]) -> List[Tuple[CalendarEvent, CalendarEvent]]:
    """
    Find overlapping event pairs (A, B), each pair appears once (i < j).
    Callers pass the events of one day.
    """
    parsed = _placeable(timed_events)
    conflicts: List[Tuple[CalendarEvent, CalendarEvent]] = []

    # O(n^2) is fine for a single day
    for i in range(len(parsed)):
        s1, e1, idx1 = parsed[i]
        for j in range(i + 1, len(parsed)):
            s2, e2, idx2 = parsed[j]
            if _overlaps(s1, e1, s2, e2):
                conflicts.append((timed_events[idx1], timed_events[idx2]))
    return conflicts
