"""
Event projection: turn courses, tasks and deadlines into CalendarEvents
for one date.

Midnight rule: an item due exactly at 00:00 on day D is shown on D - 1
("end of the previous day"), without a start time.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from studycal.model import (
    Course,
    CourseMeetingEvent,
    DateKey,
    DateLike,
    DeadlineEvent,
    EventKind,
    MeetingPattern,
    PunctualEvent,
    PunctualItem,
    TaskEvent,
)
from studycal.exclusions import ExclusionRegistry
from studycal.recurrence import Exclusions, meetings_on
from studycal.timeutil import normalize_hhmm, parse_due, parse_hhmm

logger = logging.getLogger(__name__)


def _meeting_times(course: Course, pattern: MeetingPattern) -> tuple[Optional[str], Optional[str]]:
    """
    Normalized (start, end) of a pattern. Malformed values become None;
    an end that is not after the start is dropped.
    """
    start = normalize_hhmm(pattern.start)
    end = normalize_hhmm(pattern.end)
    if start is None:
        logger.debug("Course %s: invalid start time %r", course.course_id, pattern.start)
    if pattern.end and end is None:
        logger.debug("Course %s: invalid end time %r", course.course_id, pattern.end)
    if start is not None and end is not None and parse_hhmm(end) <= parse_hhmm(start):
        logger.debug("Course %s: end %s not after start %s, end dropped", course.course_id, end, start)
        end = None
    return start, end


def project_recurring(
    courses: Iterable[Course],
    date: DateLike,
    exclusions: Exclusions = None,
) -> List[CourseMeetingEvent]:
    """
    One event per meeting pattern of every course that meets on `date`.
    """
    day = DateKey.of(date)
    if day is None:
        return []
    registry = ExclusionRegistry.coerce(exclusions)

    events: List[CourseMeetingEvent] = []
    for course in courses:
        for index, pattern in meetings_on(course, day, registry):
            start, end = _meeting_times(course, pattern)
            compact = start.replace(":", "") if start else "----"
            events.append(
                CourseMeetingEvent(
                    event_id=f"{course.course_id}__{day.iso()}T{compact}__{index}",
                    date=day,
                    course_id=course.course_id,
                    title=course.name,
                    course_code=course.code or None,
                    start=start,
                    end=end,
                    location=pattern.location,
                    color_tag=course.color_tag,
                )
            )
    return events


def project_punctual(
    items: Iterable[PunctualItem],
    date: DateLike,
    courses: Iterable[Course] = (),
) -> List[PunctualEvent]:
    """
    Events for every task/deadline due on `date` (or due at midnight the day after).

    `courses` is only used to look up the linked course code; an unknown
    course id leaves course_code unset.
    """
    day = DateKey.of(date)
    if day is None:
        return []
    code_by_id: Dict[str, str] = {c.course_id: c.code for c in courses if c.code}

    events: List[PunctualEvent] = []
    for item in items:
        due = parse_due(item.due_at)
        if due is None:
            continue

        shown_on = due.day.shift(-1) if due.is_midnight else due.day
        if shown_on != day:
            continue

        event_cls = DeadlineEvent if item.kind == EventKind.DEADLINE else TaskEvent
        events.append(
            event_cls(
                event_id=f"{event_cls.kind.value}:{item.item_id}",
                date=day,
                item_id=item.item_id,
                title=item.title,
                due_at=due.moment,
                due_time=due.time,
                start=None if due.is_midnight else due.time,
                course_id=item.course_id,
                course_code=code_by_id.get(item.course_id) if item.course_id else None,
                status=item.status,
            )
        )
    return events
