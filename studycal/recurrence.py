"""
Recurrence resolution: does a course meet on a given date?

Check order:
    1. term bounds (start_date / end_date, inclusive)
    2. excluded dates (holiday or cancelled session)
    3. weekday of the date against the meeting patterns
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple, Union

from studycal.exclusions import ExclusionRegistry
from studycal.model import Course, DateKey, DateLike, ExclusionRecord, MeetingPattern

logger = logging.getLogger(__name__)

Exclusions = Union[ExclusionRegistry, Iterable[ExclusionRecord], None]


def _bound(course: Course, value: Optional[DateLike]) -> Optional[DateKey]:
    if value is None or value == "":
        return None
    day = DateKey.of(value)
    if day is None:
        # an unreadable bound does not restrict the term
        logger.debug("Ignoring invalid term bound %r on course %s", value, course.course_id)
    return day


def within_term(course: Course, day: DateKey) -> bool:
    start = _bound(course, course.start_date)
    if start is not None and start > day:
        return False
    end = _bound(course, course.end_date)
    if end is not None and end < day:
        return False
    return True


def occurs_on(course: Course, date: DateLike, exclusions: Exclusions = None) -> bool:
    """
    True iff the course has a meeting on `date`.
    A course without meeting patterns never occurs.
    """
    day = DateKey.of(date)
    if day is None or not course.meeting_times:
        return False
    if not within_term(course, day):
        return False
    if ExclusionRegistry.coerce(exclusions).is_excluded(day, course.course_id):
        return False
    weekday = day.weekday_name
    return any(p.meets_on(weekday) for p in course.meeting_times)


def meetings_on(course: Course, date: DateLike, exclusions: Exclusions = None) -> List[Tuple[int, MeetingPattern]]:
    """
    The (index, pattern) pairs of `course` that take place on `date`.
    """
    if not occurs_on(course, date, exclusions):
        return []
    weekday = DateKey.of(date).weekday_name
    return [(i, p) for i, p in enumerate(course.meeting_times) if p.meets_on(weekday)]
