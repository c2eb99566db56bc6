"""
Central data model definitions used across the calendar engine.

This module defines the canonical structure of the engine's inputs
(courses, tasks/deadlines, excluded dates) and outputs (calendar events,
column assignments) so that:
- all modules share the same field names
- calendar-day comparisons always go through one value type (DateKey)
- every event kind only carries the fields that mean something for it
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import ClassVar, FrozenSet, Iterable, List, Optional, Tuple, Union


# Default due time the planner stores when the user picks no time.
ALL_DAY_SENTINEL = "23:59"

# Assumed length of an event without an end time (layout only).
DEFAULT_DURATION_MINUTES = 60

# Index = datetime.date.weekday()
WEEKDAYS: Tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def normalize_weekday(value: object) -> Optional[str]:
    """
    Normalize 'monday', 'MON', 'Mo' ... to the short English name ('Mon').
    Returns None for anything that is not a weekday.
    """
    text = str(value or "").strip().lower()
    if len(text) < 2:
        return None
    for name in WEEKDAYS:
        if name.lower().startswith(text[:3]):
            return name
    return None


@dataclass(frozen=True, order=True)
class DateKey:
    """
    A calendar day without time or time zone.

    Equality and ordering compare (year, month, day) only, so a due timestamp
    and a query date can be compared without string slicing.
    """

    year: int
    month: int
    day: int

    @classmethod
    def of(cls, value: object) -> Optional["DateKey"]:
        """
        Build a DateKey from a DateKey, date, datetime or ISO string.
        Any time-of-day part is ignored. Returns None if the value is not a date.
        """
        if isinstance(value, DateKey):
            return value
        if isinstance(value, datetime):
            return cls(value.year, value.month, value.day)
        if isinstance(value, date):
            return cls(value.year, value.month, value.day)
        if isinstance(value, str):
            text = value.strip()[:10]
            try:
                d = date.fromisoformat(text)
            except ValueError:
                return None
            return cls(d.year, d.month, d.day)
        return None

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def iso(self) -> str:
        return self.to_date().isoformat()

    @property
    def weekday_name(self) -> str:
        return WEEKDAYS[self.to_date().weekday()]

    def shift(self, days: int) -> "DateKey":
        d = self.to_date() + timedelta(days=days)
        return DateKey(d.year, d.month, d.day)

    def __str__(self) -> str:
        return self.iso()


DateLike = Union[DateKey, date, str]


def iter_days(start: DateKey, end: DateKey) -> Iterable[DateKey]:
    """Yield every calendar day in [start, end]; nothing for an inverted range."""
    current = start
    while current <= end:
        yield current
        current = current.shift(1)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MeetingPattern:
    """
    One weekly meeting slot of a course, e.g. Mon/Wed 10:00-10:50 in HS 8.
    """

    days: FrozenSet[str]
    start: str
    end: str
    location: str = ""

    def __post_init__(self) -> None:
        raw = [self.days] if isinstance(self.days, str) else list(self.days or ())
        names = {normalize_weekday(d) for d in raw}
        names.discard(None)
        object.__setattr__(self, "days", frozenset(names))

    def meets_on(self, weekday: str) -> bool:
        return weekday in self.days


@dataclass(frozen=True)
class Course:
    """
    A recurring entity: meets every week on its meeting patterns,
    optionally only between start_date and end_date (the term).
    """

    course_id: str
    name: str
    code: str = ""
    meeting_times: Tuple[MeetingPattern, ...] = ()
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None
    color_tag: Optional[str] = None


class EventKind(str, Enum):
    COURSE = "course"
    DEADLINE = "deadline"
    TASK = "task"


@dataclass(frozen=True)
class PunctualItem:
    """
    A task or deadline anchored to one due timestamp.

    Items without due_at never appear on the calendar.
    """

    item_id: str
    title: str
    kind: EventKind = EventKind.TASK
    due_at: Optional[Union[str, datetime]] = None
    course_id: Optional[str] = None
    status: str = "open"


@dataclass(frozen=True)
class ExclusionRecord:
    """
    An excluded calendar day. course_id None means every course (holiday),
    otherwise only that course's meetings are cancelled.
    """

    date: DateLike
    course_id: Optional[str] = None
    description: str = ""

    @property
    def is_global(self) -> bool:
        return self.course_id is None


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CourseMeetingEvent:
    """One meeting of a course on one date."""

    kind: ClassVar[EventKind] = EventKind.COURSE

    event_id: str
    date: DateKey
    course_id: str
    title: str
    course_code: Optional[str]
    start: Optional[str]
    end: Optional[str]
    location: str = ""
    color_tag: Optional[str] = None


@dataclass(frozen=True)
class _PunctualEvent:
    event_id: str
    date: DateKey
    item_id: str
    title: str
    due_at: Optional[datetime]
    due_time: Optional[str]
    start: Optional[str]
    course_id: Optional[str] = None
    course_code: Optional[str] = None
    status: str = "open"

    @property
    def end(self) -> None:
        # tasks and deadlines are points in time
        return None


@dataclass(frozen=True)
class TaskEvent(_PunctualEvent):
    kind: ClassVar[EventKind] = EventKind.TASK


@dataclass(frozen=True)
class DeadlineEvent(_PunctualEvent):
    kind: ClassVar[EventKind] = EventKind.DEADLINE


CalendarEvent = Union[CourseMeetingEvent, TaskEvent, DeadlineEvent]
PunctualEvent = Union[TaskEvent, DeadlineEvent]


@dataclass(frozen=True)
class ColumnAssignment:
    event: CalendarEvent
    column: int
    total_columns: int


@dataclass(frozen=True)
class DaySplit:
    all_day: List[CalendarEvent] = field(default_factory=list)
    timed: List[CalendarEvent] = field(default_factory=list)
