"""
studycal: calendar scheduling and layout engine of an academic planner.

Every function is pure: callers pass the full course/task/deadline catalogs
and excluded dates on each call, nothing is cached between calls.
"""

from studycal.aggregate import events_for_date, events_for_range
from studycal.allday import separate_all_day
from studycal.colors import ColorConfig, color_for
from studycal.exclusions import ExclusionRegistry
from studycal.layout import layout_overlaps
from studycal.model import (
    ColumnAssignment,
    Course,
    CourseMeetingEvent,
    DateKey,
    DeadlineEvent,
    EventKind,
    ExclusionRecord,
    MeetingPattern,
    PunctualItem,
    TaskEvent,
)
from studycal.recurrence import occurs_on

__all__ = [
    "ColorConfig",
    "ColumnAssignment",
    "Course",
    "CourseMeetingEvent",
    "DateKey",
    "DeadlineEvent",
    "EventKind",
    "ExclusionRecord",
    "ExclusionRegistry",
    "MeetingPattern",
    "PunctualItem",
    "TaskEvent",
    "color_for",
    "events_for_date",
    "events_for_range",
    "layout_overlaps",
    "occurs_on",
    "separate_all_day",
]
