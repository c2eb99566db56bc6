"""
Range-boundary helpers for month/week/day views.

These only compute dates and positions; which events fall inside a range
is answered by studycal.aggregate.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from studycal.model import DateKey, DateLike, iter_days
from studycal.settings import WEEK_START_CHOICES
from studycal.timeutil import parse_hhmm

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

GRID_DAYS = 42


def _offset_into_week(day: DateKey, week_starts_on: str) -> int:
    weekday = day.to_date().weekday()  # Mon = 0
    if week_starts_on not in WEEK_START_CHOICES:
        week_starts_on = "Sun"
    return weekday if week_starts_on == "Mon" else (weekday + 1) % 7


def week_range(value: DateLike, week_starts_on: str = "Sun") -> Optional[Tuple[DateKey, DateKey]]:
    """First and last day of the week containing `value`."""
    day = DateKey.of(value)
    if day is None:
        return None
    start = day.shift(-_offset_into_week(day, week_starts_on))
    return start, start.shift(6)


def month_grid(year: int, month: int, week_starts_on: str = "Sun") -> List[DateKey]:
    """
    The 6x7 days shown by a month view, starting on the week-start day
    on or before the 1st.
    """
    try:
        first = DateKey.of(date(year, month, 1))
    except ValueError:
        return []
    start = first.shift(-_offset_into_week(first, week_starts_on))
    return list(iter_days(start, start.shift(GRID_DAYS - 1)))


def is_in_month(value: DateLike, year: int, month: int) -> bool:
    day = DateKey.of(value)
    return day is not None and day.year == year and day.month == month


def format_date_range(start: DateLike, end: DateLike) -> str:
    """
    'January 6 - 12, 2025' within one month, otherwise 'Jan 30 - Feb 5'.
    """
    a = DateKey.of(start)
    b = DateKey.of(end)
    if a is None or b is None:
        return ""
    if a.year == b.year and a.month == b.month:
        return f"{MONTH_NAMES[a.month - 1]} {a.day} - {b.day}, {a.year}"
    return f"{MONTH_NAMES[a.month - 1][:3]} {a.day} - {MONTH_NAMES[b.month - 1][:3]} {b.day}"


def time_slot_position(
    time_hhmm: str,
    start_hour: int = 6,
    end_hour: int = 22,
    hour_height: float = 60,
) -> Tuple[float, float]:
    """
    (top, height) of a time slot inside the visible day window.
    (0, 0) for times outside the window or malformed times.
    """
    minutes = parse_hhmm(time_hhmm)
    if minutes is None or minutes < start_hour * 60 or minutes > end_hour * 60:
        return (0, 0)
    top = (minutes - start_hour * 60) * hour_height / 60
    return (top, hour_height)


def event_height(start: str, end: str, hour_height: float = 60) -> float:
    start_m = parse_hhmm(start)
    end_m = parse_hhmm(end)
    if start_m is None or end_m is None or end_m <= start_m:
        return 0
    return (end_m - start_m) * hour_height / 60
