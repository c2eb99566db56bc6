"""
User-facing calendar preferences.

Read from the "settings" object of the planner snapshot. Unknown or
malformed values fall back to the defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

WEEK_START_CHOICES = ("Sun", "Mon")


@dataclass(frozen=True)
class CalendarSettings:
    week_starts_on: str = "Sun"
    day_start_hour: int = 6
    day_end_hour: int = 22

    @classmethod
    def from_dict(cls, data: Any) -> "CalendarSettings":
        if not isinstance(data, dict):
            return cls()

        week_start = data.get("week_starts_on", data.get("weekStartsOn"))
        if week_start not in WEEK_START_CHOICES:
            week_start = cls.week_starts_on

        start_hour = _hour(data.get("day_start_hour"), cls.day_start_hour)
        end_hour = _hour(data.get("day_end_hour"), cls.day_end_hour)
        if end_hour <= start_hour:
            start_hour, end_hour = cls.day_start_hour, cls.day_end_hour

        return cls(week_starts_on=week_start, day_start_hour=start_hour, day_end_hour=end_hour)


def _hour(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if 0 <= value <= 24 else default
