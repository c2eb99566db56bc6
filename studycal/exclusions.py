"""
Excluded dates (holidays and single cancelled sessions).

A date is excluded for a course if there is a global record for that day
(course_id None) or a record scoped to exactly that course. Only the
calendar-day part of stored and queried dates is compared.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple, Union

from studycal.model import DateKey, DateLike, ExclusionRecord, iter_days

logger = logging.getLogger(__name__)


class ExclusionRegistry:
    """
    Read-only lookup over a set of ExclusionRecords.

    Built fresh from the caller's records; never mutated after construction.
    """

    def __init__(self, records: Iterable[ExclusionRecord] = ()) -> None:
        self._global: Dict[DateKey, ExclusionRecord] = {}
        self._scoped: Dict[Tuple[DateKey, str], ExclusionRecord] = {}

        for rec in records:
            day = DateKey.of(rec.date)
            if day is None:
                logger.debug("Skipping exclusion with invalid date %r", rec.date)
                continue
            # first record wins for duplicate days
            if rec.course_id is None:
                self._global.setdefault(day, rec)
            else:
                self._scoped.setdefault((day, rec.course_id), rec)

    @classmethod
    def coerce(
        cls, exclusions: Union["ExclusionRegistry", Iterable[ExclusionRecord], None]
    ) -> "ExclusionRegistry":
        if isinstance(exclusions, ExclusionRegistry):
            return exclusions
        return cls(exclusions or ())

    def __len__(self) -> int:
        return len(self._global) + len(self._scoped)

    def describe(self, date: DateLike, course_id: Optional[str] = None) -> Optional[ExclusionRecord]:
        """
        Return the record that excludes `date` for `course_id`, or None.
        A holiday takes precedence over a course-scoped cancellation.
        """
        day = DateKey.of(date)
        if day is None:
            return None
        rec = self._global.get(day)
        if rec is not None:
            return rec
        if course_id is None:
            return None
        return self._scoped.get((day, course_id))

    def is_excluded(self, date: DateLike, course_id: Optional[str] = None) -> bool:
        return self.describe(date, course_id) is not None


def expand_exclusion_range(
    start: DateLike,
    end: DateLike,
    course_id: Optional[str] = None,
    description: str = "",
) -> list[ExclusionRecord]:
    """
    One ExclusionRecord per day in [start, end], e.g. for a spring break.
    Empty for an inverted or unreadable range.
    """
    first = DateKey.of(start)
    last = DateKey.of(end)
    if first is None or last is None:
        return []
    return [ExclusionRecord(date=day, course_id=course_id, description=description) for day in iter_days(first, last)]
