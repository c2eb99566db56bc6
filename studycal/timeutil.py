"""
Time-of-day and due-timestamp parsing.

Everything here is tolerant: malformed input yields None instead of raising,
so one bad record never blanks a whole calendar view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from studycal.model import DateKey

logger = logging.getLogger(__name__)


def parse_hhmm(value: object) -> Optional[int]:
    """
    Convert 'HH:MM' (24h) to minutes since midnight; a trailing ':SS' is ignored.
    Returns None for invalid formats.
    """
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) == 3 and parts[2].isdigit() and int(parts[2]) <= 59:
        parts = parts[:2]
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        return None
    return h * 60 + m


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_hhmm(value: object) -> Optional[str]:
    """'9:05' -> '09:05'; None if the value is not a valid time."""
    minutes = parse_hhmm(value)
    if minutes is None:
        return None
    return format_minutes(minutes)


@dataclass(frozen=True)
class DueMoment:
    """
    A parsed due timestamp in local wall-clock terms.

    time is None when only the calendar day could be read.
    """

    day: DateKey
    time: Optional[str]
    moment: Optional[datetime]

    @property
    def is_midnight(self) -> bool:
        return self.moment is not None and self.moment.time() == time(0, 0)


def parse_due(value: object) -> Optional[DueMoment]:
    """
    Parse a due timestamp ('2025-03-02T14:30', '...Z', datetime, date).

    Time zone offsets are dropped, the wall-clock time is kept as written.
    If only the date part is readable, the time is treated as unset.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        naive = value.replace(tzinfo=None)
        return DueMoment(DateKey.of(naive), naive.strftime("%H:%M"), naive)
    if isinstance(value, date):
        return DueMoment(DateKey.of(value), None, None)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if "T" not in text and " " not in text:
        day = DateKey.of(text)
        return DueMoment(day, None, None) if day else None

    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        day = DateKey.of(text)
        if day is None:
            logger.debug("Unparseable due timestamp %r, item skipped", value)
            return None
        logger.debug("Unparseable due time in %r, treating time as unset", value)
        return DueMoment(day, None, None)

    naive = parsed.replace(tzinfo=None)
    return DueMoment(DateKey.of(naive), naive.strftime("%H:%M"), naive)
