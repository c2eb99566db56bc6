"""
Loading of the planner snapshot the calendar engine reads.

The snapshot is one JSON file:

    {
      "courses":        [{"id", "code", "name", "start_date", "end_date",
                          "color_tag", "meeting_times": [{"days", "start", "end", "location"}]}],
      "tasks":          [{"id", "title", "due_at", "course_id", "status"}],
      "deadlines":      [{"id", "title", "due_at", "course_id", "status"}],
      "excluded_dates": [{"date", "course_id", "description"}],
      "settings":       {"week_starts_on": "Sun" | "Mon", ...}
    }

The planner's own camelCase keys (dueAt, courseId, meetingTimes, ...) are
accepted as well.

Design rationale:
- the catalogs are owned and edited elsewhere; this module only reads them
- it never crashes: a missing or broken file is an empty snapshot and
  malformed records are skipped
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from studycal.model import Course, EventKind, ExclusionRecord, MeetingPattern, PunctualItem
from studycal.settings import CalendarSettings

logger = logging.getLogger(__name__)


@dataclass
class PlannerSnapshot:
    courses: List[Course] = field(default_factory=list)
    items: List[PunctualItem] = field(default_factory=list)
    exclusions: List[ExclusionRecord] = field(default_factory=list)
    settings: CalendarSettings = field(default_factory=CalendarSettings)


def _default_data_path() -> Path:
    """
    Return the default path of planner.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can pass their own path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "planner.json"


def _get(record: dict, *keys: str) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _records(data: dict, *keys: str) -> List[dict]:
    raw = _get(data, *keys)
    if not isinstance(raw, list):
        return []
    return [r for r in raw if isinstance(r, dict)]


def _parse_meeting(raw: dict) -> Optional[MeetingPattern]:
    days = _get(raw, "days", "day")
    if isinstance(days, str):
        days = [days]
    if not isinstance(days, list):
        return None
    return MeetingPattern(
        days=frozenset(str(d) for d in days),
        start=str(raw.get("start") or ""),
        end=str(raw.get("end") or ""),
        location=str(raw.get("location") or ""),
    )


def _parse_course(raw: dict) -> Optional[Course]:
    cid = _str_or_none(_get(raw, "id", "course_id"))
    if cid is None:
        return None
    meetings = [_parse_meeting(m) for m in _records(raw, "meeting_times", "meetingTimes")]
    return Course(
        course_id=cid,
        name=str(raw.get("name") or ""),
        code=str(raw.get("code") or ""),
        meeting_times=tuple(m for m in meetings if m is not None),
        start_date=_str_or_none(_get(raw, "start_date", "startDate")),
        end_date=_str_or_none(_get(raw, "end_date", "endDate")),
        color_tag=_str_or_none(_get(raw, "color_tag", "colorTag")),
    )


def _parse_item(raw: dict, kind: EventKind) -> Optional[PunctualItem]:
    item_id = _str_or_none(raw.get("id"))
    if item_id is None:
        return None
    return PunctualItem(
        item_id=item_id,
        title=str(raw.get("title") or ""),
        kind=kind,
        due_at=_str_or_none(_get(raw, "due_at", "dueAt")),
        course_id=_str_or_none(_get(raw, "course_id", "courseId")),
        status=str(raw.get("status") or "open"),
    )


def _parse_exclusion(raw: dict) -> Optional[ExclusionRecord]:
    day = _str_or_none(raw.get("date"))
    if day is None:
        return None
    return ExclusionRecord(
        date=day,
        course_id=_str_or_none(_get(raw, "course_id", "courseId")),
        description=str(raw.get("description") or ""),
    )


def parse_snapshot(data: Any) -> PlannerSnapshot:
    """Build a PlannerSnapshot from already decoded JSON."""
    if not isinstance(data, dict):
        return PlannerSnapshot()

    courses = [_parse_course(r) for r in _records(data, "courses")]
    items = [_parse_item(r, EventKind.DEADLINE) for r in _records(data, "deadlines")]
    items += [_parse_item(r, EventKind.TASK) for r in _records(data, "tasks")]
    exclusions = [_parse_exclusion(r) for r in _records(data, "excluded_dates", "excludedDates")]

    snapshot = PlannerSnapshot(
        courses=[c for c in courses if c is not None],
        items=[i for i in items if i is not None],
        exclusions=[e for e in exclusions if e is not None],
        settings=CalendarSettings.from_dict(data.get("settings")),
    )
    skipped = (len(courses) + len(items) + len(exclusions)) - (
        len(snapshot.courses) + len(snapshot.items) + len(snapshot.exclusions)
    )
    if skipped:
        logger.debug("Skipped %d malformed records", skipped)
    return snapshot


def load_snapshot(path: str | Path | None = None) -> PlannerSnapshot:
    """
    Load the planner snapshot from planner.json.

    Returns an empty snapshot if the file does not exist or is invalid.
    """
    data_path = Path(path) if path is not None else _default_data_path()

    if not data_path.exists():
        return PlannerSnapshot()

    try:
        data = json.loads(data_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s: %s", data_path, e)
        return PlannerSnapshot()
    return parse_snapshot(data)
