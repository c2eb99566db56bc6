"""
iCalendar (.ics) export.

We convert the projected events of a date range into a calendar file that
can be imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Mapping

from studycal.allday import is_all_day
from studycal.layout import event_interval
from studycal.model import CalendarEvent, DateKey, EventKind


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_local(day: DateKey, minutes: int) -> str:
    """
    Date + minutes since midnight as ICS local datetime 'YYYYMMDDTHHMM00'.
    Minutes past 24:00 roll into the next day.
    """
    dt = datetime.combine(day.to_date(), datetime.min.time()) + timedelta(minutes=minutes)
    return dt.strftime("%Y%m%dT%H%M00")


def _summary(ev: CalendarEvent) -> str:
    title = ev.title.strip()
    code = (ev.course_code or "").strip()
    if ev.kind == EventKind.DEADLINE:
        title = f"Due: {title}" if title else "Due"
    summary = f"{code} {title}".strip()
    return summary or "Calendar Event"


def export_events_to_ics(events_by_date: Mapping[DateKey, Iterable[CalendarEvent]], out_path: str | Path) -> int:
    """
    Export events to an .ics file. Returns number of exported events.

    Timed events get DTSTART/DTEND, all-day and time-less events a
    one-day VALUE=DATE entry.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//studycal//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    for day in sorted(events_by_date):
        for ev in events_by_date[day]:
            lines.append("BEGIN:VEVENT")
            lines.append(f"UID:{_ics_escape(ev.event_id)}")
            lines.append(f"DTSTAMP:{dtstamp}")

            interval = None if is_all_day(ev) else event_interval(ev)
            if interval is None:
                lines.append(f"DTSTART;VALUE=DATE:{day.to_date():%Y%m%d}")
                lines.append(f"DTEND;VALUE=DATE:{day.shift(1).to_date():%Y%m%d}")
            else:
                lines.append(f"DTSTART:{_dt_local(day, interval[0])}")
                lines.append(f"DTEND:{_dt_local(day, interval[1])}")

            lines.append(f"SUMMARY:{_ics_escape(_summary(ev))}")
            location = getattr(ev, "location", "")
            if location:
                lines.append(f"LOCATION:{_ics_escape(location)}")
            lines.append(f"CATEGORIES:{ev.kind.value.upper()}")
            lines.append("END:VEVENT")
            count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_bytes(("\r\n".join(lines) + "\r\n").encode("utf-8"))
    return count
