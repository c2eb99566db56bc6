"""
CLI (Command Line Interface).

Quick terminal views of the calendar engine, e.g.:

    studycal day 2025-01-08
    studycal week 2025-01-08
    studycal range 2025-01-06 2025-01-31
    studycal conflicts 2025-01-08
    studycal export 2025-01-06 2025-05-01 out.ics

All commands read the planner snapshot given by --data
(default: studycal/data/planner.json).
"""

from __future__ import annotations

import argparse
import logging
from typing import Iterable, Mapping, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from studycal.aggregate import events_for_date, events_for_range
from studycal.allday import separate_all_day
from studycal.export_ics import export_events_to_ics
from studycal.layout import find_conflicts, layout_overlaps
from studycal.model import CalendarEvent, DateKey, EventKind
from studycal.ranges import format_date_range, week_range
from studycal.storage import PlannerSnapshot, load_snapshot

KIND_LABELS = {
    EventKind.COURSE: "[cyan]course[/]",
    EventKind.DEADLINE: "[red]deadline[/]",
    EventKind.TASK: "[green]task[/]",
}


def _parse_date_arg(console: Console, value: str) -> Optional[DateKey]:
    day = DateKey.of(value)
    if day is None:
        console.print(f"Invalid date: {escape(value)} (expected YYYY-MM-DD)")
    return day


def _label(ev: CalendarEvent) -> str:
    code = f"[bold cyan]{escape(ev.course_code)}[/] " if ev.course_code else ""
    return f"{code}{escape(ev.title)}"


def _agenda_table(events_by_date: Mapping[DateKey, Iterable[CalendarEvent]], title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Kind")
    table.add_column("Event")
    table.add_column("Location")
    for day, events in events_by_date.items():
        split = separate_all_day(events)
        for ev in split.all_day:
            table.add_row(f"{day} {day.weekday_name}", "all day", KIND_LABELS[ev.kind], _label(ev), "")
        for ev in split.timed:
            time = ev.start or "--:--"
            if ev.end:
                time = f"{time}-{ev.end}"
            table.add_row(
                f"{day} {day.weekday_name}",
                time,
                KIND_LABELS[ev.kind],
                _label(ev),
                escape(getattr(ev, "location", "")),
            )
    return table


def _cmd_day(args: argparse.Namespace, snap: PlannerSnapshot, console: Console) -> int:
    """
    Print one day: all-day items first, then timed events with their layout column.
    """
    day = _parse_date_arg(console, args.date)
    if day is None:
        return 1

    events = events_for_date(day, snap.courses, snap.items, snap.exclusions)
    if not events:
        console.print(f"No events on {day} ({day.weekday_name}).")
        return 0

    split = separate_all_day(events)
    if split.all_day:
        console.print("[bold]All day[/]")
        for ev in split.all_day:
            console.print(f"  {KIND_LABELS[ev.kind]} {_label(ev)}")

    assignments = layout_overlaps(split.timed)
    if assignments:
        total = assignments[0].total_columns
        table = Table(title=f"{day} {day.weekday_name} ({total} column(s))", box=box.SIMPLE)
        table.add_column("Col", justify="right")
        table.add_column("Time")
        table.add_column("Kind")
        table.add_column("Event")
        table.add_column("Location")
        for a in assignments:
            ev = a.event
            time = f"{ev.start}-{ev.end}" if ev.end else f"{ev.start}"
            table.add_row(
                str(a.column + 1),
                time,
                KIND_LABELS[ev.kind],
                _label(ev),
                escape(getattr(ev, "location", "")),
            )
        console.print(table)

    placed = {a.event.event_id for a in assignments}
    for ev in split.timed:
        if ev.event_id not in placed:
            console.print(f"  [dim]no time[/] {KIND_LABELS[ev.kind]} {_label(ev)}")

    excluded = [r for r in snap.exclusions if DateKey.of(r.date) == day]
    for rec in excluded:
        scope = "all courses" if rec.is_global else escape(rec.course_id)
        console.print(f"[yellow]Excluded ({scope}):[/] {escape(rec.description)}")
    return 0


def _cmd_week(args: argparse.Namespace, snap: PlannerSnapshot, console: Console) -> int:
    day = _parse_date_arg(console, args.date)
    if day is None:
        return 1
    week_start = args.week_starts_on or snap.settings.week_starts_on
    start, end = week_range(day, week_start)

    by_date = events_for_range(start, end, snap.courses, snap.items, snap.exclusions)
    if not by_date:
        console.print(f"No events in {format_date_range(start, end)}.")
        return 0
    console.print(_agenda_table(by_date, format_date_range(start, end)))
    return 0


def _cmd_range(args: argparse.Namespace, snap: PlannerSnapshot, console: Console) -> int:
    start = _parse_date_arg(console, args.start)
    end = _parse_date_arg(console, args.end)
    if start is None or end is None:
        return 1

    by_date = events_for_range(start, end, snap.courses, snap.items, snap.exclusions)
    if not by_date:
        console.print("No events in range.")
        return 0
    console.print(_agenda_table(by_date, format_date_range(start, end)))
    return 0


def _cmd_conflicts(args: argparse.Namespace, snap: PlannerSnapshot, console: Console) -> int:
    """
    Print all overlapping pairs among the timed events of one day.
    """
    day = _parse_date_arg(console, args.date)
    if day is None:
        return 1

    timed = separate_all_day(events_for_date(day, snap.courses, snap.items, snap.exclusions)).timed
    confs = find_conflicts(timed)
    if not confs:
        console.print("No conflicts found.")
        return 0

    console.print(f"Conflicts found: {len(confs)}")
    for a, b in confs:
        console.print(f"- {a.start}-{a.end or ''} {_label(a)}  <->  {b.start}-{b.end or ''} {_label(b)}")
    return 0


def _cmd_export(args: argparse.Namespace, snap: PlannerSnapshot, console: Console) -> int:
    """
    Export the events of a date range into an iCalendar (.ics) file.
    """
    start = _parse_date_arg(console, args.start)
    end = _parse_date_arg(console, args.end)
    if start is None or end is None:
        return 1

    out_path = (args.out or "").strip()
    if not out_path:
        console.print("Please provide output .ics path.")
        return 1

    by_date = events_for_range(start, end, snap.courses, snap.items, snap.exclusions)
    if not by_date:
        console.print("No events to export.")
        return 0

    n = export_events_to_ics(by_date, out_path)
    console.print(f"Exported {n} events to: {escape(out_path)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="studycal", description="Academic calendar CLI")
    parser.add_argument("--data", type=str, default=None, help="Path to planner.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log skipped/malformed records")
    sub = parser.add_subparsers(dest="command", required=True)

    p_day = sub.add_parser("day", help="Show the events of one day")
    p_day.add_argument("date", type=str, help="Date (YYYY-MM-DD)")

    p_week = sub.add_parser("week", help="Show the week containing a date")
    p_week.add_argument("date", type=str, help="Date (YYYY-MM-DD)")
    p_week.add_argument("--week-starts-on", choices=("Sun", "Mon"), default=None)

    p_range = sub.add_parser("range", help="Show all events between two dates")
    p_range.add_argument("start", type=str, help="First date (YYYY-MM-DD)")
    p_range.add_argument("end", type=str, help="Last date (YYYY-MM-DD)")

    p_conf = sub.add_parser("conflicts", help="Show overlapping events on one day")
    p_conf.add_argument("date", type=str, help="Date (YYYY-MM-DD)")

    p_export = sub.add_parser("export", help="Export events of a date range to .ics")
    p_export.add_argument("start", type=str, help="First date (YYYY-MM-DD)")
    p_export.add_argument("end", type=str, help="Last date (YYYY-MM-DD)")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")

    return parser


COMMANDS = {
    "day": _cmd_day,
    "week": _cmd_week,
    "range": _cmd_range,
    "conflicts": _cmd_conflicts,
    "export": _cmd_export,
}


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    console = Console(highlight=False)
    snap = load_snapshot(args.data)

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)
    raise SystemExit(handler(args, snap, console))
