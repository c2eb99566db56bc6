"""
Color resolution for the rendering layer.

The engine never interprets colors: it hands back an opaque token from the
ColorConfig it is given (CSS variables by default).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Mapping, Optional

from studycal.model import CalendarEvent, EventKind

ACCENT = "var(--accent)"

DEFAULT_KIND_COLORS: Dict[str, str] = {
    "course": ACCENT,
    "task": ACCENT,
    "deadline": "var(--warning)",
    "deadline_overdue": "var(--danger)",
}

# Named course color tags the planner offers.
COLOR_TAGS: Dict[str, str] = {
    "red": "#ef4444",
    "blue": "#3b82f6",
    "green": "#10b981",
    "yellow": "#f59e0b",
    "purple": "#a855f7",
    "pink": "#ec4899",
    "indigo": "#6366f1",
    "cyan": "#06b6d4",
}


@dataclass(frozen=True)
class ColorConfig:
    kind_colors: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_KIND_COLORS))
    course_overrides: Mapping[str, str] = field(default_factory=dict)

    def kind_color(self, key: str) -> str:
        return self.kind_colors.get(key) or DEFAULT_KIND_COLORS.get(key, ACCENT)


def resolve_color_tag(tag: Optional[str]) -> str:
    if not tag:
        return ACCENT
    return COLOR_TAGS.get(tag.strip().lower(), tag)


def color_for(event: CalendarEvent, config: Optional[ColorConfig] = None, now: Optional[datetime] = None) -> str:
    """
    Course meetings: per-course override, then the course's color tag,
    then the course kind color. Deadlines turn "overdue" once due before `now`.
    """
    config = config or ColorConfig()

    if event.kind == EventKind.COURSE:
        override = config.course_overrides.get(event.course_id)
        if override:
            return override
        if event.color_tag:
            return resolve_color_tag(event.color_tag)
        return config.kind_color("course")

    if event.kind == EventKind.DEADLINE and now is not None and event.due_at is not None:
        if event.due_at < now.replace(tzinfo=None):
            return config.kind_color("deadline_overdue")

    return config.kind_color(event.kind.value)
