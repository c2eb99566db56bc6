"""
Shared fixtures for the engine tests.
"""

from studycal.model import Course, CourseMeetingEvent, DateKey, EventKind, MeetingPattern, PunctualItem

DAY = DateKey(2025, 1, 8)  # a Wednesday


def calculus(**overrides) -> Course:
    fields = dict(
        course_id="c-calc",
        name="Calculus I",
        code="MATH101",
        meeting_times=(MeetingPattern(days=frozenset({"Mon", "Wed"}), start="10:00", end="10:50", location="HS 8"),),
        start_date="2025-01-06",
        end_date="2025-05-01",
    )
    fields.update(overrides)
    return Course(**fields)


def physics(**overrides) -> Course:
    fields = dict(
        course_id="c-phys",
        name="Physics",
        code="PHY110",
        meeting_times=(
            MeetingPattern(days=frozenset({"Wed"}), start="08:00", end="09:15", location="Lab 2"),
            MeetingPattern(days=frozenset({"Fri"}), start="13:00", end="14:00", location="HS 1"),
        ),
    )
    fields.update(overrides)
    return Course(**fields)


def task(item_id: str, due_at, **overrides) -> PunctualItem:
    return PunctualItem(item_id=item_id, title=f"Task {item_id}", kind=EventKind.TASK, due_at=due_at, **overrides)


def deadline(item_id: str, due_at, **overrides) -> PunctualItem:
    return PunctualItem(item_id=item_id, title=f"Deadline {item_id}", kind=EventKind.DEADLINE, due_at=due_at, **overrides)


def meeting(event_id: str, start, end) -> CourseMeetingEvent:
    return CourseMeetingEvent(
        event_id=event_id,
        date=DAY,
        course_id=event_id,
        title=event_id,
        course_code=None,
        start=start,
        end=end,
    )
