"""
Unit tests for the overlap layout (column assignment) and conflict listing.

Intervals are half-open [start, end): touching endpoints do not overlap.
"""

import random
import unittest

from studycal.layout import event_interval, find_conflicts, layout_overlaps
from studycal.projection import project_punctual
from studycal.timeutil import format_minutes
from tests.helpers import meeting, task


def _max_simultaneous(intervals: list[tuple[int, int]]) -> int:
    best = 0
    for s, _ in intervals:
        best = max(best, sum(1 for a, b in intervals if a <= s < b))
    return best


class TestLayoutOverlaps(unittest.TestCase):
    def test_empty(self) -> None:
        self.assertEqual(layout_overlaps([]), [])

    def test_three_events_two_columns(self) -> None:
        a = meeting("a", "09:00", "10:00")
        b = meeting("b", "09:30", "10:30")
        c = meeting("c", "10:00", "11:00")
        result = {x.event.event_id: x for x in layout_overlaps([a, b, c])}
        self.assertNotEqual(result["a"].column, result["b"].column)
        self.assertEqual(result["c"].column, result["a"].column)
        self.assertTrue(all(x.total_columns == 2 for x in result.values()))

    def test_back_to_back_share_a_column(self) -> None:
        result = layout_overlaps([meeting("a", "08:00", "09:00"), meeting("b", "09:00", "10:00")])
        self.assertEqual([x.column for x in result], [0, 0])
        self.assertEqual(result[0].total_columns, 1)

    def test_missing_end_uses_default_duration(self) -> None:
        ev = project_punctual([task("t", "2025-01-08T09:30")], "2025-01-08")[0]
        self.assertEqual(event_interval(ev), (570, 630))
        result = layout_overlaps([meeting("a", "10:00", "11:00"), ev])
        self.assertEqual(result[0].total_columns, 2)

    def test_event_without_start_is_not_placed(self) -> None:
        result = layout_overlaps([meeting("a", None, None), meeting("b", "10:00", "11:00")])
        self.assertEqual([x.event.event_id for x in result], ["b"])
        self.assertEqual(result[0].total_columns, 1)

    def test_midnight_item_gets_no_column(self) -> None:
        # due at midnight -> shown the evening before, timed but without a start
        rolled = project_punctual([task("t", "2025-01-09T00:00")], "2025-01-08")[0]
        result = layout_overlaps([rolled, meeting("a", "10:00", "11:00")])
        self.assertEqual([x.event.event_id for x in result], ["a"])
        self.assertEqual(layout_overlaps([rolled]), [])

    def test_returned_in_input_order(self) -> None:
        events = [meeting("late", "15:00", "16:00"), meeting("early", "08:00", "09:00")]
        self.assertEqual([x.event.event_id for x in layout_overlaps(events)], ["late", "early"])

    def test_ties_broken_by_end_time(self) -> None:
        long = meeting("long", "09:00", "12:00")
        short = meeting("short", "09:00", "09:30")
        after = meeting("after", "09:30", "10:00")
        result = {x.event.event_id: x.column for x in layout_overlaps([long, short, after])}
        self.assertEqual(result["short"], 0)
        self.assertEqual(result["long"], 1)
        self.assertEqual(result["after"], 0)

    def test_random_days_are_valid_and_minimal(self) -> None:
        rng = random.Random(20250108)
        for _ in range(200):
            events = []
            for i in range(rng.randint(1, 12)):
                start = rng.randrange(8 * 60, 20 * 60, 15)
                end = start + rng.choice([15, 30, 45, 60, 90, 120])
                events.append(meeting(f"e{i}", format_minutes(start), format_minutes(end)))

            result = layout_overlaps(events)
            self.assertEqual(len(result), len(events))

            intervals = [event_interval(x.event) for x in result]
            self.assertEqual(result[0].total_columns, _max_simultaneous(intervals))

            for i in range(len(result)):
                for j in range(i + 1, len(result)):
                    if result[i].column == result[j].column:
                        (s1, e1), (s2, e2) = intervals[i], intervals[j]
                        self.assertFalse(s1 < e2 and e1 > s2)

    def test_idempotent(self) -> None:
        events = [meeting("a", "09:00", "10:00"), meeting("b", "09:15", "09:45"), meeting("c", "09:30", "11:00")]
        self.assertEqual(layout_overlaps(events), layout_overlaps(events))


class TestFindConflicts(unittest.TestCase):
    def test_overlap_same_day(self) -> None:
        confs = find_conflicts([meeting("a", "10:00", "11:00"), meeting("b", "10:30", "12:00")])
        self.assertEqual(len(confs), 1)

    def test_no_overlap_touching_end(self) -> None:
        confs = find_conflicts([meeting("a", "10:00", "11:00"), meeting("b", "11:00", "12:00")])
        self.assertEqual(len(confs), 0)

    def test_each_pair_once(self) -> None:
        events = [meeting("a", "10:00", "12:00"), meeting("b", "10:30", "11:00"), meeting("c", "10:45", "11:30")]
        pairs = [(x.event_id, y.event_id) for x, y in find_conflicts(events)]
        self.assertEqual(pairs, [("a", "b"), ("a", "c"), ("b", "c")])


if __name__ == "__main__":
    unittest.main()
