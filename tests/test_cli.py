"""
Tests for CLI entry points.

These tests focus on:
- argument validation (invalid dates exit nonzero)
- the day/week/conflicts/export commands against a temporary snapshot
"""

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from studycal.cli import main
from tests.fixtures import write_snapshot


def run_cli(argv: list[str]) -> tuple[int, str]:
    buf = io.StringIO()
    with redirect_stdout(buf):
        try:
            main(argv)
        except SystemExit as e:
            return int(e.code or 0), buf.getvalue()
    return 0, buf.getvalue()


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.data = str(write_snapshot(self._tmp.name))

    def test_invalid_date_exits_nonzero(self) -> None:
        code, out = run_cli(["--data", self.data, "day", "2025-02-30"])
        self.assertNotEqual(code, 0)
        self.assertIn("Invalid date", out)

    def test_missing_command_exits_nonzero(self) -> None:
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main([])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_day(self) -> None:
        code, out = run_cli(["--data", self.data, "day", "2025-01-08"])
        self.assertEqual(code, 0)
        self.assertIn("Calculus I", out)
        self.assertIn("Physics", out)
        self.assertIn("All day", out)
        self.assertIn("Read chapter 3", out)
        self.assertIn("2 column(s)", out)

    def test_day_on_holiday(self) -> None:
        code, out = run_cli(["--data", self.data, "day", "2025-01-20"])
        self.assertEqual(code, 0)
        self.assertIn("No events", out)

    def test_week(self) -> None:
        code, out = run_cli(["--data", self.data, "week", "2025-01-08"])
        self.assertEqual(code, 0)
        self.assertIn("January 6 - 12, 2025", out)

    def test_conflicts(self) -> None:
        code, out = run_cli(["--data", self.data, "conflicts", "2025-01-08"])
        self.assertEqual(code, 0)
        self.assertIn("Conflicts found: 1", out)

    def test_export(self) -> None:
        target = Path(self._tmp.name) / "out.ics"
        code, out = run_cli(["--data", self.data, "export", "2025-01-06", "2025-01-12", str(target)])
        self.assertEqual(code, 0)
        self.assertTrue(target.exists())
        self.assertIn("Exported", out)

    def test_missing_data_file_is_not_an_error(self) -> None:
        missing = str(Path(self._tmp.name) / "nothing.json")
        code, out = run_cli(["--data", missing, "range", "2025-01-06", "2025-01-12"])
        self.assertEqual(code, 0)
        self.assertIn("No events in range.", out)


if __name__ == "__main__":
    unittest.main()
