"""
A small planner snapshot (camelCase keys, as the planner app stores them).
"""

import json
from pathlib import Path

SNAPSHOT = {
    "courses": [
        {
            "id": "c-calc",
            "code": "MATH101",
            "name": "Calculus I",
            "startDate": "2025-01-06",
            "endDate": "2025-05-01",
            "colorTag": "blue",
            "meetingTimes": [{"days": ["Mon", "Wed"], "start": "10:00", "end": "10:50", "location": "HS 8"}],
        },
        {
            "id": "c-phys",
            "code": "PHY110",
            "name": "Physics",
            "meetingTimes": [{"day": "Wed", "start": "10:30", "end": "11:30", "location": "Lab 2"}],
        },
        {"code": "NOID", "name": "Broken course"},
    ],
    "tasks": [
        {"id": "t1", "title": "Read chapter 3", "dueAt": "2025-01-08T23:59:00", "courseId": "c-calc", "status": "open"},
        {"id": "t2", "title": "Someday", "dueAt": None},
    ],
    "deadlines": [
        {"id": "d1", "title": "Problem set 1", "dueAt": "2025-01-09T00:00:00", "courseId": "c-calc"},
    ],
    "excludedDates": [
        {"date": "2025-01-20", "courseId": None, "description": "MLK Day"},
        {"date": "2025-01-13", "courseId": "c-calc", "description": "Prof away"},
        {"description": "no date"},
    ],
    "settings": {"weekStartsOn": "Mon"},
}


def write_snapshot(directory: str, data=None) -> Path:
    path = Path(directory) / "planner.json"
    path.write_text(json.dumps(SNAPSHOT if data is None else data), encoding="utf-8")
    return path
