from __future__ import annotations

from typing import Dict, List

# iso date -> slot id -> ordered student ids
AssignmentMap = Dict[str, Dict[str, List[str]]]

# iso date -> student id -> attendance status
AttendanceMap = Dict[str, Dict[str, str]]

ATTENDANCE_STATUSES = ("none", "present", "absent", "late")
CAPACITY_PER_CLASS = 12


def copy_day(day: Dict[str, List[str]]) -> Dict[str, List[str]]:
    return {slot_id: list(ids) for slot_id, ids in day.items()}
