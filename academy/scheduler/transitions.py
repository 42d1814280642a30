"""Pure state transitions for the roster maps.

Nothing here performs I/O; the store applies these and hands the result to
the persistence writer. Every function returns a new top-level map and never
mutates lists it was given.
"""
from __future__ import annotations

from datetime import date
from typing import Dict, List

from ..models.assignment import ATTENDANCE_STATUSES, AssignmentMap, AttendanceMap, copy_day
from ..models.instructor import Instructor
from ..models.student import Student


def date_key(d: date | str) -> str:
    if isinstance(d, str):
        return date.fromisoformat(d).isoformat()
    return d.isoformat()


def day_assignments(
    assignments: AssignmentMap, iso: str, defaults: Dict[str, List[str]]
) -> Dict[str, List[str]]:
    existing = assignments.get(iso)
    if existing is not None:
        return copy_day(existing)
    return copy_day(defaults)


def with_assignment(
    assignments: AssignmentMap,
    iso: str,
    slot_id: str,
    student_ids: List[str],
    defaults: Dict[str, List[str]],
) -> AssignmentMap:
    day = day_assignments(assignments, iso, defaults)
    day[slot_id] = list(student_ids)
    updated = dict(assignments)
    updated[iso] = day
    return updated


def with_move(
    assignments: AssignmentMap,
    iso: str,
    student_id: str,
    from_slot: str,
    to_slot: str,
    defaults: Dict[str, List[str]],
) -> AssignmentMap:
    day = day_assignments(assignments, iso, defaults)
    day.setdefault(from_slot, [])
    # A student sits in one slot per date, whatever from_slot claims
    for slot_id, ids in day.items():
        day[slot_id] = [sid for sid in ids if sid != student_id]
    day[to_slot] = day.get(to_slot, []) + [student_id]
    updated = dict(assignments)
    updated[iso] = day
    return updated


def with_attendance(attendance: AttendanceMap, iso: str, student_id: str, status: str) -> AttendanceMap:
    if status not in ATTENDANCE_STATUSES:
        raise ValueError(f"Unknown attendance status: {status!r}")
    day = dict(attendance.get(iso, {}))
    day[student_id] = status
    updated = dict(attendance)
    updated[iso] = day
    return updated


def with_student(students: List[Student], student: Student) -> List[Student]:
    return [student] + [s for s in students if s.id != student.id]


def replacing_student(students: List[Student], student: Student) -> List[Student]:
    return [student if s.id == student.id else s for s in students]


def without_student(students: List[Student], student_id: str) -> List[Student]:
    return [s for s in students if s.id != student_id]


def replacing_instructor(instructors: List[Instructor], instructor: Instructor) -> List[Instructor]:
    return [instructor if i.id == instructor.id else i for i in instructors]


def without_instructor(instructors: List[Instructor], instructor_id: str) -> List[Instructor]:
    return [i for i in instructors if i.id != instructor_id]
