from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List

from ..data.schedule import WeeklyTemplate, weekday_key
from ..models.assignment import AssignmentMap, AttendanceMap, copy_day
from ..models.instructor import Instructor
from ..models.student import Student
from ..scheduler import transitions as tx
from ..sync.remote import ASSIGNMENTS_KEY, ATTENDANCE_KEY, OfflineRemoteStore, RemoteStore
from ..sync.writer import BestEffortWriter

logger = logging.getLogger(__name__)


class DashboardStore:
    """Single-writer in-memory state for the academy dashboard.

    Reads never touch the network. Every mutation is applied locally first,
    then the matching remote write is handed to the writer without waiting
    for it. Concurrent writers on other devices simply overwrite each other.
    """

    def __init__(
        self,
        template: WeeklyTemplate,
        students: List[Student] | None = None,
        instructors: List[Instructor] | None = None,
        remote: RemoteStore | None = None,
        writer: BestEffortWriter | None = None,
    ) -> None:
        self.template = template
        self.students: List[Student] = list(students or [])
        self.instructors: List[Instructor] = list(instructors or [])
        self.daily_assignments: AssignmentMap = {}
        self.daily_attendance: AttendanceMap = {}
        self.selected_date: date = date.today()
        self.hydrated = False
        self.remote: RemoteStore = remote or OfflineRemoteStore()
        self.writer = writer or BestEffortWriter()

    # -- persistence ----------------------------------------------------

    def _persist(self, label: str, fn, *args: Any) -> None:
        if not self.remote.online:
            return
        self.writer.submit(label, fn, *args)

    def _save_state(self, key: str, data: Any) -> None:
        self._persist(f"app_state:{key}", self.remote.save_app_state, key, data)

    @property
    def is_stale(self) -> bool:
        return self.writer.pending > 0 or self.writer.failed > 0 or self.writer.dropped > 0

    # -- navigation -----------------------------------------------------

    def select_date(self, d: date) -> None:
        self.selected_date = d

    # -- roster ---------------------------------------------------------

    def _defaults(self, iso: str) -> Dict[str, List[str]]:
        return self.template.default_roster(weekday_key(date.fromisoformat(iso)))

    def get_assignments_for_date(self, d: date | str) -> Dict[str, List[str]]:
        iso = tx.date_key(d)
        existing = self.daily_assignments.get(iso)
        if existing is not None:
            return copy_day(existing)
        return self._defaults(iso)

    def has_override(self, d: date | str) -> bool:
        return tx.date_key(d) in self.daily_assignments

    def set_assignment(self, d: date | str, slot_id: str, student_ids: List[str]) -> None:
        iso = tx.date_key(d)
        self.daily_assignments = tx.with_assignment(
            self.daily_assignments, iso, slot_id, student_ids, self._defaults(iso)
        )
        self._save_state(ASSIGNMENTS_KEY, self.daily_assignments)

    def move_student(self, d: date | str, student_id: str, from_slot: str, to_slot: str) -> None:
        iso = tx.date_key(d)
        self.daily_assignments = tx.with_move(
            self.daily_assignments, iso, student_id, from_slot, to_slot, self._defaults(iso)
        )
        self._save_state(ASSIGNMENTS_KEY, self.daily_assignments)

    def slot_of(self, d: date | str, student_id: str) -> str | None:
        for slot_id, ids in self.get_assignments_for_date(d).items():
            if student_id in ids:
                return slot_id
        return None

    # -- attendance -----------------------------------------------------

    def set_attendance(self, d: date | str, student_id: str, status: str) -> None:
        iso = tx.date_key(d)
        self.daily_attendance = tx.with_attendance(self.daily_attendance, iso, student_id, status)
        self._save_state(ATTENDANCE_KEY, self.daily_attendance)

    def get_attendance_for_date(self, d: date | str) -> Dict[str, str]:
        return dict(self.daily_attendance.get(tx.date_key(d), {}))

    # -- students -------------------------------------------------------

    def find_student(self, student_id: str) -> Student | None:
        for s in self.students:
            if s.id == student_id:
                return s
        return None

    def students_by_id(self) -> Dict[str, Student]:
        return {s.id: s for s in self.students}

    def add_student(self, student: Student) -> None:
        self.students = tx.with_student(self.students, student)
        self._persist(f"upsert student {student.id}", self.remote.upsert_student, student)

    def update_student(self, student: Student) -> None:
        self.students = tx.replacing_student(self.students, student)
        self._persist(f"upsert student {student.id}", self.remote.upsert_student, student)

    def delete_student(self, student_id: str) -> None:
        self.students = tx.without_student(self.students, student_id)
        self._persist(f"delete student {student_id}", self.remote.delete_student, student_id)

    def sync_student(self, student: Student) -> None:
        self._persist(f"upsert student {student.id}", self.remote.upsert_student, student)

    # -- instructors ----------------------------------------------------

    def find_instructor(self, instructor_id: str) -> Instructor | None:
        for i in self.instructors:
            if i.id == instructor_id:
                return i
        return None

    def add_instructor(self, instructor: Instructor) -> None:
        self.instructors = self.instructors + [instructor]
        self._persist(f"upsert instructor {instructor.id}", self.remote.upsert_instructor, instructor)

    def update_instructor(self, instructor: Instructor) -> None:
        self.instructors = tx.replacing_instructor(self.instructors, instructor)
        self._persist(f"upsert instructor {instructor.id}", self.remote.upsert_instructor, instructor)

    def remove_instructor(self, instructor_id: str) -> None:
        self.instructors = tx.without_instructor(self.instructors, instructor_id)
        self._persist(f"delete instructor {instructor_id}", self.remote.delete_instructor, instructor_id)

    # -- loading --------------------------------------------------------

    def load_from_remote(self) -> None:
        if not self.remote.online:
            self.hydrated = True
            return
        try:
            students = self.remote.fetch_students()
            instructors = self.remote.fetch_instructors()
            assignments = self.remote.fetch_app_state(ASSIGNMENTS_KEY)
            attendance = self.remote.fetch_app_state(ATTENDANCE_KEY)
        except Exception as e:
            logger.error("Failed to load from remote store: %s", e)
            self.hydrated = True
            return
        if students:
            self.students = students
        if instructors:
            self.instructors = instructors
        if assignments and isinstance(assignments, dict):
            self.daily_assignments = assignments
        elif assignments:
            logger.warning("Ignoring remote %s blob of type %s", ASSIGNMENTS_KEY, type(assignments).__name__)
        if attendance and isinstance(attendance, dict):
            self.daily_attendance = attendance
        elif attendance:
            logger.warning("Ignoring remote %s blob of type %s", ATTENDANCE_KEY, type(attendance).__name__)
        self.writer.reset_failures()
        self.hydrated = True
        logger.info(
            "Loaded remote state: %d students, %d instructors, %d roster dates",
            len(self.students),
            len(self.instructors),
            len(self.daily_assignments),
        )

    def snapshot(self) -> Dict[str, Any]:
        return {
            "students": [s.to_dict() for s in self.students],
            "daily_assignments": self.daily_assignments,
            "daily_attendance": self.daily_attendance,
        }

    def restore(self, state: Dict[str, Any]) -> None:
        """Replace local state with a snapshot; nothing changes unless all of it parses."""
        assignments = state.get("daily_assignments") or {}
        attendance = state.get("daily_attendance") or {}
        if not isinstance(assignments, dict) or not isinstance(attendance, dict):
            raise ValueError("snapshot roster and attendance must be mappings")
        students = [Student.from_dict(s) for s in state.get("students") or []]
        daily_assignments = {iso: copy_day(day) for iso, day in assignments.items()}
        daily_attendance = {iso: dict(day) for iso, day in attendance.items()}
        if students:
            self.students = students
        self.daily_assignments = daily_assignments
        self.daily_attendance = daily_attendance
