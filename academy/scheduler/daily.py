from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List

from ..models.note import ClassNote
from ..models.student import Student
from ..store.dashboard import DashboardStore
from .reconcile import DragSession
from .transitions import date_key

logger = logging.getLogger(__name__)

TRANSFER_LOG_LIMIT = 6

STATUS_LABELS = {
    "present": "Presente",
    "absent": "Falta",
    "late": "Atraso",
}


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, "Sem check-in")


@dataclass
class DailySummary:
    total_students: int
    checked_in: int
    absent: int


@dataclass
class SlotCounts:
    enrolled: int
    present: int
    absent: int
    late: int
    is_full: bool


@dataclass
class TransferLogItem:
    student_id: str
    target_day: str
    target_time: str
    target_age_group: str
    moved_at: str


def summarize_day(assignments: Dict[str, List[str]], attendance: Dict[str, str]) -> DailySummary:
    unique = {sid for ids in assignments.values() for sid in ids}
    checked_in = sum(1 for s in attendance.values() if s in {"present", "late"})
    absent = sum(1 for s in attendance.values() if s == "absent")
    return DailySummary(len(unique), checked_in, absent)


def slot_counts(student_ids: List[str], attendance: Dict[str, str], capacity: int) -> SlotCounts:
    statuses = [attendance.get(sid, "none") for sid in student_ids]
    return SlotCounts(
        enrolled=len(student_ids),
        present=statuses.count("present"),
        absent=statuses.count("absent"),
        late=statuses.count("late"),
        is_full=len(student_ids) >= capacity,
    )


class DailyBoard:
    """Drag-and-drop roster for one date, writing through the store."""

    def __init__(self, store: DashboardStore, d: date | str) -> None:
        self.store = store
        self.iso = date_key(d)
        self.slots = store.template.slots_for_date(date.fromisoformat(self.iso))
        self.slot_ids = [s.id for s in self.slots]
        self.session = DragSession()

    def assignments(self) -> Dict[str, List[str]]:
        return self.store.get_assignments_for_date(self.iso)

    def start_drag(self, student_id: str) -> None:
        self.session.start(student_id)

    def end_drag(self, over_id: str | None) -> bool:
        writes = self.session.end(over_id, self.assignments(), self.slot_ids, self.store.template.capacity)
        for slot_id, ids in writes.items():
            self.store.set_assignment(self.iso, slot_id, ids)
        return bool(writes)

    def drop(self, student_id: str, over_id: str | None) -> bool:
        self.start_drag(student_id)
        return self.end_drag(over_id)


def quick_add_student(
    store: DashboardStore,
    d: date | str,
    *,
    name: str,
    age: int,
    slot_id: str,
    parent_contact: str = "",
    is_trial: bool = False,
    today: date | None = None,
    student_id: str | None = None,
) -> Student:
    iso = date_key(d)
    name = name.strip()
    if not name:
        raise ValueError("Student name is required")
    slot = next((s for s in store.template.slots_for_date(date.fromisoformat(iso)) if s.id == slot_id), None)
    if slot is None:
        raise ValueError(f"Slot {slot_id!r} is not scheduled on {iso}")
    today = today or date.today()
    stamp = int(time.time() * 1000)
    student = Student(
        id=student_id or f"stu-{stamp}",
        name=name,
        birth_date=f"{today.year - int(age)}-01-01",
        parent_contact=parent_contact,
        status="Ativo",
        registration_status="Incompleto",
        payment_status="Em dia",
        main_class=slot.label,
        is_trial=is_trial,
        photo_url=f"https://i.pravatar.cc/160?u={stamp}",
        enrolled_at=today.isoformat(),
    )
    store.add_student(student)
    current = store.get_assignments_for_date(iso).get(slot_id, [])
    store.set_assignment(iso, slot_id, current + [student.id])
    logger.info("Quick-added %s to %s on %s", student.id, slot_id, iso)
    return student


def transfer_student(
    store: DashboardStore,
    d: date | str,
    student_id: str,
    target_day: str,
    target_slot_id: str,
    log: List[TransferLogItem],
    now: datetime | None = None,
) -> List[TransferLogItem] | None:
    """Take a student off today's roster and note where they are heading.

    The target is a weekday, not a date, so nothing is written to the target
    roster; only the log records it. Returns the new log, or None when the
    target slot does not exist on that day.
    """
    target = next((s for s in store.template.slots_for_day(target_day) if s.id == target_slot_id), None)
    if target is None:
        return None
    iso = date_key(d)
    current = store.slot_of(iso, student_id)
    if current is not None:
        remaining = [sid for sid in store.get_assignments_for_date(iso)[current] if sid != student_id]
        store.set_assignment(iso, current, remaining)
    item = TransferLogItem(
        student_id=student_id,
        target_day=target_day,
        target_time=target.time,
        target_age_group=target.age_group,
        moved_at=(now or datetime.now()).isoformat(),
    )
    return ([item] + [x for x in log if x.student_id != student_id])[:TRANSFER_LOG_LIMIT]


class ClassNotes:
    def __init__(self) -> None:
        self._notes: Dict[str, Dict[str, ClassNote]] = {}

    def save(self, d: date | str, slot_id: str, content: str, now: datetime | None = None) -> ClassNote | None:
        text = content.strip()
        if not text:
            return None
        iso = date_key(d)
        note = ClassNote(slot_id, iso, text, (now or datetime.now()).isoformat())
        self._notes.setdefault(iso, {})[slot_id] = note
        return note

    def get(self, d: date | str, slot_id: str) -> ClassNote | None:
        return self._notes.get(date_key(d), {}).get(slot_id)

    def for_date(self, d: date | str) -> Dict[str, ClassNote]:
        return dict(self._notes.get(date_key(d), {}))
