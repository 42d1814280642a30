from __future__ import annotations

import time
from dataclasses import replace
from typing import Dict, List

from ..models.instructor import Instructor, InstructorSlot
from ..models.slot import ClassSlot


def hours_used(slots: List[InstructorSlot]) -> int:
    # One class slot counts as one hour
    return len(slots)


def new_instructor(name: str, phone: str, role: str = "Assistente", max_hours: int = 25) -> Instructor:
    name, phone = name.strip(), phone.strip()
    if not name or not phone:
        raise ValueError("Instructor name and phone are required")
    stamp = int(time.time() * 1000)
    return Instructor(
        id=f"inst-{stamp}",
        name=name,
        role=role,
        photo_url=f"https://i.pravatar.cc/160?u={stamp}",
        phone=phone,
        weekly_hours=0,
        max_hours=max_hours or 25,
        assigned_slots=[],
    )


def assign_slot(instructor: Instructor, slot: ClassSlot) -> Instructor:
    if any(a.day == slot.day and a.slot_time == slot.time for a in instructor.assigned_slots):
        return instructor
    slots = instructor.assigned_slots + [InstructorSlot(slot.day, slot.time, slot.age_group)]
    return replace(instructor, assigned_slots=slots, weekly_hours=hours_used(slots))


def remove_slot(instructor: Instructor, index: int) -> Instructor:
    slots = [a for i, a in enumerate(instructor.assigned_slots) if i != index]
    return replace(instructor, assigned_slots=slots, weekly_hours=hours_used(slots))


def slots_by_day(instructor: Instructor) -> Dict[str, List[InstructorSlot]]:
    grouped: Dict[str, List[InstructorSlot]] = {}
    for a in instructor.assigned_slots:
        grouped.setdefault(a.day, []).append(a)
    return grouped


def is_overloaded(instructor: Instructor) -> bool:
    return hours_used(instructor.assigned_slots) > instructor.max_hours


def total_assigned_hours(instructors: List[Instructor]) -> int:
    return sum(hours_used(i.assigned_slots) for i in instructors)
