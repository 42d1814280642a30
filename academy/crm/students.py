from __future__ import annotations

from datetime import date
from typing import List

from ..models.student import Student


def attendance_rate(student: Student) -> int:
    history = student.attendance_history
    if not history:
        return 0
    attended = sum(1 for a in history if a.status in {"present", "late"})
    return round(attended / len(history) * 100)


def absences(student: Student) -> int:
    return sum(1 for a in student.attendance_history if a.status == "absent")


def late_count(student: Student) -> int:
    return sum(1 for a in student.attendance_history if a.status == "late")


def age_on(birth_date: str, today: date | None = None) -> int:
    today = today or date.today()
    birth = date.fromisoformat(birth_date)
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def infer_age_group(age: int) -> str:
    if age <= 6:
        return "4-6 anos"
    if age <= 12:
        return "7-12 anos"
    if age <= 17:
        return "Teens/Adultos"
    return "Adultos"


def search(students: List[Student], query: str) -> List[Student]:
    q = query.strip().lower()
    if not q:
        return list(students)
    return [s for s in students if q in s.name.lower() or q in s.parent_name.lower()]
