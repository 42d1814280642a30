from __future__ import annotations

from datetime import date
from typing import List

from ..models.student import Student


def _birth(student: Student) -> date:
    return date.fromisoformat(student.birth_date)


def birthdays_in_month(students: List[Student], month: int) -> List[Student]:
    """Active students born in ``month`` (1-12), ordered by day of month."""
    hits = [s for s in students if s.is_active and _birth(s).month == month]
    return sorted(hits, key=lambda s: _birth(s).day)


def upcoming(students: List[Student], today: date | None = None) -> tuple[List[Student], List[Student]]:
    today = today or date.today()
    next_month = today.month % 12 + 1
    return birthdays_in_month(students, today.month), birthdays_in_month(students, next_month)


def turning_age(student: Student, today: date | None = None) -> int:
    today = today or date.today()
    return today.year - _birth(student).year


def is_birthday_today(student: Student, today: date | None = None) -> bool:
    today = today or date.today()
    b = _birth(student)
    return (b.month, b.day) == (today.month, today.day)
