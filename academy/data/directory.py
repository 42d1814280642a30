from __future__ import annotations

from typing import Dict, List
from urllib.parse import quote

from ..models.instructor import Instructor
from ..models.student import Student
from .skills import SkillCatalog

DEFAULT_ENROLLED_AT = "2026-02-15"


def build_student(data: Dict[str, object], skills: SkillCatalog) -> Student:
    # Seed rows only carry identity fields; everything else takes enrollment defaults
    row = dict(data)
    row.setdefault("emergency_phone", row.get("parent_contact", ""))
    row.setdefault("enrolled_at", DEFAULT_ENROLLED_AT)
    row.setdefault("photo_url", f"https://i.pravatar.cc/160?u={quote(str(row['id']))}")
    student = Student.from_dict(row)
    if not student.skill_achievements:
        student.skill_achievements = skills.default_achievements()
    return student


class StudentDirectory:
    def __init__(self, rows: List[Dict[str, object]], skills: SkillCatalog):
        self.records: List[Student] = [build_student(r, skills) for r in rows]

    def by_id(self) -> Dict[str, Student]:
        return {s.id: s for s in self.records}


class InstructorDirectory:
    def __init__(self, rows: List[Dict[str, object]]):
        self.records: List[Instructor] = [Instructor.from_dict(r) for r in rows]
