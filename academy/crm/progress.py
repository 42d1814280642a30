from __future__ import annotations

import secrets
import time
from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List

from ..models.student import (
    QUALITY_KEYS,
    SKILL_STATUSES,
    ConditioningTest,
    PhysicalAssessment,
    SkillAchievement,
    Student,
    empty_quality,
)
from .students import attendance_rate


def _generate_id() -> str:
    return f"{int(time.time() * 1000):x}-{secrets.token_hex(3)}"


def skill_progress(student: Student) -> int:
    skills = student.skill_achievements
    if not skills:
        return 0
    mastered = sum(1 for s in skills if s.is_mastered)
    return round(mastered / len(skills) * 100)


def grouped_by_category(student: Student) -> Dict[str, List[SkillAchievement]]:
    grouped: Dict[str, List[SkillAchievement]] = {}
    for skill in student.skill_achievements:
        grouped.setdefault(skill.category, []).append(skill)
    return grouped


def set_skill_status(student: Student, skill_id: str, status: str, now: datetime | None = None) -> Student:
    if status not in SKILL_STATUSES:
        raise ValueError(f"Unknown skill status: {status!r}")
    stamp = (now or datetime.now()).isoformat()
    updated = []
    for skill in student.skill_achievements:
        if skill.id != skill_id:
            updated.append(skill)
            continue
        # Quality marks only make sense once a skill is landed
        quality = dict(skill.quality) if status in {"mastered", "fluid"} else empty_quality()
        updated.append(replace(skill, status=status, quality=quality, updated_at=stamp))
    return replace(student, skill_achievements=updated)


def toggle_skill_quality(student: Student, skill_id: str, key: str, now: datetime | None = None) -> Student:
    if key not in QUALITY_KEYS:
        raise ValueError(f"Unknown quality: {key!r}")
    stamp = (now or datetime.now()).isoformat()
    updated = []
    for skill in student.skill_achievements:
        if skill.id == skill_id:
            quality = dict(skill.quality)
            quality[key] = not quality.get(key, False)
            skill = replace(skill, quality=quality, updated_at=stamp)
        updated.append(skill)
    return replace(student, skill_achievements=updated)


def add_physical_assessment(
    student: Student, weight: float, height: float, waist: float, today: date | None = None
) -> Student:
    assessment = PhysicalAssessment(
        id=_generate_id(),
        date=(today or date.today()).isoformat(),
        weight=float(weight),
        height=float(height),
        waist_circumference=float(waist),
    )
    return replace(student, physical_assessments=student.physical_assessments + [assessment])


def add_conditioning_test(
    student: Student,
    *,
    push_ups: int,
    pull_ups: int,
    sit_ups: int,
    vertical_jump: float,
    horizontal_jump: float,
    today: date | None = None,
) -> Student:
    test = ConditioningTest(
        id=_generate_id(),
        date=(today or date.today()).isoformat(),
        push_ups=int(push_ups),
        pull_ups=int(pull_ups),
        vertical_jump=float(vertical_jump),
        horizontal_jump=float(horizontal_jump),
        sit_ups=int(sit_ups),
    )
    return replace(student, conditioning_tests=student.conditioning_tests + [test])


def average_attendance(students: List[Student]) -> int:
    if not students:
        return 0
    return round(sum(attendance_rate(s) for s in students) / len(students))
