from __future__ import annotations

from datetime import date, datetime

import pytest

from academy.crm import birthdays, finance, instructors, progress, students
from academy.models.instructor import Instructor
from academy.models.slot import ClassSlot
from academy.models.student import AttendanceRecord, PaymentRecord, SkillAchievement, Student


def _payment(pid: str, day: str, month: str, status: str, amount: float = 150) -> PaymentRecord:
    paid = amount if status == "paid" else 0
    return PaymentRecord(pid, day, month, amount, paid, "Mensalidade", status)


def test_attendance_rate_counts_late_as_attended() -> None:
    s = Student(id="s", name="Ana", attendance_history=[
        AttendanceRecord("2024-06-03", "present", "segunda-0900"),
        AttendanceRecord("2024-06-05", "late", "quarta-0900"),
        AttendanceRecord("2024-06-10", "absent", "segunda-0900"),
    ])
    assert students.attendance_rate(s) == 67
    assert students.absences(s) == 1
    assert students.late_count(s) == 1
    assert students.attendance_rate(Student(id="x", name="X")) == 0
    assert progress.average_attendance([s, Student(id="x", name="X")]) == 34


def test_age_and_age_group() -> None:
    assert students.age_on("2016-06-04", date(2024, 6, 3)) == 7
    assert students.age_on("2016-06-03", date(2024, 6, 3)) == 8
    assert students.infer_age_group(5) == "4-6 anos"
    assert students.infer_age_group(15) == "Teens/Adultos"
    assert students.infer_age_group(30) == "Adultos"


def test_search_matches_student_or_parent(store) -> None:
    hits = students.search(store.students, "jamille")
    assert [s.id for s in hits] == ["stu-joao-001"]
    assert len(students.search(store.students, "  ")) == len(store.students)


def test_record_payment_prepends_and_marks_paid() -> None:
    s = Student(id="s", name="Ana", payment_status="Atrasado",
                payment_history=[_payment("p0", "2026-01-05", "2026-01", "paid")])
    updated = finance.record_payment(s, "2026-02", 150, "Pix", today=date(2026, 2, 3), payment_id="p1")
    assert updated.payment_status == "Em dia"
    assert [p.id for p in updated.payment_history] == ["p1", "p0"]
    assert updated.payment_history[0].description == "Mensalidade fevereiro de 2026"
    assert s.payment_history[0].id == "p0" and len(s.payment_history) == 1


@pytest.mark.parametrize("month, amount, method", [("", 150, "Pix"), ("2026-02", 0, "Pix"), ("2026-02", 150, "Cheque")])
def test_record_payment_rejects_bad_input(month, amount, method) -> None:
    with pytest.raises(ValueError):
        finance.record_payment(Student(id="s", name="Ana"), month, amount, method)


def test_finance_summary_and_filters() -> None:
    a = Student(id="a", name="Ana", payment_history=[
        _payment("a1", "2026-02-02", "2026-02", "paid"),
        _payment("a0", "2026-01-02", "2026-01", "overdue"),
    ])
    b = Student(id="b", name="Bruno", status="Inativo", payment_history=[
        _payment("b1", "2026-02-10", "2026-02", "pending", 120),
    ])
    rows = finance.all_payments([a, b])
    assert [r.payment.id for r in rows] == ["b1", "a1", "a0"]
    summary = finance.summarize([a, b], "2026-02")
    assert summary.revenue_this_month == 150
    assert summary.total_pending_overdue == 270
    assert summary.active_students == 1
    assert summary.pct_paid == 50
    assert [r.payment.id for r in finance.filter_payments(rows, status="paid")] == ["a1"]
    assert [r.payment.id for r in finance.filter_payments(rows, query="bru")] == ["b1"]
    assert finance.current_month_ref(date(2026, 3, 9)) == "2026-03"


def test_instructor_slots_and_hours() -> None:
    inst = instructors.new_instructor(" Ana ", "3199", max_hours=1)
    slot = ClassSlot.create("segunda", "09:00", "4-6 anos")
    inst = instructors.assign_slot(inst, slot)
    assert instructors.assign_slot(inst, slot) is inst
    inst = instructors.assign_slot(inst, ClassSlot.create("terca", "10:00", "7-12 anos"))
    assert inst.weekly_hours == 2
    assert instructors.is_overloaded(inst)
    assert list(instructors.slots_by_day(inst)) == ["segunda", "terca"]
    inst = instructors.remove_slot(inst, 0)
    assert [a.day for a in inst.assigned_slots] == ["terca"]
    assert instructors.total_assigned_hours([inst, Instructor(id="i", name="B")]) == 1
    with pytest.raises(ValueError):
        instructors.new_instructor("", "3199")


def test_seed_instructors_hours(store) -> None:
    assert instructors.total_assigned_hours(store.instructors) == 36


def test_skill_status_and_quality() -> None:
    s = Student(id="s", name="Ana", skill_achievements=[
        SkillAchievement("skill-0", "Rolamento", "saltos"),
        SkillAchievement("skill-1", "Precisão", "saltos"),
    ])
    now = datetime(2026, 3, 1, 10, 0)
    s = progress.set_skill_status(s, "skill-0", "mastered", now)
    s = progress.toggle_skill_quality(s, "skill-0", "flow", now)
    assert s.skill_achievements[0].quality["flow"]
    assert progress.skill_progress(s) == 50
    s = progress.set_skill_status(s, "skill-0", "learning", now)
    assert not any(s.skill_achievements[0].quality.values())
    assert list(progress.grouped_by_category(s)) == ["saltos"]
    with pytest.raises(ValueError):
        progress.set_skill_status(s, "skill-0", "done")


def test_assessments_append() -> None:
    s = Student(id="s", name="Ana")
    s = progress.add_physical_assessment(s, 30, 1.3, 55, today=date(2026, 3, 1))
    s = progress.add_conditioning_test(
        s, push_ups=10, pull_ups=2, sit_ups=20, vertical_jump=30, horizontal_jump=150, today=date(2026, 3, 1)
    )
    assert s.physical_assessments[0].date == "2026-03-01"
    assert s.conditioning_tests[0].pull_ups == 2


def test_seed_students_get_default_skills(store) -> None:
    s = store.find_student("stu-joao-001")
    assert len(s.skill_achievements) == 38
    assert progress.skill_progress(s) == 0


def test_birthdays() -> None:
    people = [
        Student(id="a", name="A", birth_date="2015-06-20"),
        Student(id="b", name="B", birth_date="2016-06-02"),
        Student(id="c", name="C", birth_date="2014-06-10", status="Inativo"),
        Student(id="d", name="D", birth_date="2014-07-01"),
    ]
    assert [s.id for s in birthdays.birthdays_in_month(people, 6)] == ["b", "a"]
    this_month, next_month = birthdays.upcoming(people, date(2024, 6, 2))
    assert [s.id for s in next_month] == ["d"]
    assert birthdays.turning_age(people[0], date(2024, 1, 1)) == 9
    assert birthdays.is_birthday_today(people[1], date(2024, 6, 2))
    _, january = birthdays.upcoming(people, date(2024, 12, 5))
    assert january == []
