from __future__ import annotations

import random
from datetime import date, datetime

import pytest

from academy.scheduler.daily import (
    ClassNotes,
    DailyBoard,
    TransferLogItem,
    quick_add_student,
    slot_counts,
    status_label,
    summarize_day,
    transfer_student,
)

MONDAY = date(2024, 6, 3)


def test_board_moves_student_between_slots(store) -> None:
    board = DailyBoard(store, MONDAY)
    assert board.drop("stu-joao-001", "segunda-1000")
    day = store.get_assignments_for_date(MONDAY)
    assert day["segunda-0900"] == []
    assert day["segunda-1000"][-1] == "stu-joao-001"


def test_board_rejects_move_into_full_slot(store) -> None:
    full = [f"stu-x{i}" for i in range(12)]
    store.set_assignment(MONDAY, "segunda-1000", full)
    board = DailyBoard(store, MONDAY)
    assert not board.drop("stu-joao-001", "segunda-1000")
    assert not board.drop("stu-joao-001", "stu-x3")
    day = store.get_assignments_for_date(MONDAY)
    assert day["segunda-0900"] == ["stu-joao-001"]
    assert day["segunda-1000"] == full


def test_board_reorders_inside_slot(store) -> None:
    board = DailyBoard(store, MONDAY)
    board.start_drag("stu-henrique-luna")
    assert board.end_drag("stu-murilo-santana")
    assert store.get_assignments_for_date(MONDAY)["segunda-1000"] == [
        "stu-henrique-luna",
        "stu-murilo-santana",
        "stu-pedro-martins",
    ]


def test_board_drop_without_target_is_noop(store) -> None:
    board = DailyBoard(store, MONDAY)
    assert not board.drop("stu-joao-001", None)
    assert not store.has_override(MONDAY)


def test_summary_counts_unique_students_and_checkins() -> None:
    assignments = {"a": ["s1", "s2"], "b": ["s3"]}
    attendance = {"s1": "present", "s2": "late", "s3": "absent"}
    summary = summarize_day(assignments, attendance)
    assert (summary.total_students, summary.checked_in, summary.absent) == (3, 2, 1)
    counts = slot_counts(["s1", "s2"], attendance, 2)
    assert (counts.present, counts.late, counts.absent, counts.is_full) == (1, 1, 0, True)
    assert status_label("none") == "Sem check-in"


def test_quick_add_student_lands_in_slot(store) -> None:
    student = quick_add_student(
        store, MONDAY, name="  Bia  ", age=8, slot_id="segunda-1000",
        today=date(2026, 3, 1), student_id="stu-bia",
    )
    assert student.name == "Bia"
    assert student.birth_date == "2018-01-01"
    assert student.main_class == "10:00 (7-12 anos)"
    assert store.students[0].id == "stu-bia"
    assert store.get_assignments_for_date(MONDAY)["segunda-1000"][-1] == "stu-bia"


def test_quick_add_student_validates_input(store) -> None:
    with pytest.raises(ValueError):
        quick_add_student(store, MONDAY, name=" ", age=8, slot_id="segunda-1000")
    with pytest.raises(ValueError):
        quick_add_student(store, MONDAY, name="Bia", age=8, slot_id="terca-1600")


def test_transfer_removes_from_today_and_logs(store) -> None:
    log = transfer_student(store, MONDAY, "stu-thiago", "terca", "terca-1100", [],
                           now=datetime(2024, 6, 3, 9, 0))
    assert store.slot_of(MONDAY, "stu-thiago") is None
    assert log[0] == TransferLogItem("stu-thiago", "terca", "11:00", "Adultos", "2024-06-03T09:00:00")


def test_transfer_log_is_capped_and_unique(store) -> None:
    log = [TransferLogItem(f"stu-{i}", "terca", "09:00", "4-6 anos", "x") for i in range(6)]
    log = transfer_student(store, MONDAY, "stu-3", "terca", "terca-0900", log)
    assert len(log) == 6
    assert log[0].student_id == "stu-3"
    assert [i.student_id for i in log].count("stu-3") == 1
    assert transfer_student(store, MONDAY, "stu-3", "domingo", "domingo-0900", log) is None


def test_class_notes_ignore_blank_content() -> None:
    notes = ClassNotes()
    assert notes.save(MONDAY, "segunda-0900", "   ") is None
    note = notes.save(MONDAY, "segunda-0900", " Treino de saltos ")
    assert note.content == "Treino de saltos"
    assert notes.get("2024-06-03", "segunda-0900") is note
    assert notes.for_date(date(2024, 6, 4)) == {}


def test_random_drops_keep_capacity_and_uniqueness(store) -> None:
    rng = random.Random(20240603)
    # Fill one slot to capacity so full-slot rejections get exercised
    crowd = store.get_assignments_for_date(MONDAY)["segunda-1830"] + [f"stu-c{i}" for i in range(7)]
    store.set_assignment(MONDAY, "segunda-1830", crowd)
    board = DailyBoard(store, MONDAY)
    expected = sorted(sid for ids in board.assignments().values() for sid in ids)
    for _ in range(2000):
        day = board.assignments()
        students = [sid for ids in day.values() for sid in ids]
        board.drop(rng.choice(students), rng.choice(students + board.slot_ids + [None, "nowhere"]))
        day = board.assignments()
        placed = [sid for ids in day.values() for sid in ids]
        assert all(len(ids) <= 12 for ids in day.values())
        assert len(placed) == len(set(placed))
        assert sorted(placed) == expected
