from __future__ import annotations

from datetime import date

import pytest

from academy.events.board import EventsBoard, month_cells
from academy.models.event import EventTask


def _board() -> EventsBoard:
    return EventsBoard({
        "ideas": [EventTask("e1", "Jam na praça", "2026-03-14"), EventTask("e2", "Workshop", "2026-03-21")],
        "planning": [EventTask("e3", "Festival", "2026-03-14")],
    })


def test_add_task_ignores_blank_title() -> None:
    board = EventsBoard()
    assert board.add_task("ideas", "   ", date(2026, 3, 1)) is None
    task = board.add_task("ideas", " Treino aberto ", date(2026, 3, 1), task_id="e9")
    assert task == EventTask("e9", "Treino aberto", "2026-03-01")
    assert board.columns["ideas"] == [task]
    with pytest.raises(ValueError):
        board.add_task("archive", "x", date(2026, 3, 1))


def test_drag_between_columns() -> None:
    board = _board()
    board.start_drag("e2")
    assert board.end_drag("e3")
    assert [t.id for t in board.columns["ideas"]] == ["e1"]
    assert [t.id for t in board.columns["planning"]] == ["e2", "e3"]
    board.start_drag("e1")
    assert board.end_drag("done")
    assert [t.id for t in board.columns["done"]] == ["e1"]


def test_drag_without_target_keeps_columns() -> None:
    board = _board()
    board.start_drag("e1")
    assert not board.end_drag(None)
    assert [t.id for t in board.columns["ideas"]] == ["e1", "e2"]


def test_calendar_groups_events_by_date() -> None:
    board = _board()
    on_14 = board.events_on(date(2026, 3, 14))
    assert [(e.task.id, e.column_id) for e in on_14] == [("e1", "ideas"), ("e3", "planning")]
    assert board.events_on(date(2026, 3, 15)) == []


def test_month_cells_pad_to_whole_weeks() -> None:
    cells = month_cells(2026, 3)
    assert len(cells) % 7 == 0
    # March 2026 starts on a Sunday
    assert cells[:6] == [(None, None)] * 6
    assert cells[6] == ("2026-03-01", 1)
    assert sum(1 for iso, _ in cells if iso) == 31
