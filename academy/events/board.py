"""Kanban board for event planning with a month calendar over the same cards."""
from __future__ import annotations

import calendar
import time
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Tuple

from ..models.event import COLUMN_IDS, EventTask
from ..scheduler.reconcile import DragSession


@dataclass
class CalendarEvent:
    task: EventTask
    column_id: str


class EventsBoard:
    def __init__(self, columns: Dict[str, List[EventTask]] | None = None) -> None:
        self.columns: Dict[str, List[EventTask]] = {cid: [] for cid in COLUMN_IDS}
        for cid, tasks in (columns or {}).items():
            if cid not in self.columns:
                raise ValueError(f"Unknown column: {cid!r}")
            self.columns[cid] = list(tasks)
        self.session = DragSession()

    def task_by_id(self) -> Dict[str, EventTask]:
        return {t.id: t for tasks in self.columns.values() for t in tasks}

    def add_task(self, column_id: str, title: str, when: date, task_id: str | None = None) -> EventTask | None:
        if column_id not in self.columns:
            raise ValueError(f"Unknown column: {column_id!r}")
        title = title.strip()
        if not title:
            return None
        task = EventTask(task_id or f"evt-{int(time.time() * 1000)}", title, when.isoformat())
        self.columns[column_id] = self.columns[column_id] + [task]
        return task

    def start_drag(self, task_id: str) -> None:
        self.session.start(task_id)

    def end_drag(self, over_id: str | None) -> bool:
        ids = {cid: [t.id for t in tasks] for cid, tasks in self.columns.items()}
        writes = self.session.end(over_id, ids, COLUMN_IDS)
        if not writes:
            return False
        lookup = self.task_by_id()
        for cid, task_ids in writes.items():
            self.columns[cid] = [lookup[tid] for tid in task_ids]
        return True

    def all_events(self) -> List[CalendarEvent]:
        return [CalendarEvent(t, cid) for cid in COLUMN_IDS for t in self.columns[cid]]

    def events_by_date(self) -> Dict[str, List[CalendarEvent]]:
        out: Dict[str, List[CalendarEvent]] = {}
        for ev in self.all_events():
            out.setdefault(ev.task.date, []).append(ev)
        return out

    def events_on(self, when: date) -> List[CalendarEvent]:
        return self.events_by_date().get(when.isoformat(), [])


def month_cells(year: int, month: int) -> List[Tuple[str | None, int | None]]:
    """Monday-first calendar grid; blanks pad the first and last week."""
    cells: List[Tuple[str | None, int | None]] = []
    for week in calendar.Calendar(firstweekday=0).monthdayscalendar(year, month):
        for day in week:
            if day == 0:
                cells.append((None, None))
            else:
                cells.append((date(year, month, day).isoformat(), day))
    return cells
