from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List

from ..data.schedule import weekday_key
from ..models.slot import ClassSlot
from ..store.dashboard import DashboardStore


@dataclass
class SlotOccupancy:
    slot: ClassSlot
    enrolled: int
    capacity: int

    @property
    def is_full(self) -> bool:
        return self.enrolled >= self.capacity


@dataclass
class DayOccupancy:
    date: date
    weekday: str
    slots: List[SlotOccupancy] = field(default_factory=list)

    @property
    def enrolled(self) -> int:
        return sum(s.enrolled for s in self.slots)


def week_days(d: date) -> List[date]:
    start = d - timedelta(days=d.weekday())
    return [start + timedelta(days=i) for i in range(7)]


def week_occupancy(store: DashboardStore, d: date) -> List[DayOccupancy]:
    capacity = store.template.capacity
    out: List[DayOccupancy] = []
    for day in week_days(d):
        assignments = store.get_assignments_for_date(day)
        occ = DayOccupancy(day, weekday_key(day))
        for slot in store.template.slots_for_date(day):
            occ.slots.append(SlotOccupancy(slot, len(assignments.get(slot.id, [])), capacity))
        out.append(occ)
    return out
