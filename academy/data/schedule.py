from __future__ import annotations

from datetime import date
from typing import Dict, List

from ..models.assignment import CAPACITY_PER_CLASS
from ..models.slot import WEEKDAY_KEYS, ClassSlot


def weekday_key(d: date) -> str:
    # date.weekday(): Monday == 0
    return WEEKDAY_KEYS[d.weekday()]


class WeeklyTemplate:
    """Static weekly class grid plus the default roster for each slot.

    Per-date overrides live in the store; this is what a date looks like
    before anyone has touched it.
    """

    def __init__(self, schedule: Dict[str, object], weekly_roster: Dict[str, Dict[str, List[str]]]):
        self.capacity: int = int(schedule.get("capacity_per_class", CAPACITY_PER_CLASS))
        self.days: List[str] = list(schedule.get("days", WEEKDAY_KEYS))
        self.labels: Dict[str, str] = dict(schedule.get("labels", {}))
        templates = schedule.get("templates", {})
        self._slots: Dict[str, List[ClassSlot]] = {}
        for day, template_name in schedule.get("week", {}).items():
            rows = templates.get(template_name, []) if template_name else []
            slots = [ClassSlot.create(day, r["time"], r["age_group"]) for r in rows]
            self._slots[day] = sorted(slots, key=lambda s: s.time)
        self._roster = {day: dict(slots) for day, slots in weekly_roster.items()}

    def slots_for_day(self, day: str) -> List[ClassSlot]:
        return list(self._slots.get(day, []))

    def slots_for_date(self, d: date) -> List[ClassSlot]:
        return self.slots_for_day(weekday_key(d))

    def slot_ids_for_day(self, day: str) -> List[str]:
        return [s.id for s in self._slots.get(day, [])]

    def default_roster(self, day: str) -> Dict[str, List[str]]:
        base = self._roster.get(day, {})
        return {s.id: list(base.get(s.id, [])) for s in self._slots.get(day, [])}

    def find_slot(self, slot_id: str) -> ClassSlot | None:
        for slots in self._slots.values():
            for s in slots:
                if s.id == slot_id:
                    return s
        return None

    def all_slot_ids(self) -> List[str]:
        return [s.id for d in self.days for s in self._slots.get(d, [])]

    def teaching_days(self) -> List[str]:
        return [d for d in self.days if self._slots.get(d)]

    def label(self, day: str) -> str:
        return self.labels.get(day, day)
