from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List

from ..store.dashboard import DashboardStore


def validate_day(
    assignments: Dict[str, List[str]],
    capacity: int,
    known_students: Iterable[str] | None = None,
    known_slots: Iterable[str] | None = None,
) -> Dict[str, object]:
    report: Dict[str, object] = {}

    over_capacity = {sid: len(ids) for sid, ids in assignments.items() if len(ids) > capacity}
    report["over_capacity"] = over_capacity

    # A student may sit in at most one slot per date; repeats inside one slot count too
    placements: Dict[str, List[str]] = defaultdict(list)
    for slot_id, ids in assignments.items():
        for sid in ids:
            placements[sid].append(slot_id)
    duplicates = {sid: slots for sid, slots in placements.items() if len(slots) > 1}
    report["duplicates"] = duplicates

    unknown_students: List[str] = []
    if known_students is not None:
        known = set(known_students)
        unknown_students = sorted(sid for sid in placements if sid not in known)
    report["unknown_students"] = unknown_students

    unknown_slots: List[str] = []
    if known_slots is not None:
        slots = set(known_slots)
        unknown_slots = sorted(sid for sid in assignments if sid not in slots)
    report["unknown_slots"] = unknown_slots

    report["violation_count"] = (
        len(over_capacity) + len(duplicates) + len(unknown_students) + len(unknown_slots)
    )
    return report


def validate_range(store: DashboardStore, start: date, days: int = 7) -> Dict[str, object]:
    known_students = [s.id for s in store.students]
    per_date: Dict[str, Dict[str, object]] = {}
    totals: Counter = Counter()
    for i in range(days):
        d = start + timedelta(days=i)
        slot_ids = [s.id for s in store.template.slots_for_date(d)]
        rep = validate_day(store.get_assignments_for_date(d), store.template.capacity, known_students, slot_ids)
        per_date[d.isoformat()] = rep
        for key in ("over_capacity", "duplicates", "unknown_students", "unknown_slots"):
            totals[key] += len(rep[key])  # type: ignore[arg-type]
    return {
        "start": start.isoformat(),
        "days": days,
        "violation_count": sum(totals.values()),
        "violations_by_rule": dict(totals),
        "per_date": per_date,
    }
