from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List

from ..scheduler.weekly import week_occupancy
from ..store.dashboard import DashboardStore

ROSTER_HEADER = "Date,Slot,Time,AgeGroup,StudentId,Student,Attendance"
OCCUPANCY_HEADER = "Date,Weekday,Slot,Time,AgeGroup,Enrolled,Capacity"


def _cell(value: str) -> str:
    if "," in value or '"' in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def roster_csv(store: DashboardStore, d: date) -> str:
    lines: List[str] = [ROSTER_HEADER]
    iso = d.isoformat()
    assignments = store.get_assignments_for_date(d)
    attendance = store.get_attendance_for_date(d)
    names = {s.id: s.name for s in store.students}
    for slot in store.template.slots_for_date(d):
        ids = assignments.get(slot.id, [])
        if not ids:
            # Keep empty classes visible
            lines.append(f"{iso},{slot.id},{slot.time},{slot.age_group},,,")
            continue
        for sid in ids:
            name = _cell(names.get(sid, ""))
            lines.append(f"{iso},{slot.id},{slot.time},{slot.age_group},{sid},{name},{attendance.get(sid, 'none')}")
    return "\n".join(lines) + "\n"


def occupancy_csv(store: DashboardStore, d: date) -> str:
    lines: List[str] = [OCCUPANCY_HEADER]
    for day in week_occupancy(store, d):
        for occ in day.slots:
            s = occ.slot
            lines.append(f"{day.date.isoformat()},{day.weekday},{s.id},{s.time},{s.age_group},{occ.enrolled},{occ.capacity}")
    return "\n".join(lines) + "\n"


def write_csv(text: str, outputs_dir: Path, name: str) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / name
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
    return path
