from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from .serialize import pick_fields


@dataclass(frozen=True)
class InstructorSlot:
    day: str
    slot_time: str
    age_group: str


@dataclass
class Instructor:
    id: str
    name: str
    role: str = "Assistente"
    photo_url: str = ""
    phone: str = ""
    weekly_hours: int = 0
    max_hours: int = 25
    assigned_slots: List[InstructorSlot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Instructor":
        values = pick_fields(cls, data)
        values["assigned_slots"] = [
            InstructorSlot(**pick_fields(InstructorSlot, s)) for s in data.get("assigned_slots", [])
        ]
        return cls(**values)
