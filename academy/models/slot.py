from __future__ import annotations

from dataclasses import dataclass


WEEKDAY_KEYS = ["segunda", "terca", "quarta", "quinta", "sexta", "sabado", "domingo"]
AGE_GROUPS = ["4-6 anos", "7-12 anos", "Adultos", "Teens/Adultos"]


def build_slot_id(day: str, time: str) -> str:
    return f"{day}-{time.replace(':', '')}"


@dataclass(frozen=True)
class ClassSlot:
    id: str
    day: str
    time: str
    age_group: str

    @classmethod
    def create(cls, day: str, time: str, age_group: str) -> "ClassSlot":
        return cls(build_slot_id(day, time), day, time, age_group)

    @property
    def label(self) -> str:
        return f"{self.time} ({self.age_group})"
