from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .serialize import pick_fields


COLUMN_IDS = ["ideas", "planning", "promoting", "done"]
COLUMN_TITLES = {
    "ideas": "Ideias",
    "planning": "Planejando",
    "promoting": "Divulgando",
    "done": "Concluído",
}


@dataclass
class EventTask:
    id: str
    title: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventTask":
        return cls(**pick_fields(cls, data))
