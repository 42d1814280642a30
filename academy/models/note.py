from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ClassNote:
    slot_id: str
    date: str
    content: str
    created_at: str
