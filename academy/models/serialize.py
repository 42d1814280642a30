from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict


def pick_fields(cls: type, data: Dict[str, Any]) -> Dict[str, Any]:
    # Drop keys the dataclass does not declare; stored payloads may be older or newer
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}
