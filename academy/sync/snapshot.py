from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

STORAGE_KEY = "parkour-vicosa-storage"


class LocalSnapshot:
    """One JSON file holding the persisted slice of the store under a fixed key."""

    def __init__(self, path: Path, key: str = STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def load(self) -> Dict[str, Any] | None:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                blob = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable snapshot %s: %s", self.path, e)
            return None
        state = blob.get(self.key) if isinstance(blob, dict) else None
        if not isinstance(state, dict):
            return None
        return state

    def save(self, state: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump({self.key: state}, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.path)
