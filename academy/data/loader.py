from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List


@dataclass
class LoadedData:
    schedule: Dict[str, Any]
    weekly_roster: Dict[str, Dict[str, List[str]]]
    students: List[Dict[str, Any]]
    instructors: List[Dict[str, Any]]
    skills: Dict[str, Any]


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_data(root: Path) -> LoadedData:
    data_dir = root / "data"
    return LoadedData(
        schedule=load_json(data_dir / "schedule.json"),
        weekly_roster=load_json(data_dir / "weekly_roster.json"),
        students=load_json(data_dir / "students.json"),
        instructors=load_json(data_dir / "instructors.json"),
        skills=load_json(data_dir / "skills.json"),
    )
