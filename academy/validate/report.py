from __future__ import annotations

import json
from pathlib import Path
from typing import Dict


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "validation.json"
    with path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
    return path


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"range: {report.get('start')} (+{report.get('days')} days)")
    lines.append(f"violation_count: {report.get('violation_count')}")
    lines.append("violations_by_rule:")
    rules = report.get("violations_by_rule", {})
    if isinstance(rules, dict):
        for k, v in rules.items():
            lines.append(f"  - {k}: {v}")
    per_date = report.get("per_date", {})
    if isinstance(per_date, dict):
        for iso, rep in per_date.items():
            if rep.get("violation_count"):
                lines.append(f"{iso}:")
                for sid, n in rep.get("over_capacity", {}).items():
                    lines.append(f"  - over capacity {sid}: {n}")
                for sid, slots in rep.get("duplicates", {}).items():
                    lines.append(f"  - {sid} in {', '.join(slots)}")
                for sid in rep.get("unknown_students", []):
                    lines.append(f"  - unknown student {sid}")
                for sid in rep.get("unknown_slots", []):
                    lines.append(f"  - unknown slot {sid}")
    return "\n".join(lines)
