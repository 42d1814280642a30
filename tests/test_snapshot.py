from __future__ import annotations

import json
from datetime import date

import pytest

from academy.config import Settings
from academy.store.bootstrap import build_store
from academy.sync.snapshot import STORAGE_KEY, LocalSnapshot


def test_missing_snapshot_loads_none(tmp_path) -> None:
    assert LocalSnapshot(tmp_path / "state.json").load() is None


def test_snapshot_is_stored_under_fixed_key(tmp_path) -> None:
    path = tmp_path / "nested" / "state.json"
    state = {"daily_attendance": {"2024-06-03": {"stu-1": "late"}}}
    LocalSnapshot(path).save(state)
    assert json.loads(path.read_text(encoding="utf-8")) == {STORAGE_KEY: state}
    assert LocalSnapshot(path).load() == state


def test_corrupt_snapshot_is_ignored(tmp_path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    assert LocalSnapshot(path).load() is None
    path.write_text(json.dumps({"other": {}}), encoding="utf-8")
    assert LocalSnapshot(path).load() is None


@pytest.mark.parametrize(
    "state",
    [
        {"students": [{"id": "stu-x"}]},
        {"students": ["stu-x"]},
        {"daily_assignments": ["oops"]},
        {"daily_assignments": {"2024-06-03": ["stu-joao-001"]}},
        {"daily_attendance": "late"},
    ],
)
def test_malformed_snapshot_keeps_seeded_state(root, tmp_path, state) -> None:
    path = tmp_path / "state.json"
    path.write_text(json.dumps({STORAGE_KEY: {"daily_attendance": {"2024-06-03": {"stu-1": "late"}}, **state}}),
                    encoding="utf-8")
    store = build_store(root, Settings(snapshot_path=path), threaded=False)
    assert len(store.students) == 42
    assert store.daily_assignments == {}
    assert store.daily_attendance == {}
    assert store.get_assignments_for_date(date(2024, 6, 3))["segunda-0900"] == ["stu-joao-001"]
