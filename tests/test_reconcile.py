from __future__ import annotations

from academy.scheduler.reconcile import DragSession, array_move, find_container, reconcile_drop

IDS = ["a", "b"]


def _containers() -> dict:
    return {"a": ["s1", "s2", "s3"], "b": ["s4"]}


def test_find_container() -> None:
    c = _containers()
    assert find_container("a", c, IDS) == "a"
    assert find_container("s4", c, IDS) == "b"
    assert find_container("ghost", c, IDS) is None


def test_array_move_does_not_mutate() -> None:
    items = ["x", "y", "z"]
    assert array_move(items, 0, 2) == ["y", "z", "x"]
    assert items == ["x", "y", "z"]


def test_reorder_within_container() -> None:
    assert reconcile_drop(_containers(), IDS, "s3", "s1") == {"a": ["s3", "s1", "s2"]}


def test_drop_on_own_container_moves_to_end() -> None:
    assert reconcile_drop(_containers(), IDS, "s1", "a") == {"a": ["s2", "s3", "s1"]}


def test_cross_container_inserts_before_target_item() -> None:
    writes = reconcile_drop(_containers(), IDS, "s2", "s4")
    assert writes == {"a": ["s1", "s3"], "b": ["s2", "s4"]}


def test_cross_container_onto_container_appends() -> None:
    writes = reconcile_drop(_containers(), IDS, "s1", "b")
    assert writes == {"a": ["s2", "s3"], "b": ["s4", "s1"]}


def test_full_target_rejects_cross_move() -> None:
    containers = {"a": ["s1"], "b": [f"t{i}" for i in range(12)]}
    assert reconcile_drop(containers, IDS, "s1", "b", capacity=12) == {}
    assert reconcile_drop(containers, IDS, "s1", "t0", capacity=12) == {}
    assert containers["a"] == ["s1"]


def test_full_container_still_reorders() -> None:
    full = [f"t{i}" for i in range(12)]
    writes = reconcile_drop({"a": [], "b": full}, IDS, "t11", "t0", capacity=12)
    assert writes["b"][0] == "t11"
    assert len(writes["b"]) == 12


def test_malformed_drops_are_ignored() -> None:
    c = _containers()
    assert reconcile_drop(c, IDS, "s1", None) == {}
    assert reconcile_drop(c, IDS, "s1", "nowhere") == {}
    assert reconcile_drop(c, IDS, "ghost", "b") == {}


def test_drag_session_clears_after_end() -> None:
    session = DragSession()
    assert session.end("b", _containers(), IDS) == {}
    session.start("s1")
    assert session.end("b", _containers(), IDS) == {"a": ["s2", "s3"], "b": ["s4", "s1"]}
    assert session.active_id is None
    session.start("s1")
    session.cancel()
    assert session.end("b", _containers(), IDS) == {}
