"""Drag-and-drop reconciliation over ordered containers.

A container is a class slot (daily roster) or a kanban column (events board).
Reconciliation only computes the lists to write back; callers decide how to
store them.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

logger = logging.getLogger(__name__)

Containers = Dict[str, List[str]]


def find_container(item_id: str, containers: Containers, container_ids: Sequence[str]) -> str | None:
    if item_id in container_ids:
        return item_id
    for cid in container_ids:
        if item_id in containers.get(cid, []):
            return cid
    return None


def array_move(items: List[str], old_index: int, new_index: int) -> List[str]:
    moved = list(items)
    item = moved.pop(old_index)
    moved.insert(new_index, item)
    return moved


def reconcile_drop(
    containers: Containers,
    container_ids: Sequence[str],
    active_id: str,
    over_id: str | None,
    capacity: int | None = None,
) -> Containers:
    """Return the container lists changed by dropping ``active_id`` on ``over_id``.

    An empty result means the drop is ignored: no target, an unresolvable
    container, an item that vanished, or a full target container.
    """
    if not over_id:
        return {}
    source = find_container(active_id, containers, container_ids)
    target = find_container(over_id, containers, container_ids)
    if source is None or target is None:
        logger.debug("Drop ignored: unresolved container for %s -> %s", active_id, over_id)
        return {}

    if source == target:
        items = list(containers.get(source, []))
        if active_id not in items:
            return {}
        old_index = items.index(active_id)
        if over_id == target:
            new_index = len(items) - 1
        elif over_id in items:
            new_index = items.index(over_id)
        else:
            return {}
        return {source: array_move(items, old_index, new_index)}

    source_items = list(containers.get(source, []))
    target_items = list(containers.get(target, []))
    if capacity is not None and len(target_items) >= capacity:
        logger.debug("Drop ignored: %s is full (%d/%d)", target, len(target_items), capacity)
        return {}
    if active_id not in source_items:
        return {}
    source_items.remove(active_id)
    if over_id != target and over_id in target_items:
        target_items.insert(target_items.index(over_id), active_id)
    else:
        target_items.append(active_id)
    return {source: source_items, target: target_items}


class DragSession:
    """Tracks the item under the pointer between drag start and drag end."""

    def __init__(self) -> None:
        self.active_id: str | None = None

    def start(self, active_id: str) -> None:
        self.active_id = active_id

    def cancel(self) -> None:
        self.active_id = None

    def end(
        self,
        over_id: str | None,
        containers: Containers,
        container_ids: Sequence[str],
        capacity: int | None = None,
    ) -> Containers:
        active = self.active_id
        self.active_id = None
        if active is None:
            return {}
        return reconcile_drop(containers, container_ids, active, over_id, capacity)
