# quest/inventory/model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from quest.debug_logger import log
from quest.world.state import WorldState


@dataclass(frozen=True)
class CollectResult:
    collected: bool
    items: tuple[str, ...]


class Inventory:
    """
    Append-only, insertion-ordered list of collected display names.

    Collecting retires the item in the world, so the dispatcher stops
    offering it. A second collect of the same id is a quiet no-op.
    """

    def __init__(
        self,
        world: WorldState,
        *,
        on_change: Optional[Callable[[tuple[str, ...]], None]] = None,
    ) -> None:
        self.world = world
        self._names: list[str] = []
        self._ids: list[str] = []
        self._on_change = on_change

    @property
    def items(self) -> tuple[str, ...]:
        return tuple(self._names)

    def has(self, item_id: str) -> bool:
        return item_id in self._ids

    def __len__(self) -> int:
        return len(self._names)

    def collect(self, item_id: str, display_name: str) -> CollectResult:
        if item_id in self._ids or self.world.is_retired(item_id):
            log("inventory", f"{item_id!r} already collected; ignoring")
            return CollectResult(collected=False, items=self.items)

        self.world.retire(item_id)
        self._ids.append(item_id)
        self._names.append(display_name)
        log("inventory", f"picked up {display_name!r} -> {self._names}")

        snapshot = self.items
        if self._on_change is not None:
            self._on_change(snapshot)
        return CollectResult(collected=True, items=snapshot)
