from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ShowDialogue:
    """Open a dialogue overlay; it hides itself after duration_ms."""
    dialogue_id: str
    duration_ms: int = 3000


@dataclass(frozen=True)
class CollectItem:
    """Pick up an item: goes to the inventory, leaves the world."""
    item_id: str
    display_name: str


Outcome = Union[ShowDialogue, CollectItem]


@dataclass(frozen=True)
class InteractionRule:
    """One entry of a scene's interaction table (pure authoring data).

    Order matters: the dispatcher checks rules top to bottom and the
    first one in range wins.
    """

    target_id: str
    trigger_radius: float
    outcome: Outcome
