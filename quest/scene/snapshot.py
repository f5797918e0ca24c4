from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class SceneSnapshot:
    """Read-only view handed to the overlay (and anything else drawing UI)."""
    inventory: tuple[str, ...] = ()
    dialogue_visibility: Dict[str, bool] = field(default_factory=dict)

    def visible_dialogues(self) -> list[str]:
        return [d for d, v in self.dialogue_visibility.items() if v]
