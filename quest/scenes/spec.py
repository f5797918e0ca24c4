from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from quest.dialogue.defs import DialogueDef
from quest.interaction.spec import InteractionRule
from quest.world.state import EntityKind


@dataclass(frozen=True)
class SpriteDef:
    """One image file. frame_size set => treat it as a sprite sheet grid."""
    key: str
    path: str
    frame_size: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class AnimationDef:
    key: str
    sheet: str          # SpriteDef.key
    start: int = 0
    end: int = 0        # inclusive
    fps: float = 6.0
    repeat: int = -1    # -1 loops forever, otherwise extra plays after the first


@dataclass(frozen=True)
class EntityPlacement:
    id: str
    kind: EntityKind
    pos: Tuple[float, float]
    sprite: str                              # SpriteDef.key
    animation: Optional[str] = None          # AnimationDef.key
    display_size: Tuple[int, int] = (100, 100)


@dataclass(frozen=True)
class ScenePreset:
    """Resolved scene layout (pure authoring data, no pygame objects)."""
    id: str
    background: str                          # SpriteDef.key, stretched to the window
    sprites: Sequence[SpriteDef]
    animations: Sequence[AnimationDef]
    placements: Sequence[EntityPlacement]    # must include exactly one "player"
    rules: Sequence[InteractionRule]
    dialogues: Sequence[DialogueDef] = ()
    player_speed: float = 160.0              # px/s per axis

    # Shown after every successful pick-up (None disables)
    pickup_notice_ms: Optional[int] = 1500

    def dialogue(self, dialogue_id: str) -> Optional[DialogueDef]:
        for d in self.dialogues:
            if d.id == dialogue_id:
                return d
        return None
