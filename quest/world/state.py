from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional

import pygame

from quest.debug_logger import log


EntityKind = Literal["player", "npc", "item"]

PLAYER_ID = "player"


@dataclass
class Entity:
    id: str
    kind: EntityKind
    pos: pygame.Vector2


@dataclass
class WorldState:
    """
    Entity records for one scene, indexed by id.

    Laws:
      - Positions are written by the scene only (player from input).
      - Retired ids never come back; retire() is idempotent.
    """

    entities: Dict[str, Entity] = field(default_factory=dict)
    retired: set[str] = field(default_factory=set)

    def add(self, entity: Entity) -> Entity:
        if not isinstance(entity.id, str) or not entity.id.strip():
            raise ValueError("Entity.id must be a non-empty string")
        if entity.id in self.entities:
            raise ValueError(f"Duplicate entity id {entity.id!r}")
        if entity.id in self.retired:
            raise ValueError(f"Entity id {entity.id!r} was already retired")
        self.entities[entity.id] = entity
        return entity

    def spawn(self, entity_id: str, kind: EntityKind, pos: tuple[float, float]) -> Entity:
        return self.add(Entity(id=entity_id, kind=kind, pos=pygame.Vector2(pos)))

    def position_of(self, entity_id: str) -> Optional[pygame.Vector2]:
        ent = self.entities.get(entity_id)
        return None if ent is None else ent.pos

    def is_present(self, entity_id: str) -> bool:
        return entity_id in self.entities

    def is_retired(self, entity_id: str) -> bool:
        return entity_id in self.retired

    def retire(self, entity_id: str) -> bool:
        """Remove an entity for good. Returns False if it was already retired."""
        if entity_id in self.retired:
            return False
        self.retired.add(entity_id)
        self.entities.pop(entity_id, None)
        log("scene", f"retired {entity_id!r}")
        return True

    @property
    def player(self) -> Entity:
        try:
            return self.entities[PLAYER_ID]
        except KeyError as e:
            raise KeyError("World has no player entity; call spawn('player', ...) first") from e
