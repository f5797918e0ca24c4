from __future__ import annotations

from typing import List, Sequence, Tuple

import pygame


class SpriteActor:
    """Draws one entity: scaled frames, optional looped animation.

    Position is read from the entity every draw, so whoever owns the
    entity (the scene) is the only one moving it.
    """

    def __init__(
        self,
        entity_id: str,
        frames: Sequence[pygame.Surface],
        *,
        display_size: Tuple[int, int],
        fps: float = 0.0,
        repeat: int = -1,
    ) -> None:
        if not frames:
            raise ValueError(f"SpriteActor {entity_id!r} needs at least one frame")

        self.entity_id = entity_id
        self.frames: List[pygame.Surface] = [
            pygame.transform.smoothscale(f, display_size)
            if f.get_bitsize() in (24, 32) else pygame.transform.scale(f, display_size)
            for f in frames
        ]
        self.frame_duration = (1.0 / fps) if fps > 0 else 0.0
        self.repeat = repeat

        self.current_time = 0.0
        self.current_frame = 0
        self._plays = 0
        self.playing = len(self.frames) > 1 and self.frame_duration > 0

    def update(self, dt: float) -> None:
        if not self.playing:
            return
        self.current_time += dt
        while self.current_time >= self.frame_duration:
            self.current_time -= self.frame_duration
            nxt = self.current_frame + 1
            if nxt >= len(self.frames):
                self._plays += 1
                if self.repeat >= 0 and self._plays > self.repeat:
                    self.playing = False
                    return
                nxt = 0
            self.current_frame = nxt

    def get_frame(self) -> pygame.Surface:
        return self.frames[self.current_frame]

    def draw(self, surface: pygame.Surface, pos: pygame.Vector2) -> None:
        img = self.get_frame()
        rect = img.get_rect(center=(int(pos.x), int(pos.y)))
        surface.blit(img, rect)
