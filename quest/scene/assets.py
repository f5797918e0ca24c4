from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import pygame

from quest.debug_logger import log


@dataclass
class SceneAssets:
    """
    Simple surface cache. This is deliberately tiny for now.
    Scenes and overlays should NEVER call pygame.image.load directly.
    """
    root_dir: str = "assets"

    _images: Dict[str, pygame.Surface] = None
    _frames: Dict[Tuple[str, Tuple[int, int]], List[pygame.Surface]] = None

    def __post_init__(self) -> None:
        if self._images is None:
            self._images = {}
        if self._frames is None:
            self._frames = {}

    def _resolve(self, path: str) -> str:
        # If a relative path is provided, resolve it under root_dir
        if self.root_dir and not os.path.isabs(path):
            return os.path.join(self.root_dir, path)
        return path

    def image(self, path: str, *, convert_alpha: bool = True) -> pygame.Surface:
        key = path
        if key in self._images:
            return self._images[key]

        real = self._resolve(path)
        surf = pygame.image.load(real)
        if pygame.display.get_surface() is not None:
            surf = surf.convert_alpha() if convert_alpha else surf.convert()

        self._images[key] = surf
        log("scene", f"loaded {real!r} {surf.get_size()}")
        return surf

    def sheet_frames(self, path: str, frame_size: Tuple[int, int]) -> List[pygame.Surface]:
        """Slice a sprite sheet into a row-major list of frames.

        Partial cells at the right/bottom edge are dropped. A sheet smaller
        than one cell comes back as a single frame (the whole image).
        """
        key = (path, frame_size)
        if key in self._frames:
            return self._frames[key]

        sheet = self.image(path)
        fw, fh = frame_size
        sw, sh = sheet.get_size()

        frames: List[pygame.Surface] = []
        if fw > 0 and fh > 0:
            for y in range(0, sh - fh + 1, fh):
                for x in range(0, sw - fw + 1, fw):
                    frames.append(sheet.subsurface(pygame.Rect(x, y, fw, fh)))
        if not frames:
            frames = [sheet]

        self._frames[key] = frames
        return frames

    def frame_range(
        self,
        path: str,
        frame_size: Optional[Tuple[int, int]],
        start: int,
        end: int,
    ) -> List[pygame.Surface]:
        """Frames start..end (inclusive), clamped to what the sheet holds."""
        if frame_size is None:
            return [self.image(path)]
        frames = self.sheet_frames(path, frame_size)
        lo = max(0, start)
        hi = min(len(frames) - 1, end)
        if lo > hi:
            return [frames[min(lo, len(frames) - 1)]]
        return frames[lo:hi + 1]
