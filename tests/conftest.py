"""Shared fixtures: headless pygame + a throwaway asset tree."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from quest import debug_logger
from quest.scene.exploration_scene import ExplorationScene, SceneConfig


class HeldKeys:
    """Stand-in for pygame.key.get_pressed(): keys[k] -> bool."""

    def __init__(self, *keys: int) -> None:
        self._held = set(keys)

    def __getitem__(self, key: int) -> bool:
        return key in self._held


# Sheet sizes match the frame grids declared in the village presets.
_ASSET_SIZES = {
    "image/bg.png": (64, 48),
    "image/player.gif": (32, 32),
    "image/dogNPC.gif": (1000, 300),
    "image/king.png": (1000, 300),
    "image/crystal.gif": (400, 300),
    "image/amulet.png": (40, 40),
}


@pytest.fixture(autouse=True)
def quiet_logs():
    debug_logger.DEBUG_ENABLED = False
    yield
    debug_logger.DEBUG_ENABLED = True


@pytest.fixture(scope="session")
def pygame_headless():
    pygame.init()
    pygame.display.set_mode((1, 1))
    yield
    pygame.quit()


@pytest.fixture
def asset_root(tmp_path, pygame_headless):
    """Writes solid-colour PNGs under the paths the presets expect.

    pygame only saves png/bmp/tga/jpg, so .gif names get PNG bytes; the
    loader sniffs content, not the extension.
    """
    for i, (rel, size) in enumerate(_ASSET_SIZES.items()):
        target = tmp_path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        surf = pygame.Surface(size)
        surf.fill((40 * i % 255, 80, 120))
        tmp_png = target.with_name(target.stem + "__tmp.png")
        pygame.image.save(surf, str(tmp_png))
        os.replace(tmp_png, target)
    return str(tmp_path)


@pytest.fixture
def make_scene(asset_root):
    scenes = []

    def _make(scene_id: str = "village", **cfg_kwargs) -> ExplorationScene:
        cfg = SceneConfig(scene_id=scene_id, asset_root=asset_root, **cfg_kwargs)
        scene = ExplorationScene(cfg)
        scenes.append(scene)
        return scene

    yield _make

    for s in scenes:
        s.teardown()


def key_down(key: int = pygame.K_SPACE) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def key_up(key: int = pygame.K_SPACE) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYUP, key=key)
