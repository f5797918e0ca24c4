from __future__ import annotations

from typing import Dict

from quest.scenes.spec import ScenePreset

# Manual imports for now (safe + explicit).
from quest.scenes.village import SCENE as VILLAGE
from quest.scenes.village_market import SCENE as VILLAGE_MARKET


_SCENE_TABLE: Dict[str, ScenePreset] = {}


def register_scene(preset: ScenePreset) -> None:
    if not isinstance(preset.id, str) or not preset.id.strip():
        raise ValueError("ScenePreset.id must be a non-empty string")
    _SCENE_TABLE[preset.id] = preset


def get_scene(scene_id: str) -> ScenePreset:
    try:
        return _SCENE_TABLE[scene_id]
    except KeyError as e:
        known = ", ".join(sorted(_SCENE_TABLE.keys()))
        raise KeyError(f"Unknown scene_id='{scene_id}'. Known: {known}") from e


def all_scene_ids() -> tuple[str, ...]:
    return tuple(sorted(_SCENE_TABLE.keys()))


register_scene(VILLAGE)
register_scene(VILLAGE_MARKET)
