from __future__ import annotations

from quest.interaction.spec import CollectItem, InteractionRule
from quest.scenes import village
from quest.scenes.spec import EntityPlacement, ScenePreset, SpriteDef


# Same village, plus a market stall with a second pick-up. Each item rule
# guards on its own target so the amulet stays reachable once the crystal
# is gone.

SPRITES = village.SPRITES + (
    SpriteDef("amulet", "image/amulet.png"),
)

PLACEMENTS = village.PLACEMENTS + (
    EntityPlacement("amulet", "item", (850, 600), sprite="amulet"),
)

RULES = (
    village.RULES[0],
    village.RULES[1],
    InteractionRule("amulet", 100, CollectItem("amulet", "Amulet")),
    village.RULES[2],
)

SCENE = ScenePreset(
    id="village_market",
    background="bg",
    sprites=SPRITES,
    animations=village.ANIMATIONS,
    placements=PLACEMENTS,
    rules=RULES,
    dialogues=village.DIALOGUES,
)
