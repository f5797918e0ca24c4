from __future__ import annotations

from quest.dialogue.defs import DialogueDef, PICKUP_NOTICE_ID
from quest.interaction.spec import CollectItem, InteractionRule, ShowDialogue
from quest.scenes.spec import AnimationDef, EntityPlacement, ScenePreset, SpriteDef


SPRITES = (
    SpriteDef("bg", "image/bg.png"),
    SpriteDef("player", "image/player.gif"),
    SpriteDef("villager", "image/dogNPC.gif", frame_size=(250, 300)),
    SpriteDef("king", "image/king.png", frame_size=(250, 300)),
    SpriteDef("crystal", "image/crystal.gif", frame_size=(100, 300)),
)

ANIMATIONS = (
    AnimationDef("villager_idle", sheet="villager", start=0, end=3, fps=3),
    AnimationDef("king_idle", sheet="king", start=0, end=3, fps=3),
    AnimationDef("crystal_spin", sheet="crystal", start=0, end=3, fps=6),
)

DIALOGUES = (
    DialogueDef("villager", '"Hi there! Welcome to our world."', style="dark"),
    DialogueDef("king", '"Find me a crystal and I will reward you as the new king!"', style="light"),
    DialogueDef(PICKUP_NOTICE_ID, "You picked up the item!", style="dark"),
)

PLACEMENTS = (
    EntityPlacement("player", "player", (100, 100), sprite="player"),
    EntityPlacement("villager", "npc", (600, 200), sprite="villager", animation="villager_idle"),
    EntityPlacement("king", "npc", (300, 500), sprite="king", animation="king_idle"),
    EntityPlacement("crystal", "item", (600, 600), sprite="crystal", animation="crystal_spin"),
)

# Priority order: villager, then the crystal, then the king.
RULES = (
    InteractionRule("villager", 100, ShowDialogue("villager", 3000)),
    InteractionRule("crystal", 100, CollectItem("crystal", "Crystal")),
    InteractionRule("king", 50, ShowDialogue("king", 3000)),
)

SCENE = ScenePreset(
    id="village",
    background="bg",
    sprites=SPRITES,
    animations=ANIMATIONS,
    placements=PLACEMENTS,
    rules=RULES,
    dialogues=DIALOGUES,
)
