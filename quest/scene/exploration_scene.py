# quest/scene/exploration_scene.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import pygame

from quest.core.scheduler import FrameScheduler
from quest.debug_logger import log
from quest.dialogue.defs import DialogueDef, PICKUP_NOTICE_ID
from quest.dialogue.state import DialogueState
from quest.interaction.dispatcher import evaluate
from quest.interaction.spec import CollectItem, Outcome, ShowDialogue
from quest.inventory.model import Inventory
from quest.router import EventRouter, EventHandler
from quest.scene.actor import SpriteActor
from quest.scene.assets import SceneAssets
from quest.scene.snapshot import SceneSnapshot
from quest.scenes.registry import get_scene
from quest.scenes.spec import ScenePreset
from quest.ui.overlay import SceneOverlay
from quest.world.state import PLAYER_ID, WorldState


@dataclass
class SceneConfig:
    scene_id: str = "village"
    window_size: tuple[int, int] = (1024, 768)
    asset_root: str = "assets"

    interact_key: int = pygame.K_SPACE
    fps: int = 60

    # Only the latest dialogue stays up when True
    exclusive_dialogues: bool = True
    # Keep the player centre inside the window. False lets the player walk
    # off-screen, as the first village build did.
    clamp_to_window: bool = True


class ExplorationScene:
    """
    One playable screen: a player walking between NPCs and items.

    Lifecycle:
      on_load_assets() -> on_setup_scene()   (both run from __init__)
      update(dt) every frame, handle_event(e) for discrete input
      draw(screen), teardown() once at the end

    Router topics emitted:
      "interaction.outcome"  outcome=<ShowDialogue|CollectItem>
      "inventory.changed"    items=tuple[str, ...]
      "dialogue.changed"     visibility=dict[str, bool]
      "scene.teardown"       scene_id=str
    """

    def __init__(
        self,
        cfg: SceneConfig,
        *,
        preset: Optional[ScenePreset] = None,
        router: Optional[EventRouter] = None,
        assets: Optional[SceneAssets] = None,
    ) -> None:
        # -----------------------------
        # Config + preset
        # -----------------------------
        self.cfg = cfg
        self.preset = preset if preset is not None else get_scene(cfg.scene_id)
        self.router = router if router is not None else EventRouter()
        self.assets = assets if assets is not None else SceneAssets(root_dir=cfg.asset_root)

        # -----------------------------
        # Runtime state (filled by on_setup_scene)
        # -----------------------------
        self.scheduler = FrameScheduler()
        self.world = WorldState()
        self.inventory: Inventory | None = None
        self.dialogue: DialogueState | None = None
        self.dialogue_defs: Dict[str, DialogueDef] = {d.id: d for d in self.preset.dialogues}

        self.actors: Dict[str, SpriteActor] = {}
        self.velocity = pygame.Vector2(0, 0)
        self.background: pygame.Surface | None = None
        self._bg_scaled: pygame.Surface | None = None

        self.overlay = SceneOverlay()
        self._snapshot = SceneSnapshot()

        self._key_handlers: Dict[int, Callable[[], Any]] = {}
        self._keys_down: set[int] = set()
        self._unsubscribers: List[Callable[[], None]] = []
        self.torn_down = False

        self.on_load_assets()
        self.on_setup_scene()

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on_load_assets(self) -> None:
        sprites = {s.key: s for s in self.preset.sprites}

        bg = sprites.get(self.preset.background)
        if bg is None:
            raise KeyError(f"Scene {self.preset.id!r}: background sprite {self.preset.background!r} not declared")
        self.background = self.assets.image(bg.path, convert_alpha=False)

        anims = {a.key: a for a in self.preset.animations}
        for pl in self.preset.placements:
            sdef = sprites.get(pl.sprite)
            if sdef is None:
                raise KeyError(f"Scene {self.preset.id!r}: entity {pl.id!r} uses undeclared sprite {pl.sprite!r}")

            anim = anims.get(pl.animation) if pl.animation else None
            if pl.animation and anim is None:
                raise KeyError(f"Scene {self.preset.id!r}: entity {pl.id!r} uses unknown animation {pl.animation!r}")

            if anim is not None:
                sheet = sprites.get(anim.sheet, sdef)
                frames = self.assets.frame_range(sheet.path, sheet.frame_size, anim.start, anim.end)
                actor = SpriteActor(pl.id, frames, display_size=pl.display_size, fps=anim.fps, repeat=anim.repeat)
            else:
                # Still image: first cell of a sheet, or the whole file
                frames = self.assets.frame_range(sdef.path, sdef.frame_size, 0, 0)
                actor = SpriteActor(pl.id, frames, display_size=pl.display_size)

            self.actors[pl.id] = actor

        log("scene", f"{self.preset.id!r}: assets ready ({len(self.actors)} actors)")

    def on_setup_scene(self) -> None:
        players = [pl for pl in self.preset.placements if pl.kind == "player"]
        if len(players) != 1 or players[0].id != PLAYER_ID:
            raise ValueError(f"Scene {self.preset.id!r} needs exactly one placement with id/kind 'player'")

        for pl in self.preset.placements:
            self.world.spawn(pl.id, pl.kind, pl.pos)

        self.inventory = Inventory(self.world, on_change=self._on_inventory_changed)
        self.dialogue = DialogueState(
            self.scheduler,
            dialogue_ids=self.dialogue_defs.keys(),
            exclusive=self.cfg.exclusive_dialogues,
            on_change=self._on_dialogue_changed,
        )
        self._snapshot = SceneSnapshot(inventory=(), dialogue_visibility=self.dialogue.visibility())

        self._key_handlers[self.cfg.interact_key] = self.interact
        log("scene", f"{self.preset.id!r}: {len(self.world.entities)} entities, {len(self.preset.rules)} rules")

    # ------------------------------------------------------------------
    # Router helpers
    # ------------------------------------------------------------------

    def listen(self, topic: str, handler: EventHandler) -> None:
        """Subscribe on the scene's router; dropped automatically on teardown."""
        self._unsubscribers.append(self.router.subscribe(topic, handler))

    def _on_inventory_changed(self, items: tuple[str, ...]) -> None:
        self._snapshot = SceneSnapshot(inventory=items, dialogue_visibility=self._snapshot.dialogue_visibility)
        self.router.emit("inventory.changed", items=items)

    def _on_dialogue_changed(self, visibility: Dict[str, bool]) -> None:
        self._snapshot = SceneSnapshot(inventory=self._snapshot.inventory, dialogue_visibility=visibility)
        self.router.emit("dialogue.changed", visibility=dict(visibility))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Discrete input. Returns True if the event was consumed."""
        if self.torn_down:
            return False

        if event.type == pygame.KEYUP:
            self._keys_down.discard(event.key)
            return False

        if event.type != pygame.KEYDOWN:
            return False

        handler = self._key_handlers.get(event.key)
        if handler is None:
            return False

        # One fire per physical press, even with key repeat on.
        if event.key in self._keys_down:
            return True
        self._keys_down.add(event.key)

        handler()
        return True

    def interact(self) -> Optional[Outcome]:
        if self.torn_down:
            return None

        outcome = evaluate(self.world.player.pos, self.preset.rules, self.world)
        if outcome is None:
            log("interact", f"nothing in range at {tuple(self.world.player.pos)}")
            return None

        if isinstance(outcome, ShowDialogue):
            self.dialogue.show(outcome.dialogue_id, outcome.duration_ms)

        elif isinstance(outcome, CollectItem):
            result = self.inventory.collect(outcome.item_id, outcome.display_name)
            if result.collected:
                self.actors.pop(outcome.item_id, None)
                notice_ms = self.preset.pickup_notice_ms
                if notice_ms and PICKUP_NOTICE_ID in self.dialogue_defs:
                    self.dialogue.show(PICKUP_NOTICE_ID, notice_ms)

        self.router.emit("interaction.outcome", outcome=outcome)
        return outcome

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def _read_velocity(self, keys) -> pygame.Vector2:
        speed = self.preset.player_speed
        v = pygame.Vector2(0, 0)

        # Axes are independent; later keys win on the same axis.
        if keys[pygame.K_LEFT] or keys[pygame.K_a]:
            v.x = -speed
        if keys[pygame.K_RIGHT] or keys[pygame.K_d]:
            v.x = speed
        if keys[pygame.K_UP] or keys[pygame.K_w]:
            v.y = -speed
        if keys[pygame.K_DOWN] or keys[pygame.K_s]:
            v.y = speed
        return v

    def _clamp_player_to_window(self) -> None:
        w, h = self.cfg.window_size
        pos = self.world.player.pos
        pos.x = max(0.0, min(pos.x, float(w)))
        pos.y = max(0.0, min(pos.y, float(h)))

    def update(self, dt: float, keys=None) -> None:
        if self.torn_down:
            return

        if keys is None:
            keys = pygame.key.get_pressed()

        self.velocity = self._read_velocity(keys)
        self.world.player.pos += self.velocity * dt
        if self.cfg.clamp_to_window:
            self._clamp_player_to_window()

        for actor in self.actors.values():
            actor.update(dt)

        self.scheduler.advance(dt * 1000.0)

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def snapshot(self) -> SceneSnapshot:
        return self._snapshot

    def draw(self, screen: pygame.Surface) -> None:
        size = screen.get_size()
        if self.background is not None:
            if self._bg_scaled is None or self._bg_scaled.get_size() != size:
                self._bg_scaled = pygame.transform.scale(self.background, size)
            screen.blit(self._bg_scaled, (0, 0))
        else:
            screen.fill((0, 0, 0))

        # Back-to-front by y
        for ent in sorted(self.world.entities.values(), key=lambda e: e.pos.y):
            actor = self.actors.get(ent.id)
            if actor is not None:
                actor.draw(screen, ent.pos)

        self.overlay.draw(screen, self._snapshot, self.dialogue_defs)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def teardown(self) -> None:
        """Cancel timers, detach input + listeners. Safe to call twice."""
        if self.torn_down:
            return

        if self.dialogue is not None:
            self.dialogue.teardown()
        self.scheduler.cancel_all()

        self._key_handlers.clear()
        self._keys_down.clear()

        self.router.emit("scene.teardown", scene_id=self.preset.id)
        for remove in self._unsubscribers:
            remove()
        self._unsubscribers.clear()

        self.torn_down = True
        log("scene", f"{self.preset.id!r}: torn down")
