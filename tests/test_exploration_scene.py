"""Scene-level tests: movement, interact key, pick-ups, dialogue timers, teardown."""

import pygame
import pytest

from conftest import HeldKeys, key_down, key_up
from quest.dialogue.defs import PICKUP_NOTICE_ID
from quest.interaction.spec import CollectItem, ShowDialogue
from quest.scene.exploration_scene import ExplorationScene, SceneConfig


def place_player(scene: ExplorationScene, x: float, y: float) -> None:
    scene.world.player.pos.update(x, y)


def press(scene: ExplorationScene, key: int = pygame.K_SPACE) -> None:
    scene.handle_event(key_down(key))
    scene.handle_event(key_up(key))


# --- Setup ---


def test_scene_builds_world_from_preset(make_scene):
    scene = make_scene("village")

    assert set(scene.world.entities) == {"player", "villager", "king", "crystal"}
    assert scene.world.player.pos == (100, 100)
    assert set(scene.actors) == {"player", "villager", "king", "crystal"}
    assert scene.snapshot().inventory == ()
    assert not any(scene.snapshot().dialogue_visibility.values())


def test_sheet_animations_use_declared_frames(make_scene):
    scene = make_scene("village")

    villager = scene.actors["villager"]
    assert len(villager.frames) == 4
    assert villager.frames[0].get_size() == (100, 100)
    assert len(scene.actors["player"].frames) == 1

    villager.update(1 / 3)  # 3 fps -> one frame step
    assert villager.current_frame == 1


def test_missing_asset_propagates(tmp_path, pygame_headless):
    with pytest.raises((pygame.error, FileNotFoundError)):
        ExplorationScene(SceneConfig(scene_id="village", asset_root=str(tmp_path)))


# --- Movement ---


def test_arrow_keys_set_per_axis_velocity(make_scene):
    scene = make_scene("village")

    scene.update(0.5, keys=HeldKeys(pygame.K_RIGHT))
    assert scene.world.player.pos == (180, 100)

    scene.update(0.25, keys=HeldKeys(pygame.K_DOWN, pygame.K_LEFT))
    assert scene.world.player.pos == (140, 140)
    assert scene.velocity == (-160, 160)

    scene.update(0.5, keys=HeldKeys())
    assert scene.velocity == (0, 0)
    assert scene.world.player.pos == (140, 140)


def test_player_stays_inside_window(make_scene):
    scene = make_scene("village")
    scene.update(5.0, keys=HeldKeys(pygame.K_LEFT, pygame.K_UP))
    assert scene.world.player.pos == (0, 0)


def test_unclamped_player_can_leave_the_window(make_scene):
    scene = make_scene("village", clamp_to_window=False)
    scene.update(5.0, keys=HeldKeys(pygame.K_LEFT))
    assert scene.world.player.pos.x < 0
    assert scene.world.player.pos.y == 100


# --- Interact: dialogues ---


def test_space_near_villager_shows_dialogue_for_three_seconds(make_scene):
    scene = make_scene("village")
    place_player(scene, 600, 250)

    press(scene)
    assert scene.snapshot().visible_dialogues() == ["villager"]

    scene.update(2.5, keys=HeldKeys())
    assert scene.dialogue.is_visible("villager")
    scene.update(0.5, keys=HeldKeys())
    assert not scene.dialogue.is_visible("villager")
    assert scene.snapshot().visible_dialogues() == []


def test_king_dialogue_timer_restarts_on_retrigger(make_scene):
    scene = make_scene("village")
    place_player(scene, 300, 480)

    press(scene)
    scene.update(1.0, keys=HeldKeys())
    press(scene)

    scene.update(2.5, keys=HeldKeys())  # t=3.5s
    assert scene.dialogue.is_visible("king")
    scene.update(0.5, keys=HeldKeys())  # t=4.0s
    assert not scene.dialogue.is_visible("king")


def test_nothing_in_range_does_nothing(make_scene):
    scene = make_scene("village")
    outcomes = []
    scene.listen("interaction.outcome", lambda _t, data: outcomes.append(data["outcome"]))

    press(scene)

    assert outcomes == []
    assert scene.snapshot().visible_dialogues() == []


def test_held_space_fires_once_per_press(make_scene):
    scene = make_scene("village")
    place_player(scene, 600, 250)
    outcomes = []
    scene.listen("interaction.outcome", lambda _t, data: outcomes.append(data["outcome"]))

    scene.handle_event(key_down())
    scene.handle_event(key_down())  # auto-repeat, no key-up in between
    assert outcomes == [ShowDialogue("villager", 3000)]

    scene.handle_event(key_up())
    scene.handle_event(key_down())
    assert len(outcomes) == 2


def test_other_keys_do_not_interact(make_scene):
    scene = make_scene("village")
    place_player(scene, 600, 250)
    assert scene.handle_event(key_down(pygame.K_RETURN)) is False
    assert scene.snapshot().visible_dialogues() == []


# --- Interact: pick-ups ---


def test_collect_crystal_then_return_to_empty_spot(make_scene):
    scene = make_scene("village")
    inventory_events = []
    scene.listen("inventory.changed", lambda _t, data: inventory_events.append(data["items"]))

    place_player(scene, 600, 620)
    press(scene)

    assert scene.snapshot().inventory == ("Crystal",)
    assert "crystal" not in scene.actors
    assert not scene.world.is_present("crystal")
    assert scene.dialogue.is_visible(PICKUP_NOTICE_ID)

    # walk away and come back
    scene.update(1.0, keys=HeldKeys(pygame.K_UP))
    scene.update(1.0, keys=HeldKeys(pygame.K_DOWN))
    place_player(scene, 600, 620)
    assert scene.interact() is None

    assert scene.snapshot().inventory == ("Crystal",)
    assert inventory_events == [("Crystal",)]


def test_pickup_notice_hides_after_its_duration(make_scene):
    scene = make_scene("village")
    place_player(scene, 600, 600)
    press(scene)

    scene.update(1.0, keys=HeldKeys())
    assert scene.dialogue.is_visible(PICKUP_NOTICE_ID)
    scene.update(0.5, keys=HeldKeys())
    assert not scene.dialogue.is_visible(PICKUP_NOTICE_ID)


def test_market_second_item_is_reachable(make_scene):
    scene = make_scene("village_market")

    place_player(scene, 600, 600)
    assert scene.interact() == CollectItem("crystal", "Crystal")

    place_player(scene, 850, 600)
    assert scene.interact() == CollectItem("amulet", "Amulet")

    assert scene.snapshot().inventory == ("Crystal", "Amulet")


# --- Teardown ---


def test_teardown_cancels_timers_and_detaches_input(make_scene):
    scene = make_scene("village")
    seen = []
    scene.listen("dialogue.changed", lambda _t, data: seen.append(data["visibility"]))

    place_player(scene, 600, 250)
    press(scene)
    assert scene.scheduler.pending == 1

    scene.teardown()

    assert scene.torn_down
    assert scene.scheduler.pending == 0
    assert scene.snapshot().visible_dialogues() == []
    assert not scene.router.has_listeners("dialogue.changed")

    # Post-teardown input and frames are ignored.
    assert scene.handle_event(key_down()) is False
    assert scene.interact() is None
    before = scene.world.player.pos.copy()
    scene.update(1.0, keys=HeldKeys(pygame.K_RIGHT))
    assert scene.world.player.pos == before

    n = len(seen)
    scene.scheduler.advance(10_000)
    assert len(seen) == n

    scene.teardown()  # second call is a no-op


def test_teardown_only_drops_its_own_listeners(make_scene):
    scene = make_scene("village")
    outside = []
    scene.router.subscribe("scene.teardown", lambda _t, data: outside.append(data["scene_id"]))
    scene.router.subscribe("inventory.changed", lambda _t, data: outside.append(data["items"]))
    scene.listen("inventory.changed", lambda _t, data: None)

    scene.teardown()

    assert outside == ["village"]
    assert scene.router.has_listeners("inventory.changed")
    assert scene.router.has_listeners("scene.teardown")


def test_teardown_without_anything_pending(make_scene):
    scene = make_scene("village")
    scene.teardown()
    assert scene.torn_down


# --- Drawing ---


def test_draw_smoke(make_scene):
    scene = make_scene("village")
    place_player(scene, 600, 250)
    press(scene)

    screen = pygame.Surface((1024, 768))
    scene.draw(screen)

    # Overlay panel sits in the top-right corner
    assert screen.get_at((1024 - 30, 30))[:3] != (0, 0, 0)
