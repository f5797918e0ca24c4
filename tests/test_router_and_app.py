"""Event router basics and the dev harness argument parser."""

import argparse

import pygame
import pytest

from quest import debug_logger
from quest.app import _parse_size, build_arg_parser, main
from quest.scene.exploration_scene import ExplorationScene
from quest.router import EventRouter


def test_emit_reaches_subscribers_in_order():
    router = EventRouter()
    calls = []
    router.subscribe("inventory.changed", lambda t, d: calls.append(("a", t, d["items"])))
    router.subscribe("inventory.changed", lambda t, d: calls.append(("b", t, d["items"])))

    router.emit("inventory.changed", items=("Crystal",))

    assert calls == [
        ("a", "inventory.changed", ("Crystal",)),
        ("b", "inventory.changed", ("Crystal",)),
    ]


def test_unsubscribe_and_self_removal_during_emit():
    router = EventRouter()
    calls = []

    def once(topic, data):
        calls.append("once")
        router.unsubscribe(topic, once)

    router.subscribe("t", once)
    router.subscribe("t", lambda t, d: calls.append("always"))

    router.emit("t")
    router.emit("t")

    assert calls == ["once", "always", "always"]


def test_subscribe_returns_a_remover_for_that_handler_only():
    router = EventRouter()
    calls = []
    remove = router.subscribe("a", lambda t, d: calls.append("first"))
    router.subscribe("a", lambda t, d: calls.append("second"))

    remove()
    remove()  # already gone
    router.emit("a")
    assert calls == ["second"]
    assert router.has_listeners("a")


def test_unsubscribe_unknown_is_harmless():
    router = EventRouter()
    router.unsubscribe("nope", lambda t, d: None)
    assert not router.has_listeners("nope")


def test_parse_size():
    assert _parse_size("800x600") == (800, 600)
    with pytest.raises(argparse.ArgumentTypeError):
        _parse_size("big")


def test_arg_parser_defaults_and_scene_choices():
    args = build_arg_parser().parse_args([])
    assert args.scene == "village"
    assert args.window == (1024, 768)

    args = build_arg_parser().parse_args(["--scene", "village_market", "--debug", "timer"])
    assert args.scene == "village_market"
    assert args.debug == ["timer"]

    with pytest.raises(SystemExit):
        build_arg_parser().parse_args(["--scene", "atlantis"])


def test_log_respects_categories(capsys):
    debug_logger.DEBUG_ENABLED = True
    saved = set(debug_logger.ENABLED_CATEGORIES)
    try:
        debug_logger.set_categories({"inventory"})
        debug_logger.log("inventory", "picked up 'Crystal'")
        debug_logger.log("timer", "hidden")
    finally:
        debug_logger.set_categories(saved)

    out = capsys.readouterr().out
    assert "[QUEST INVENTORY] picked up 'Crystal'" in out
    assert "hidden" not in out


def test_enable_and_disable_single_categories(capsys):
    debug_logger.DEBUG_ENABLED = True
    saved = set(debug_logger.ENABLED_CATEGORIES)
    try:
        debug_logger.set_categories(set())
        debug_logger.enable_categories("timer", "dialogue")
        debug_logger.disable_categories("dialogue", "scene")
        debug_logger.log("timer", "fired")
        debug_logger.log("dialogue", "shown")
        assert debug_logger.ENABLED_CATEGORIES == {"timer"}
    finally:
        debug_logger.set_categories(saved)

    out = capsys.readouterr().out
    assert "[QUEST TIMER] fired" in out
    assert "shown" not in out


def test_main_tears_scene_down_when_the_loop_raises(asset_root, monkeypatch):
    torn_down = []
    real_teardown = ExplorationScene.teardown

    def failing_update(self, dt, keys=None):
        raise RuntimeError("frame blew up")

    def recording_teardown(self):
        torn_down.append(self.preset.id)
        real_teardown(self)

    monkeypatch.setattr(ExplorationScene, "update", failing_update)
    monkeypatch.setattr(ExplorationScene, "teardown", recording_teardown)
    # keep the shared headless display alive for the rest of the session
    monkeypatch.setattr(pygame, "quit", lambda: None)

    with pytest.raises(RuntimeError):
        main(["--assets", asset_root, "--window", "320x240", "--quiet"])

    assert torn_down == ["village"]
