from __future__ import annotations

from typing import Iterable, Optional

import pygame

from quest.debug_logger import log
from quest.interaction.spec import CollectItem, InteractionRule, Outcome, ShowDialogue
from quest.world.state import WorldState


def _rule_is_usable(rule: object) -> bool:
    if not isinstance(rule, InteractionRule):
        return False
    if not isinstance(rule.target_id, str) or not rule.target_id:
        return False
    r = rule.trigger_radius
    if isinstance(r, bool) or not isinstance(r, (int, float)):
        return False
    if not r > 0:  # also rejects NaN
        return False
    return isinstance(rule.outcome, (ShowDialogue, CollectItem))


def evaluate(
    player_pos,
    rules: Optional[Iterable[InteractionRule]],
    world: WorldState,
) -> Optional[Outcome]:
    """Pick the single outcome for one interact press, or None.

    Rules are checked in order and the first one whose target is still
    in the world and strictly inside trigger_radius wins. Each rule is
    guarded by its own target, and a CollectItem rule also by its item:
    once either is retired the rule is skipped as a whole so rules
    further down still get their turn.

    Pure: reads positions, mutates nothing. Bad rule entries are skipped,
    never raised.
    """
    if player_pos is None or not rules:
        return None

    p = pygame.Vector2(player_pos)

    for rule in rules:
        if not _rule_is_usable(rule):
            log("interact", f"skipping malformed rule {rule!r}")
            continue

        target = world.position_of(rule.target_id)
        if target is None:
            continue

        # The item may be retired while its target (e.g. a chest) stays put.
        if isinstance(rule.outcome, CollectItem) and world.is_retired(rule.outcome.item_id):
            continue

        dist = p.distance_to(target)
        if dist < rule.trigger_radius:
            log(
                "interact",
                f"{rule.target_id!r} in range ({dist:.1f} < {rule.trigger_radius}) -> {rule.outcome}",
            )
            return rule.outcome

    return None
