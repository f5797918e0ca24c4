# quest/dialogue/state.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from quest.core.scheduler import FrameScheduler, TimerHandle
from quest.debug_logger import log


class DialogueState:
    """Per-id Hidden/Visible machine with auto-hide timers.

    show(id, ms) makes a dialogue visible and schedules its hide on the
    frame scheduler. Showing it again before the hide fires cancels the
    pending hide and starts a fresh one, so the last trigger decides.

    With exclusive=True only the latest dialogue stays up: showing one
    hides the rest. exclusive=False keeps every id independent.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        dialogue_ids: Iterable[str] = (),
        *,
        exclusive: bool = True,
        on_change: Optional[Callable[[Dict[str, bool]], None]] = None,
    ) -> None:
        self._scheduler = scheduler
        self._visible: Dict[str, bool] = {d: False for d in dialogue_ids}
        self._timers: Dict[str, TimerHandle] = {}
        self.exclusive = exclusive
        self._on_change = on_change

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_visible(self, dialogue_id: str) -> bool:
        return self._visible.get(dialogue_id, False)

    def visibility(self) -> Dict[str, bool]:
        return dict(self._visible)

    def visible_ids(self) -> list[str]:
        return [d for d, v in self._visible.items() if v]

    def hide_due_ms(self, dialogue_id: str) -> Optional[float]:
        h = self._timers.get(dialogue_id)
        return h.due_ms if h is not None and h.active else None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def show(self, dialogue_id: str, duration_ms: float) -> None:
        if not isinstance(dialogue_id, str) or not dialogue_id:
            raise ValueError("dialogue_id must be a non-empty string")
        if duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive, got {duration_ms!r}")

        changed = False
        if self.exclusive:
            for other in self.visible_ids():
                if other != dialogue_id:
                    changed |= self._set_hidden(other)

        self._cancel_timer(dialogue_id)
        if not self._visible.get(dialogue_id, False):
            self._visible[dialogue_id] = True
            changed = True

        self._timers[dialogue_id] = self._scheduler.call_later(
            duration_ms,
            lambda: self._expire(dialogue_id),
            label=f"hide:{dialogue_id}",
        )
        log("dialogue", f"show {dialogue_id!r} for {duration_ms}ms")

        if changed:
            self._notify()

    def hide(self, dialogue_id: str) -> None:
        if self._set_hidden(dialogue_id):
            self._notify()

    def teardown(self) -> None:
        """Cancel every pending hide and drop to all-hidden. Always safe."""
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()

        changed = False
        for d in self.visible_ids():
            self._visible[d] = False
            changed = True
        if changed:
            log("dialogue", "teardown: all dialogues hidden")
            self._notify()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _expire(self, dialogue_id: str) -> None:
        self._timers.pop(dialogue_id, None)
        if self._visible.get(dialogue_id, False):
            self._visible[dialogue_id] = False
            log("dialogue", f"auto-hide {dialogue_id!r}")
            self._notify()

    def _cancel_timer(self, dialogue_id: str) -> None:
        handle = self._timers.pop(dialogue_id, None)
        if handle is not None:
            handle.cancel()

    def _set_hidden(self, dialogue_id: str) -> bool:
        self._cancel_timer(dialogue_id)
        if self._visible.get(dialogue_id, False):
            self._visible[dialogue_id] = False
            return True
        return False

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.visibility())
