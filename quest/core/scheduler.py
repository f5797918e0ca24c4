# quest/core/scheduler.py
from __future__ import annotations

import heapq
import itertools
from typing import Callable, Optional

from quest.debug_logger import log


class TimerHandle:
    """Handle for one deferred callback. cancel() is always safe."""

    __slots__ = ("due_ms", "label", "_callback", "_cancelled", "_fired")

    def __init__(self, due_ms: float, callback: Callable[[], None], label: str = "") -> None:
        self.due_ms = due_ms
        self.label = label
        self._callback: Optional[Callable[[], None]] = callback
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        if not self.active:
            return
        self._cancelled = True
        self._callback = None  # drop closure refs (scene, state)

    def _run(self) -> None:
        cb = self._callback
        self._fired = True
        self._callback = None
        if cb is not None:
            cb()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else ("fired" if self._fired else "pending")
        return f"TimerHandle({self.label!r}, due={self.due_ms:.1f}ms, {state})"


class FrameScheduler:
    """Cancellable deferred callbacks on the frame clock.

    No threads, no wall time: the owner calls advance(dt_ms) from its
    per-frame update and due callbacks run inline, in due-time order
    (ties keep scheduling order).
    """

    def __init__(self) -> None:
        self._now_ms: float = 0.0
        self._heap: list[tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if h.active)

    def call_later(self, delay_ms: float, callback: Callable[[], None], *, label: str = "") -> TimerHandle:
        delay_ms = max(0.0, float(delay_ms))
        handle = TimerHandle(self._now_ms + delay_ms, callback, label)
        heapq.heappush(self._heap, (handle.due_ms, next(self._seq), handle))
        log("timer", f"scheduled {label or 'timer'} at {handle.due_ms:.1f}ms (now={self._now_ms:.1f}ms)")
        return handle

    def advance(self, dt_ms: float) -> int:
        """Move the clock forward and run everything now due. Returns fired count."""
        if dt_ms > 0:
            self._now_ms += float(dt_ms)

        fired = 0
        while self._heap and self._heap[0][0] <= self._now_ms:
            _, _, handle = heapq.heappop(self._heap)
            if not handle.active:
                continue
            log("timer", f"firing {handle.label or 'timer'} at {self._now_ms:.1f}ms")
            handle._run()
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()
