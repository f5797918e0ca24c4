# quest/router.py

from collections import defaultdict
from typing import Any, Callable, Dict, List


EventHandler = Callable[[str, Dict[str, Any]], None]


class EventRouter:
    """
    Synchronous topic bus between the scene and whoever draws or logs it.

    Topics used by ExplorationScene:
      "interaction.outcome", "inventory.changed",
      "dialogue.changed", "scene.teardown"

    Handlers run inline, in subscription order, on the caller's frame.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[EventHandler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: EventHandler) -> Callable[[], None]:
        """Add handler(topic, payload). Returns a callable that removes it again."""
        self._listeners[topic].append(handler)
        return lambda: self.unsubscribe(topic, handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        remaining = [h for h in self._listeners.get(topic, ()) if h is not handler]
        if remaining:
            self._listeners[topic] = remaining
        else:
            self._listeners.pop(topic, None)

    def has_listeners(self, topic: str) -> bool:
        return bool(self._listeners.get(topic))

    def emit(self, topic: str, **payload: Any) -> None:
        # Snapshot the list: a handler may unsubscribe itself mid-emit.
        for handler in tuple(self._listeners.get(topic, ())):
            handler(topic, dict(payload))
