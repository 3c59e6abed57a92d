import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

REFUND_SUCCEEDED = "refund.succeeded"


class EventBus:
    """Synchronous publish/subscribe keyed by event name."""

    def __init__(self):
        self._subscribers: dict[str, list[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, name: str, callback: Callable[[Any], None]) -> None:
        self._subscribers[name].append(callback)

    def unsubscribe(self, name: str, callback: Callable[[Any], None]) -> None:
        if callback in self._subscribers.get(name, []):
            self._subscribers[name].remove(callback)

    def emit(self, name: str, payload: Any = None) -> int:
        """Call every subscriber of `name` in subscription order. Returns how many were called."""
        callbacks = list(self._subscribers.get(name, []))
        logger.debug("Emitting %s to %d subscriber(s)", name, len(callbacks))
        for callback in callbacks:
            callback(payload)
        return len(callbacks)
