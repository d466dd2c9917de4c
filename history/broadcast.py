"""
Payload-free change notification for the calculation history.

Subscribers are told that the persisted history may have changed and are expected to
re-read it themselves.
"""

import logging
from typing import Callable, List

logger = logging.getLogger("fluidcalc-mcp.broadcast")

Callback = Callable[[], None]


class HistoryBroadcast:
    """A named publish/subscribe channel with no payload."""

    def __init__(self, name: str = "historyUpdated"):
        self.name = name
        self._subscribers: List[Callback] = []

    def subscribe(self, callback: Callback) -> Callable[[], None]:
        """Add a subscriber and return a function that removes it again."""
        self._subscribers.append(callback)

        def unsubscribe():
            self.unsubscribe(callback)

        return unsubscribe

    def unsubscribe(self, callback: Callback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self) -> None:
        """Notify every subscriber; one failing subscriber does not stop the others."""
        for callback in list(self._subscribers):
            try:
                callback()
            except Exception as e:
                logger.error(f"Subscriber of '{self.name}' failed: {e}", exc_info=True)

    def __len__(self) -> int:
        return len(self._subscribers)


# Process-wide channel used by the global append entry point
history_updated = HistoryBroadcast("historyUpdated")
