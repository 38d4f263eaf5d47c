from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

NOTICE = "notice"
STATS = "stats"
PRIZE_FOUND = "prize_found"
CAPTURED = "captured"


@dataclass
class Event:
    type: str
    payload: Dict[str, Any]


class EventBus:
    """
    Minimal pub/sub event bus used to broadcast gameplay events such as notices,
    stat changes and the end of the game. Also stores a history for testing.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callable[[Event], None]]] = {}
        self._history: List[Event] = []

    def subscribe(self, event_type: str, handler: Callable[[Event], None]) -> None:
        self._subscribers.setdefault(event_type, []).append(handler)

    def publish(self, event_type: str, payload: Dict[str, Any] | None = None) -> None:
        evt = Event(event_type, payload or {})
        self._history.append(evt)
        for h in list(self._subscribers.get(event_type, [])):
            try:
                h(evt)
            except Exception:
                # Subscribers are UI code; a broken one must not stop the turn
                logger.exception("Handler for %s failed", event_type)

    def notice(self, message: str) -> None:
        """Publish a user-facing message."""
        logger.info("Notice: %s", message)
        self.publish(NOTICE, {"message": message})

    @property
    def history(self) -> Tuple[Event, ...]:
        return tuple(self._history)

    def of_type(self, event_type: str) -> Tuple[Event, ...]:
        return tuple(e for e in self._history if e.type == event_type)

    def clear_history(self) -> None:
        self._history.clear()
