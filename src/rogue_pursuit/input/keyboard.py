from __future__ import annotations

import logging
from typing import Callable, List, Union

logger = logging.getLogger(__name__)

KeyListener = Callable[[Union[str, int]], object]


class KeyboardDispatcher:
    """Global key-press stream that listeners subscribe to and leave.

    The front-end (Arcade window, headless reader, tests) calls ``dispatch``
    with a raw key code; every listener subscribed at that moment receives it.
    Listeners added while an event is being delivered only see later events.
    """

    def __init__(self) -> None:
        self._listeners: List[KeyListener] = []
        self.dispatched: int = 0

    def subscribe(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            logger.debug("Listener %r already subscribed", listener)
            return
        self._listeners.append(listener)

    def unsubscribe(self, listener: KeyListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("Attempted to unsubscribe %r but it was not listening", listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def is_subscribed(self, listener: KeyListener) -> bool:
        return listener in self._listeners

    def dispatch(self, code: Union[str, int]) -> None:
        self.dispatched += 1
        listeners = list(self._listeners)
        if not listeners:
            logger.debug("Key %r dispatched with no listeners", code)
        for listener in listeners:
            listener(code)


__all__ = ["KeyboardDispatcher"]
