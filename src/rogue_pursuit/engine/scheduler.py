from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Callable, Iterable, List, Optional, Protocol, Tuple

from ..exceptions import SchedulerError

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    RUNNING = auto()
    SUSPENDED = auto()


class TurnOutcome(Enum):
    """What an actor's ``act()`` left behind."""

    ENDED = auto()  # turn finished synchronously
    PENDING = auto()  # actor locked the scheduler and waits for input
    CAPTURED = auto()  # game over


class SupportsAct(Protocol):
    """Protocol for actors driven by TurnScheduler."""

    def act(self, session: Any) -> TurnOutcome:  # pragma: no cover - type contract
        ...


TurnListener = Callable[[SupportsAct, TurnOutcome], None]


class TurnScheduler:
    """Cooperative round-robin scheduler with lock/unlock suspension.

    Actors take turns in the fixed order given. While RUNNING the scheduler
    keeps calling ``act()`` on the next actor; an actor that needs to wait for
    something outside the game (a key press) calls ``lock()`` and the loop
    stops. A later ``unlock()`` resumes it with the next actor in order.

    ``halt()`` is the game-over lock: the scheduler stays SUSPENDED for good,
    ``unlock()`` and ``advance()`` become no-ops.

    Usage:
        scheduler = TurnScheduler([player, pursuer], session)
        scheduler.start()        # runs until the player locks for input
        ...
        scheduler.unlock()       # player moved; pursuer acts, then player again
    """

    def __init__(self, actors: Iterable[SupportsAct], session: Any = None) -> None:
        self._actors: Tuple[SupportsAct, ...] = tuple(actors)
        if not self._actors:
            raise ValueError("TurnScheduler needs at least one actor")
        self._session = session
        self._cursor = 0
        self._state = SchedulerState.RUNNING
        self._halted = False
        self.halt_reason: Optional[str] = None
        self._advancing = False
        self._pumping = False
        self.turn_number = 0
        self._listeners: List[TurnListener] = []

    # --------------- Inspection ---------------

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def halted(self) -> bool:
        return self._halted

    @property
    def actors(self) -> Tuple[SupportsAct, ...]:
        return self._actors

    @property
    def current_actor(self) -> SupportsAct:
        """The actor whose turn comes next."""
        return self._actors[self._cursor]

    def add_listener(self, listener: TurnListener) -> None:
        """Subscribe to completed ``act()`` calls."""
        self._listeners.append(listener)

    # --------------- State machine ---------------

    def lock(self) -> None:
        """Suspend turn advancement until ``unlock()``."""
        if self._halted:
            raise SchedulerError("Scheduler is halted; lock() has no meaning after game over")
        if self._state is SchedulerState.SUSPENDED:
            raise SchedulerError("Scheduler is already suspended")
        self._state = SchedulerState.SUSPENDED
        logger.debug("Scheduler locked at turn %d", self.turn_number)

    def unlock(self) -> None:
        """Resume advancement and immediately run turns until the next suspension."""
        if self._halted:
            logger.warning("unlock() ignored: scheduler halted (%s)", self.halt_reason)
            return
        if self._state is SchedulerState.RUNNING:
            raise SchedulerError("Scheduler is not suspended")
        self._state = SchedulerState.RUNNING
        logger.debug("Scheduler unlocked at turn %d", self.turn_number)
        if self._advancing or self._pumping:
            # Unlocked from inside a turn; the running loop picks it up
            return
        self._pump()

    def halt(self, reason: str = "game over") -> None:
        """Permanently suspend the scheduler. Idempotent."""
        if self._halted:
            logger.debug("halt() ignored: already halted (%s)", self.halt_reason)
            return
        self._halted = True
        self.halt_reason = reason
        self._state = SchedulerState.SUSPENDED
        logger.info("Scheduler halted at turn %d: %s", self.turn_number, reason)

    def start(self) -> None:
        """Run turns until the first suspension."""
        if self._halted:
            logger.debug("start() ignored: scheduler halted")
            return
        if self._state is SchedulerState.SUSPENDED:
            raise SchedulerError("Cannot start a suspended scheduler; unlock() it instead")
        logger.info("Scheduler started with %d actors", len(self._actors))
        self._pump()

    def advance(self) -> Optional[TurnOutcome]:
        """Give the current actor one turn and move the cursor to the next actor.

        Returns the actor's outcome, or None once the scheduler is halted.
        """
        if self._halted:
            logger.debug("advance() ignored: scheduler halted")
            return None
        if self._state is SchedulerState.SUSPENDED:
            raise SchedulerError("Cannot advance while suspended")
        if self._advancing:
            raise SchedulerError("advance() called from inside another turn")

        actor = self._actors[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._actors)
        self._advancing = True
        try:
            outcome = actor.act(self._session)
        finally:
            self._advancing = False
        self.turn_number += 1
        logger.debug("Turn %d: %r -> %s", self.turn_number, actor, outcome.name)

        if outcome is TurnOutcome.CAPTURED:
            self.halt("captured")
        self._notify(actor, outcome)
        return outcome

    # --------------- Internal helpers ---------------

    def _pump(self) -> None:
        self._pumping = True
        try:
            while self._state is SchedulerState.RUNNING and not self._halted:
                self.advance()
        finally:
            self._pumping = False

    def _notify(self, actor: SupportsAct, outcome: TurnOutcome) -> None:
        for listener in list(self._listeners):
            try:
                listener(actor, outcome)
            except Exception:
                logger.exception("Turn listener errored after %r", actor)


__all__ = [
    "SchedulerState",
    "SupportsAct",
    "TurnOutcome",
    "TurnScheduler",
]
