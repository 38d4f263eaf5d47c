from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional, Union

from ..dungeon.map import Point
from ..dungeon.pathfinding import Passable, find_path
from ..engine.scheduler import TurnOutcome
from ..exceptions import InvalidInputEvent
from ..input.actions import InputAction
from ..world.engine import ActorCore

if TYPE_CHECKING:  # pragma: no cover
    from .session import GameSession

logger = logging.getLogger(__name__)

PathFinder = Callable[[Point, Point, Passable], List[Point]]

PLAYER_GLYPH = "@"
PLAYER_COLOR = (255, 255, 0)
PURSUER_GLYPH = "B"
PURSUER_COLOR = (255, 0, 0)


class ActorKind(Enum):
    PLAYER = "player"
    PURSUER = "pursuer"


class Actor(ABC):
    """An on-map participant in the turn order.

    The actor's position lives in its engine-owned ``core``; other components
    always ask the actor (never cache a copy) where it is.
    """

    kind: ActorKind

    def __init__(self, core: ActorCore) -> None:
        self.core = core

    @property
    def position(self) -> Point:
        return self.core.position

    @abstractmethod
    def act(self, session: "GameSession") -> TurnOutcome:
        """Take one turn."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(at {self.position.x},{self.position.y})"


class PlayerActor(Actor):
    """Keyboard-driven actor.

    ``act()`` locks the scheduler and subscribes to the session keyboard; the
    turn stays open until ``handle_input`` receives a direction into a free
    cell. Interacting opens a box but does not end the turn.
    """

    kind = ActorKind.PLAYER

    def __init__(self, core: ActorCore) -> None:
        super().__init__(core)
        self._session: Optional["GameSession"] = None

    @property
    def awaiting_input(self) -> bool:
        return self._session is not None

    def act(self, session: "GameSession") -> TurnOutcome:
        session.scheduler.lock()
        self._session = session
        session.keyboard.subscribe(self.handle_input)
        logger.debug("Player turn open at %s; waiting for input", self.position)
        return TurnOutcome.PENDING

    def handle_input(self, code: Union[str, int]) -> bool:
        """Handle one key press. Returns True only if it ended the turn."""
        session = self._session
        if session is None:
            logger.debug("Key %r received outside the player's turn", code)
            return False

        try:
            action = session.mapper.resolve(code)
        except InvalidInputEvent as exc:
            logger.debug("Ignoring input: %s", exc)
            return False

        if action is InputAction.INTERACT:
            session.engine.open_box(self.core, self.position.x, self.position.y)
            return False

        dx, dy = action.vector
        target = self.position.offset(dx, dy)
        if not session.engine.is_cell_free(target.x, target.y):
            logger.debug("Blocked move %s to %s", action.name, target)
            return False

        session.engine.move_actor(self.core, target.x, target.y)
        session.keyboard.unsubscribe(self.handle_input)
        self._session = None
        logger.debug("Player moved %s to %s", action.name, target)
        session.scheduler.unlock()
        return True


class PursuerActor(Actor):
    """Chases the player one step per turn along a 4-directional shortest path.

    When no productive step is left (adjacent, same cell, or no path at all)
    the player is captured and the game ends.
    """

    kind = ActorKind.PURSUER

    def __init__(self, core: ActorCore, path_finder: PathFinder = find_path) -> None:
        super().__init__(core)
        self._find_path = path_finder

    def act(self, session: "GameSession") -> TurnOutcome:
        target = session.player.position
        path = self._find_path(self.position, target, session.engine.is_cell_free)

        steps = path[1:]
        if len(steps) <= 1:
            logger.info("Pursuer at %s captured player at %s (path=%d)", self.position, target, len(steps))
            return session.declare_capture()

        nxt = steps[0]
        session.engine.move_actor(self.core, nxt.x, nxt.y)
        logger.debug("Pursuer stepped to %s, %d steps from player", nxt, len(steps) - 1)
        return TurnOutcome.ENDED


__all__ = [
    "Actor",
    "ActorKind",
    "PlayerActor",
    "PursuerActor",
    "PLAYER_GLYPH",
    "PLAYER_COLOR",
    "PURSUER_GLYPH",
    "PURSUER_COLOR",
]
