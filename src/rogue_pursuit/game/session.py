from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, Optional

from ..config import GameConfig
from ..core.events import CAPTURED, NOTICE, Event, EventBus
from ..dungeon.digger import BSPDigger
from ..dungeon.free_cells import FreeCellPool
from ..dungeon.map import Point
from ..engine.scheduler import TurnOutcome, TurnScheduler
from ..input.keyboard import KeyboardDispatcher
from ..input.mapping import InputMapper
from ..rendering.display import Display, TextDisplay
from ..rng import DUNGEON_LAYOUT, ITEM_PLACEMENT, RNGManager
from ..world.engine import WorldEngine
from .actors import (
    PLAYER_COLOR,
    PLAYER_GLYPH,
    PURSUER_COLOR,
    PURSUER_GLYPH,
    PlayerActor,
    PursuerActor,
)
from .map_init import BoxPlacement, MapInitializer

logger = logging.getLogger(__name__)

CAPTURE_NOTICE = "Game over - you were captured by the Borrow Checker!"


class SessionStatus(Enum):
    IN_PROGRESS = auto()
    CAPTURED = auto()


class GameSession:
    """Everything one game needs: world, free cells, actors and the scheduler.

    The session is handed to every ``act()`` call instead of living in a
    module global.
    """

    def __init__(
        self,
        engine: WorldEngine,
        keyboard: Optional[KeyboardDispatcher] = None,
        mapper: Optional[InputMapper] = None,
    ) -> None:
        self.engine = engine
        self.events: EventBus = engine.events
        self.keyboard = keyboard or KeyboardDispatcher()
        self.mapper = mapper or InputMapper.default()
        self.free_cells = FreeCellPool()
        self.boxes: List[BoxPlacement] = []
        self.player: Optional[PlayerActor] = None
        self.pursuer: Optional[PursuerActor] = None
        self._scheduler: Optional[TurnScheduler] = None
        self.status = SessionStatus.IN_PROGRESS
        self.notices: List[str] = []
        self.events.subscribe(NOTICE, self._record_notice)

    @property
    def scheduler(self) -> TurnScheduler:
        if self._scheduler is None:
            raise RuntimeError("Actors have not been spawned yet")
        return self._scheduler

    @property
    def is_over(self) -> bool:
        return self.status is not SessionStatus.IN_PROGRESS

    def spawn_actors(self, player_at: Point, pursuer_at: Point) -> None:
        """Create both actors and the turn order (player first, then pursuer)."""
        if self._scheduler is not None:
            raise RuntimeError("Actors already spawned for this session")
        if player_at == pursuer_at:
            raise ValueError(f"Player and pursuer cannot share spawn cell {player_at}")
        self.player = PlayerActor(self.engine.spawn_actor(player_at.x, player_at.y, PLAYER_GLYPH, PLAYER_COLOR))
        self.pursuer = PursuerActor(
            self.engine.spawn_actor(pursuer_at.x, pursuer_at.y, PURSUER_GLYPH, PURSUER_COLOR)
        )
        self._scheduler = TurnScheduler([self.player, self.pursuer], self)
        logger.debug("Spawned player at %s and pursuer at %s", player_at, pursuer_at)

    def start(self) -> None:
        """Run turns until the player waits for input."""
        scheduler = self.scheduler
        self.player.core.emit_stats()
        scheduler.start()

    def declare_capture(self) -> TurnOutcome:
        """End the game. Only the first call has any effect."""
        if self.status is SessionStatus.CAPTURED:
            return TurnOutcome.CAPTURED
        self.status = SessionStatus.CAPTURED
        self.scheduler.halt("captured")
        self.events.publish(CAPTURED, {"x": self.player.position.x, "y": self.player.position.y})
        self.events.notice(CAPTURE_NOTICE)
        return TurnOutcome.CAPTURED

    def _record_notice(self, event: Event) -> None:
        self.notices.append(event.payload["message"])


def new_game(
    config: Optional[GameConfig] = None,
    seed=None,
    display: Optional[Display] = None,
    keyboard: Optional[KeyboardDispatcher] = None,
) -> GameSession:
    """Generate a dungeon and return a session ready to ``start()``.

    ``seed`` overrides ``config.seed``; with neither, a random seed is used and
    logged.
    """
    config = config or GameConfig()
    if seed is None:
        seed = config.seed
    rngm = RNGManager(seed)

    dcfg = config.dungeon
    display = display or TextDisplay(dcfg.width, dcfg.height)
    engine = WorldEngine(display)
    session = GameSession(engine, keyboard=keyboard, mapper=InputMapper.from_config(config.input))

    digger = BSPDigger(
        rngm.context_rng(DUNGEON_LAYOUT),
        width=dcfg.width,
        height=dcfg.height,
        min_leaf_size=dcfg.min_leaf_size,
        max_leaf_size=dcfg.max_leaf_size,
        room_min_size=dcfg.room_min_size,
        room_max_size=dcfg.room_max_size,
    )
    layout = MapInitializer(
        engine,
        digger,
        rngm.context_rng(ITEM_PLACEMENT),
        box_count=config.placement.box_count,
    ).generate()

    session.free_cells = layout.free_cells
    session.boxes = layout.boxes
    session.spawn_actors(layout.player_spawn, layout.pursuer_spawn)
    logger.info("New game ready (seed=%s)", rngm.get_master_seed_hex())
    return session


__all__ = [
    "CAPTURE_NOTICE",
    "GameSession",
    "SessionStatus",
    "new_game",
]
