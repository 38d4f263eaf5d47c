from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Dict, Optional

from ..core.events import PRIZE_FOUND, STATS, EventBus
from ..dungeon.map import Point
from ..rendering.display import Color, Display

logger = logging.getLogger(__name__)

FLOOR = "."
BOX = "*"

BOX_COLOR: Color = (200, 160, 40)
TRAP_DAMAGE = 30

NO_BOX_NOTICE = "There is no prize box here."
PRIZE_NOTICE = "Congratulations! You've found the WebAssembly module!"
TRAP_NOTICE = "Whoops! This was a booby trap!"


class BoxResult(Enum):
    NO_BOX = auto()
    PRIZE = auto()
    TRAP = auto()
    EMPTY = auto()  # a box, but no prize was ever marked


class ActorCore:
    """On-map representation of an actor: position, glyph and vital stats.

    Cores are created and moved by the WorldEngine; actors only hold a
    reference and read their position through it.
    """

    def __init__(
        self,
        x: int,
        y: int,
        glyph: str,
        color: Color,
        display: Display,
        events: EventBus,
        hitpoints: int = 100,
    ) -> None:
        self.position = Point(x, y)
        self.glyph = glyph
        self.color = color
        self.hitpoints = hitpoints
        self.max_hitpoints = hitpoints
        self.moves = 0
        self._display = display
        self._events = events

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def draw(self) -> None:
        self._display.draw(self.position.x, self.position.y, self.glyph, self.color)

    def move_to(self, x: int, y: int) -> None:
        self.position = Point(x, y)
        self.draw()
        self.moves += 1
        self.emit_stats()

    def take_damage(self, hits: int) -> int:
        self.hitpoints -= hits
        logger.info("%s took %d damage (hp=%d)", self.glyph, hits, self.hitpoints)
        self.emit_stats()
        return self.hitpoints

    def stats(self) -> Dict[str, int]:
        return {
            "hitpoints": self.hitpoints,
            "max_hitpoints": self.max_hitpoints,
            "moves": self.moves,
        }

    def emit_stats(self) -> None:
        self._events.publish(STATS, dict(self.stats(), glyph=self.glyph))

    def __repr__(self) -> str:
        return f"ActorCore({self.glyph!r} at {self.position.x},{self.position.y})"


class WorldEngine:
    """Tile model, box/prize state and drawing for one dungeon.

    Only cells reported as passable during carving are stored; everything else
    is wall. A cell is free (walkable) when it holds floor or a closed box.
    Actors do not block cells.
    """

    def __init__(self, display: Display, events: Optional[EventBus] = None) -> None:
        self.display = display
        self.events = events or EventBus()
        self._cells: Dict[Point, str] = {}
        self.prize_location: Optional[Point] = None
        self.prize_found = False

    # ---- Carving / setup -------------------------------------------------
    def on_cell_discovered(self, x: int, y: int, is_wall: bool) -> None:
        if not is_wall:
            self._cells[Point(x, y)] = FLOOR

    def draw_map(self) -> None:
        for point, glyph in self._cells.items():
            self._draw_cell(point, glyph)

    def place_box(self, x: int, y: int) -> None:
        self._cells[Point(x, y)] = BOX

    def mark_prize(self, x: int, y: int) -> None:
        spot = Point(x, y)
        if self._cells.get(spot) == BOX:
            self.prize_location = spot
        else:
            logger.warning("Cannot mark prize at %s: no box there", spot)

    def spawn_actor(self, x: int, y: int, glyph: str, color: Color) -> ActorCore:
        core = ActorCore(x, y, glyph, color, self.display, self.events)
        core.draw()
        return core

    # ---- Queries ---------------------------------------------------------
    def is_cell_free(self, x: int, y: int) -> bool:
        return self._cells.get(Point(x, y)) in (FLOOR, BOX)

    def glyph_at(self, x: int, y: int) -> Optional[str]:
        return self._cells.get(Point(x, y))

    def box_count(self) -> int:
        return sum(1 for glyph in self._cells.values() if glyph == BOX)

    # ---- Actor operations ------------------------------------------------
    def move_actor(self, core: ActorCore, x: int, y: int) -> None:
        self._redraw_at(core.position)
        core.move_to(x, y)
        logger.debug("Moved %r", core)

    def open_box(self, core: ActorCore, x: int, y: int) -> BoxResult:
        spot = Point(x, y)
        if self._cells.get(spot) != BOX:
            self.events.notice(NO_BOX_NOTICE)
            return BoxResult.NO_BOX

        if self.prize_location is None:
            result = BoxResult.EMPTY
        elif self.prize_location == spot:
            self.prize_found = True
            self.events.notice(PRIZE_NOTICE)
            self.events.publish(PRIZE_FOUND, {"x": x, "y": y})
            result = BoxResult.PRIZE
        else:
            self.events.notice(TRAP_NOTICE)
            core.take_damage(TRAP_DAMAGE)
            result = BoxResult.TRAP

        self._cells[spot] = FLOOR
        logger.info("Opened box at %s: %s", spot, result.name)
        return result

    # ---- Internal --------------------------------------------------------
    def _redraw_at(self, point: Point) -> None:
        glyph = self._cells.get(point)
        if glyph is not None:
            self._draw_cell(point, glyph)

    def _draw_cell(self, point: Point, glyph: str) -> None:
        color = BOX_COLOR if glyph == BOX else None
        self.display.draw(point.x, point.y, glyph, color)
