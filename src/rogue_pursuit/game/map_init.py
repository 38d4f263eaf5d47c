from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Protocol

from ..dungeon.digger import CarvedCell
from ..dungeon.free_cells import FreeCellPool
from ..dungeon.map import Point
from ..exceptions import ExhaustedPoolError

logger = logging.getLogger(__name__)

DEFAULT_BOX_COUNT = 10
ACTOR_COUNT = 2


class Digger(Protocol):
    def dig(self) -> Iterable[CarvedCell]:  # pragma: no cover - type contract
        ...


class MapSink(Protocol):
    """The slice of WorldEngine that map generation talks to."""

    def on_cell_discovered(self, x: int, y: int, is_wall: bool) -> None: ...

    def draw_map(self) -> None: ...

    def place_box(self, x: int, y: int) -> None: ...

    def mark_prize(self, x: int, y: int) -> None: ...


@dataclass(frozen=True)
class BoxPlacement:
    position: Point
    is_prize: bool = False


@dataclass
class MapLayout:
    free_cells: FreeCellPool
    boxes: List[BoxPlacement]
    player_spawn: Point
    pursuer_spawn: Point

    @property
    def prize(self) -> BoxPlacement:
        return next(b for b in self.boxes if b.is_prize)


class MapInitializer:
    """Carves the dungeon and draws box and actor placements from the free cells.

    Steps, in order:
    1. consume the digger's cell stream, forwarding every cell to the engine and
       recording passable ones;
    2. refuse to continue unless there is room for every box and both actors;
    3. place ``box_count`` boxes; the last one drawn is the prize;
    4. draw the map;
    5. draw the player spawn, then the pursuer spawn.
    """

    def __init__(
        self,
        engine: MapSink,
        digger: Digger,
        rng: random.Random,
        box_count: int = DEFAULT_BOX_COUNT,
    ) -> None:
        if box_count < 1:
            raise ValueError("box_count must be at least 1")
        self.engine = engine
        self.digger = digger
        self.rng = rng
        self.box_count = box_count

    @property
    def required_cells(self) -> int:
        return self.box_count + ACTOR_COUNT

    def generate(self) -> MapLayout:
        pool = self._carve()

        if len(pool) < self.required_cells:
            raise ExhaustedPoolError(
                f"Carved only {len(pool)} free cells; need {self.required_cells} "
                f"({self.box_count} boxes + {ACTOR_COUNT} actors)"
            )

        boxes = self._place_boxes(pool)
        self.engine.draw_map()

        player_spawn = pool.take_random(self.rng)
        pursuer_spawn = pool.take_random(self.rng)
        logger.info(
            "Map ready: %d boxes, prize at %s, player at %s, pursuer at %s, %d free cells left",
            len(boxes),
            boxes[-1].position,
            player_spawn,
            pursuer_spawn,
            len(pool),
        )
        return MapLayout(
            free_cells=pool,
            boxes=boxes,
            player_spawn=player_spawn,
            pursuer_spawn=pursuer_spawn,
        )

    def _carve(self) -> FreeCellPool:
        pool = FreeCellPool()
        total = 0
        for x, y, is_wall in self.digger.dig():
            total += 1
            if not is_wall:
                pool.record_free(Point(x, y))
            self.engine.on_cell_discovered(x, y, is_wall)
        logger.debug("Carving reported %d cells, %d free", total, len(pool))
        return pool

    def _place_boxes(self, pool: FreeCellPool) -> List[BoxPlacement]:
        boxes: List[BoxPlacement] = []
        for i in range(self.box_count):
            spot = pool.take_random(self.rng)
            self.engine.place_box(spot.x, spot.y)
            is_prize = i == self.box_count - 1
            if is_prize:
                self.engine.mark_prize(spot.x, spot.y)
            boxes.append(BoxPlacement(spot, is_prize))
        return boxes


__all__ = [
    "BoxPlacement",
    "MapInitializer",
    "MapLayout",
]
