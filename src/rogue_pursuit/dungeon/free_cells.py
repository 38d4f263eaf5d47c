from __future__ import annotations

import logging
import random
from typing import Iterator, List, Set

from ..exceptions import ExhaustedPoolError
from .map import Point

logger = logging.getLogger(__name__)


class FreeCellPool:
    """Unoccupied passable cells available for placing boxes and actors.

    Cells are recorded while the dungeon is carved and drawn out uniformly at
    random without replacement. A cell that has been taken is never recorded
    again.
    """

    def __init__(self) -> None:
        self._cells: List[Point] = []
        self._members: Set[Point] = set()
        self._taken: Set[Point] = set()

    def record_free(self, point: Point) -> None:
        if point in self._taken:
            raise ValueError(f"Cell {point} was already consumed and cannot be re-added")
        if point in self._members:
            logger.debug("Cell %s already recorded; ignoring duplicate", point)
            return
        self._cells.append(point)
        self._members.add(point)

    def take_random(self, rng: random.Random) -> Point:
        if not self._cells:
            raise ExhaustedPoolError("No free cells left to place on")
        index = int(rng.random() * len(self._cells))
        point = self._cells.pop(index)
        self._members.discard(point)
        self._taken.add(point)
        logger.debug("Took free cell %s (%d left)", point, len(self._cells))
        return point

    @property
    def taken(self) -> Set[Point]:
        return set(self._taken)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, point: object) -> bool:
        return point in self._members

    def __iter__(self) -> Iterator[Point]:
        return iter(list(self._cells))
