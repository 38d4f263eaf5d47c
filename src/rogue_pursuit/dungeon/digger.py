from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional

from .map import DungeonMap, Rect

logger = logging.getLogger(__name__)


class CarvedCell(NamedTuple):
    """One cell reported by the digger."""

    x: int
    y: int
    is_wall: bool


@dataclass
class Leaf:
    rect: Rect
    left: Optional['Leaf'] = None
    right: Optional['Leaf'] = None
    room: Optional[Rect] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class BSPDigger:
    """
    BSP (Binary Space Partition) room + corridor digger.

    Guarantees:
    - Deterministic layout for a given RNG state
    - Every floor cell is 4-connected to every other floor cell
    - One-tile wall border around the whole map

    ``dig()`` carves once and then reports every cell of the map, column by
    column, as a ``CarvedCell``. The stream is finite and is meant to be
    consumed a single time.
    """

    def __init__(
        self,
        rng: random.Random,
        width: int = 80,
        height: int = 25,
        min_leaf_size: int = 8,
        max_leaf_size: int = 20,
        room_min_size: int = 4,
        room_max_size: int = 8,
    ) -> None:
        if min_leaf_size < 1 or room_min_size < 1:
            raise ValueError("min_leaf_size and room_min_size must be at least 1")
        self.rng = rng
        self.width = width
        self.height = height
        self.min_leaf_size = min_leaf_size
        self.max_leaf_size = max_leaf_size
        self.room_min_size = room_min_size
        self.room_max_size = max(room_max_size, room_min_size + 1)
        self.map: Optional[DungeonMap] = None

    def dig(self) -> Iterator[CarvedCell]:
        dmap = self.carve()
        for x in range(dmap.width):
            for y in range(dmap.height):
                yield CarvedCell(x, y, dmap.is_wall(x, y))

    def carve(self) -> DungeonMap:
        """Carve the map (once) and return it."""
        if self.map is not None:
            return self.map

        rng = self.rng
        logger.debug("Carving BSP dungeon: size=%dx%d", self.width, self.height)
        dmap = DungeonMap(self.width, self.height)

        # Root leaf excludes the outer wall border
        root = Leaf(Rect(1, 1, self.width - 2, self.height - 2))
        leaves: List[Leaf] = [root]

        did_split = True
        while did_split:
            did_split = False
            new_leaves: List[Leaf] = []
            for leaf in leaves:
                if leaf.is_leaf():
                    if (
                        leaf.rect.w > self.max_leaf_size
                        or leaf.rect.h > self.max_leaf_size
                        or rng.random() > 0.8
                    ):
                        if self._split_leaf(leaf):
                            new_leaves.append(leaf.left)  # type: ignore[arg-type]
                            new_leaves.append(leaf.right)  # type: ignore[arg-type]
                            did_split = True
                if not leaf.is_leaf():
                    new_leaves.append(leaf)
            if did_split:
                leaves = new_leaves

        rooms: List[Rect] = []
        self._create_rooms(root, rooms)
        for room in rooms:
            dmap.carve_room(room)

        self._connect_children(root, dmap)

        logger.info("Carved %d rooms into %dx%d map", len(rooms), self.width, self.height)
        logger.debug("Carved map:\n%s", dmap.render())
        self.map = dmap
        return dmap

    def _split_leaf(self, leaf: Leaf) -> bool:
        if not leaf.is_leaf():
            return False
        rng = self.rng
        split_horiz = rng.choice([True, False])
        if leaf.rect.w / leaf.rect.h >= 1.25:
            split_horiz = False
        elif leaf.rect.h / leaf.rect.w >= 1.25:
            split_horiz = True

        max_split = (leaf.rect.h if split_horiz else leaf.rect.w) - self.min_leaf_size
        if max_split <= self.min_leaf_size:
            return False

        split = rng.randint(self.min_leaf_size, max_split)
        if split_horiz:
            left_rect = Rect(leaf.rect.x, leaf.rect.y, leaf.rect.w, split)
            right_rect = Rect(leaf.rect.x, leaf.rect.y + split, leaf.rect.w, leaf.rect.h - split)
        else:
            left_rect = Rect(leaf.rect.x, leaf.rect.y, split, leaf.rect.h)
            right_rect = Rect(leaf.rect.x + split, leaf.rect.y, leaf.rect.w - split, leaf.rect.h)

        leaf.left = Leaf(left_rect)
        leaf.right = Leaf(right_rect)
        return True

    def _room_extent(self, available: int) -> int:
        hi = max(self.room_min_size, min(self.room_max_size, available - 1))
        return min(self.rng.randint(self.room_min_size, hi), available)

    def _create_rooms(self, leaf: Leaf, out_rooms: List[Rect]) -> None:
        if leaf.is_leaf():
            w = self._room_extent(leaf.rect.w)
            h = self._room_extent(leaf.rect.h)
            x = self.rng.randint(leaf.rect.x, leaf.rect.x + leaf.rect.w - w)
            y = self.rng.randint(leaf.rect.y, leaf.rect.y + leaf.rect.h - h)
            leaf.room = Rect(x, y, w, h)
            out_rooms.append(leaf.room)
        else:
            if leaf.left:
                self._create_rooms(leaf.left, out_rooms)
            if leaf.right:
                self._create_rooms(leaf.right, out_rooms)

    def _connect_children(self, leaf: Leaf, dmap: DungeonMap) -> None:
        if leaf.left and leaf.right:
            self._connect_children(leaf.left, dmap)
            self._connect_children(leaf.right, dmap)
            left_room = self._get_room_in_leaf(leaf.left)
            right_room = self._get_room_in_leaf(leaf.right)
            if left_room and right_room:
                self._connect_rooms(left_room, right_room, dmap)

    def _get_room_in_leaf(self, leaf: Leaf) -> Optional[Rect]:
        if leaf.is_leaf():
            return leaf.room
        rooms: List[Rect] = []
        for child in (leaf.left, leaf.right):
            if child:
                r = self._get_room_in_leaf(child)
                if r:
                    rooms.append(r)
        if not rooms:
            return None
        return self.rng.choice(rooms)

    def _connect_rooms(self, a: Rect, b: Rect, dmap: DungeonMap) -> None:
        pa = a.center()
        pb = b.center()
        dmap.carve_corridor(pa, pb, horizontal_first=self.rng.random() < 0.5)
