from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)


class TileType(Enum):
    WALL = 0
    FLOOR = 1


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


@dataclass
class Rect:
    """Axis-aligned block of cells; ``right``/``bottom`` are exclusive."""

    x: int
    y: int
    w: int
    h: int

    def right(self) -> int:
        return self.x + self.w

    def bottom(self) -> int:
        return self.y + self.h

    def center(self) -> Point:
        return Point(self.x + self.w // 2, self.y + self.h // 2)


_GLYPHS = {TileType.WALL: "#", TileType.FLOOR: "."}


class DungeonMap:
    """Solid rock that the digger hollows out into rooms and corridors.

    Every cell starts as wall. Carving outside the map is logged and skipped,
    so a digger bug can never report an out-of-bounds floor cell.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 3 or height < 3:
            raise ValueError(f"Map must be at least 3x3 to keep a wall border, got {width}x{height}")
        self.width = width
        self.height = height
        self._tiles: List[List[TileType]] = [[TileType.WALL] * width for _ in range(height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x},{y}) outside {self.width}x{self.height} map")
        return self._tiles[y][x] is TileType.WALL

    def carve(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            logger.error("Refusing to carve outside the map at (%d,%d)", x, y)
            return
        self._tiles[y][x] = TileType.FLOOR

    def carve_room(self, rect: Rect) -> None:
        for y in range(rect.y, rect.bottom()):
            for x in range(rect.x, rect.right()):
                self.carve(x, y)

    def carve_corridor(self, a: Point, b: Point, horizontal_first: bool) -> None:
        """Carve an L-shaped corridor between two points, inclusive of both ends."""
        corner = Point(b.x, a.y) if horizontal_first else Point(a.x, b.y)
        for start, end in ((a, corner), (corner, b)):
            for x in range(min(start.x, end.x), max(start.x, end.x) + 1):
                for y in range(min(start.y, end.y), max(start.y, end.y) + 1):
                    self.carve(x, y)

    def floor_cells(self) -> Iterable[Point]:
        for y in range(self.height):
            for x in range(self.width):
                if self._tiles[y][x] is TileType.FLOOR:
                    yield Point(x, y)

    def render(self) -> str:
        return "\n".join("".join(_GLYPHS[t] for t in row) for row in self._tiles)

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Hashable copy of the tiles, for comparing two carvings."""
        return tuple(tuple(t.value for t in row) for row in self._tiles)
