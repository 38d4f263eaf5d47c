"""
Dungeon systems for Rogue Pursuit.

Contains the BSP digger, the carving grid, free-cell bookkeeping and the
breadth-first pathfinder used by the pursuer.
"""
from .digger import BSPDigger, CarvedCell
from .free_cells import FreeCellPool
from .map import DungeonMap, Point, Rect, TileType
from .pathfinding import find_path

__all__ = [
    "BSPDigger",
    "CarvedCell",
    "DungeonMap",
    "FreeCellPool",
    "Point",
    "Rect",
    "TileType",
    "find_path",
]
