from collections import deque
from typing import Callable, Dict, List, Optional, Tuple

from .map import Point

Passable = Callable[[int, int], bool]

# Ordered for deterministic traversal
DIRS_4: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))
DIRS_8: Tuple[Tuple[int, int], ...] = (
    (0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1),
)


def find_path(start: Point, goal: Point, passable: Passable, topology: int = 4) -> List[Point]:
    """Breadth-first shortest path from start to goal through passable cells.

    Returns the cells from ``start`` to ``goal`` inclusive, ``[start]`` when they
    coincide, or an empty list when the goal cannot be reached. The start cell
    itself is never checked against ``passable``.
    """
    if topology == 4:
        dirs = DIRS_4
    elif topology == 8:
        dirs = DIRS_8
    else:
        raise ValueError(f"Unsupported topology: {topology}")

    if start == goal:
        return [start]

    came_from: Dict[Point, Optional[Point]] = {start: None}
    q = deque([start])
    while q:
        cur = q.popleft()
        for dx, dy in dirs:
            nxt = Point(cur.x + dx, cur.y + dy)
            if nxt in came_from or not passable(nxt.x, nxt.y):
                continue
            came_from[nxt] = cur
            if nxt == goal:
                return _reconstruct(came_from, goal)
            q.append(nxt)
    return []


def _reconstruct(came_from: Dict[Point, Optional[Point]], goal: Point) -> List[Point]:
    path: List[Point] = []
    node: Optional[Point] = goal
    while node is not None:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path


def path_length(start: Point, goal: Point, passable: Passable) -> Optional[int]:
    """Number of 4-directional steps between start and goal, or None if unreachable."""
    path = find_path(start, goal, passable)
    if not path:
        return None
    return len(path) - 1
