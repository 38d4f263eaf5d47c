import sys
from pathlib import Path
from typing import Iterator, Sequence, Tuple

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from rogue_pursuit.dungeon.digger import CarvedCell  # noqa: E402
from rogue_pursuit.dungeon.map import Point  # noqa: E402
from rogue_pursuit.game.session import GameSession  # noqa: E402
from rogue_pursuit.rendering.display import TextDisplay  # noqa: E402
from rogue_pursuit.world.engine import WorldEngine  # noqa: E402

OPEN_ROOM = [
    "############",
    "#..........#",
    "#..........#",
    "#..........#",
    "#..........#",
    "#..........#",
    "#..........#",
    "#..........#",
    "#..........#",
    "#..........#",
    "#..........#",
    "############",
]

CORRIDOR = [
    "#######",
    "#.....#",
    "#######",
]


class GridDigger:
    """Digger stand-in that reports a fixed ASCII layout ('#' = wall)."""

    def __init__(self, rows: Sequence[str]) -> None:
        self.rows = list(rows)

    def dig(self) -> Iterator[CarvedCell]:
        for x in range(len(self.rows[0])):
            for y in range(len(self.rows)):
                yield CarvedCell(x, y, self.rows[y][x] == "#")


def build_engine(rows: Sequence[str]) -> WorldEngine:
    engine = WorldEngine(TextDisplay(len(rows[0]), len(rows)))
    for x, y, is_wall in GridDigger(rows).dig():
        engine.on_cell_discovered(x, y, is_wall)
    engine.draw_map()
    return engine


def build_session(
    rows: Sequence[str],
    player_at: Tuple[int, int],
    pursuer_at: Tuple[int, int],
    start: bool = True,
) -> GameSession:
    session = GameSession(build_engine(rows))
    session.spawn_actors(Point(*player_at), Point(*pursuer_at))
    if start:
        session.start()
    return session


@pytest.fixture
def session_factory():
    return build_session


@pytest.fixture
def engine_factory():
    return build_engine


@pytest.fixture
def grid_digger():
    return GridDigger
