import random

import pytest

from rogue_pursuit.dungeon.map import Point
from rogue_pursuit.exceptions import ExhaustedPoolError
from rogue_pursuit.game.map_init import MapInitializer
from rogue_pursuit.rendering.display import TextDisplay
from rogue_pursuit.world.engine import WorldEngine

from conftest import OPEN_ROOM, GridDigger


class RecordingEngine:
    def __init__(self):
        self.calls = []

    def on_cell_discovered(self, x, y, is_wall):
        self.calls.append(("cell", x, y, is_wall))

    def draw_map(self):
        self.calls.append(("draw_map",))

    def place_box(self, x, y):
        self.calls.append(("box", x, y))

    def mark_prize(self, x, y):
        self.calls.append(("prize", x, y))

    def of(self, kind):
        return [c for c in self.calls if c[0] == kind]


def _rows_with_free_cells(n: int):
    inner = "." * n
    return ["#" * (n + 2), "#" + inner + "#", "#" * (n + 2)]


def test_ten_distinct_boxes_with_prize_last():
    engine = RecordingEngine()
    layout = MapInitializer(engine, GridDigger(OPEN_ROOM), random.Random(5)).generate()

    positions = [b.position for b in layout.boxes]
    assert len(positions) == 10
    assert len(set(positions)) == 10

    prizes = [b for b in layout.boxes if b.is_prize]
    assert len(prizes) == 1
    assert layout.boxes[-1].is_prize
    assert layout.prize is layout.boxes[-1]

    assert engine.of("box") == [("box", p.x, p.y) for p in positions]
    assert engine.of("prize") == [("prize", positions[-1].x, positions[-1].y)]


def test_every_cell_forwarded_and_free_cells_recorded():
    engine = RecordingEngine()
    layout = MapInitializer(engine, GridDigger(OPEN_ROOM), random.Random(1)).generate()

    assert len(engine.of("cell")) == 12 * 12
    free_total = sum(row.count(".") for row in OPEN_ROOM)
    # 10 boxes + 2 actors consumed
    assert len(layout.free_cells) == free_total - 12


def test_spawns_are_distinct_and_never_on_boxes():
    for seed in range(20):
        engine = RecordingEngine()
        layout = MapInitializer(engine, GridDigger(OPEN_ROOM), random.Random(seed)).generate()
        boxes = {b.position for b in layout.boxes}

        assert layout.player_spawn != layout.pursuer_spawn
        assert layout.player_spawn not in boxes
        assert layout.pursuer_spawn not in boxes
        assert layout.player_spawn not in layout.free_cells
        assert layout.pursuer_spawn not in layout.free_cells


def test_map_drawn_after_boxes_placed():
    engine = RecordingEngine()
    MapInitializer(engine, GridDigger(OPEN_ROOM), random.Random(2)).generate()

    kinds = [c[0] for c in engine.calls]
    assert kinds.count("draw_map") == 1
    assert kinds.index("draw_map") > max(i for i, k in enumerate(kinds) if k == "box")


def test_fails_fast_when_too_few_free_cells():
    engine = RecordingEngine()
    init = MapInitializer(engine, GridDigger(_rows_with_free_cells(11)), random.Random(0))

    with pytest.raises(ExhaustedPoolError):
        init.generate()
    # Nothing was placed before failing
    assert engine.of("box") == []
    assert engine.of("draw_map") == []


def test_exactly_enough_free_cells_uses_them_all():
    engine = RecordingEngine()
    layout = MapInitializer(engine, GridDigger(_rows_with_free_cells(12)), random.Random(0)).generate()
    assert len(layout.free_cells) == 0


def test_world_engine_receives_boxes_and_prize():
    engine = WorldEngine(TextDisplay(12, 12))
    layout = MapInitializer(engine, GridDigger(OPEN_ROOM), random.Random(11)).generate()

    assert engine.box_count() == 10
    assert engine.prize_location == layout.boxes[-1].position
    for box in layout.boxes:
        assert engine.is_cell_free(box.position.x, box.position.y)
    assert not engine.is_cell_free(0, 0)


def test_box_count_must_be_positive():
    with pytest.raises(ValueError):
        MapInitializer(RecordingEngine(), GridDigger(OPEN_ROOM), random.Random(0), box_count=0)


def test_same_rng_same_layout():
    a = MapInitializer(RecordingEngine(), GridDigger(OPEN_ROOM), random.Random(42)).generate()
    b = MapInitializer(RecordingEngine(), GridDigger(OPEN_ROOM), random.Random(42)).generate()
    assert a.boxes == b.boxes
    assert (a.player_spawn, a.pursuer_spawn) == (b.player_spawn, b.pursuer_spawn)
    assert a.player_spawn != Point(0, 0)
