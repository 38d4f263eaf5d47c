from rogue_pursuit.dungeon.map import Point
from rogue_pursuit.world.engine import (
    BOX,
    FLOOR,
    NO_BOX_NOTICE,
    PRIZE_NOTICE,
    TRAP_DAMAGE,
    TRAP_NOTICE,
    BoxResult,
)

from conftest import CORRIDOR, build_engine


def _notices(engine):
    return [e.payload["message"] for e in engine.events.of_type("notice")]


def test_only_floor_cells_are_free():
    engine = build_engine(CORRIDOR)
    assert engine.is_cell_free(1, 1)
    assert engine.is_cell_free(5, 1)
    assert not engine.is_cell_free(0, 1)
    assert not engine.is_cell_free(3, 0)
    assert not engine.is_cell_free(-1, -1)
    assert engine.glyph_at(0, 0) is None


def test_boxes_stay_walkable_and_are_drawn():
    engine = build_engine(CORRIDOR)
    engine.place_box(2, 1)
    engine.draw_map()

    assert engine.glyph_at(2, 1) == BOX
    assert engine.is_cell_free(2, 1)
    assert engine.display.glyph_at(2, 1) == BOX
    assert engine.box_count() == 1


def test_mark_prize_requires_a_box():
    engine = build_engine(CORRIDOR)
    engine.mark_prize(2, 1)
    assert engine.prize_location is None

    engine.place_box(2, 1)
    engine.mark_prize(2, 1)
    assert engine.prize_location == Point(2, 1)


def test_open_box_outcomes():
    engine = build_engine(CORRIDOR)
    core = engine.spawn_actor(1, 1, "@", (255, 255, 0))
    engine.place_box(2, 1)
    engine.place_box(3, 1)
    engine.mark_prize(3, 1)

    assert engine.open_box(core, 1, 1) is BoxResult.NO_BOX
    assert engine.open_box(core, 2, 1) is BoxResult.TRAP
    assert core.hitpoints == 100 - TRAP_DAMAGE
    assert engine.glyph_at(2, 1) == FLOOR

    assert engine.open_box(core, 3, 1) is BoxResult.PRIZE
    assert engine.prize_found
    assert engine.box_count() == 0
    assert len(engine.events.of_type("prize_found")) == 1

    assert _notices(engine) == [NO_BOX_NOTICE, TRAP_NOTICE, PRIZE_NOTICE]


def test_open_box_without_prize_marked():
    engine = build_engine(CORRIDOR)
    core = engine.spawn_actor(1, 1, "@", (255, 255, 0))
    engine.place_box(1, 1)

    assert engine.open_box(core, 1, 1) is BoxResult.EMPTY
    assert core.hitpoints == 100
    assert _notices(engine) == []


def test_move_actor_updates_position_and_counters():
    engine = build_engine(CORRIDOR)
    engine.place_box(1, 1)
    engine.draw_map()
    core = engine.spawn_actor(1, 1, "B", (255, 0, 0))

    engine.move_actor(core, 2, 1)

    assert core.position == Point(2, 1)
    assert core.moves == 1
    assert engine.display.glyph_at(2, 1) == "B"
    # The box underneath is redrawn once the actor leaves
    assert engine.display.glyph_at(1, 1) == BOX
    stats = engine.events.of_type("stats")[-1].payload
    assert stats["moves"] == 1 and stats["glyph"] == "B"
