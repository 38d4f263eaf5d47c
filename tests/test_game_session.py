import pytest

from rogue_pursuit.config import DungeonConfig, GameConfig
from rogue_pursuit.dungeon.map import Point
from rogue_pursuit.engine.scheduler import SchedulerState, TurnOutcome
from rogue_pursuit.exceptions import ExhaustedPoolError
from rogue_pursuit.game.actors import ActorKind
from rogue_pursuit.game.session import CAPTURE_NOTICE, GameSession, SessionStatus, new_game

from conftest import CORRIDOR, OPEN_ROOM, build_engine


def test_new_game_is_deterministic_for_a_seed():
    a = new_game(seed=1234)
    b = new_game(seed=1234)

    assert a.engine.display.render() == b.engine.display.render()
    assert a.boxes == b.boxes
    assert a.player.position == b.player.position
    assert a.pursuer.position == b.pursuer.position


def test_new_game_places_ten_boxes_with_prize_last():
    session = new_game(seed="boxes")
    assert len(session.boxes) == 10
    assert len({b.position for b in session.boxes}) == 10
    assert [b.is_prize for b in session.boxes] == [False] * 9 + [True]
    assert session.engine.prize_location == session.boxes[-1].position
    assert session.engine.box_count() == 10


def test_new_game_spawns_are_distinct_and_free():
    for seed in range(5):
        session = new_game(seed=seed)
        boxes = {b.position for b in session.boxes}
        player, pursuer = session.player.position, session.pursuer.position
        assert player != pursuer
        assert player not in boxes and pursuer not in boxes
        assert session.engine.is_cell_free(player.x, player.y)
        assert session.engine.is_cell_free(pursuer.x, pursuer.y)


def test_new_game_does_not_start():
    session = new_game(seed=9)
    assert session.scheduler.turn_number == 0
    assert session.scheduler.state is SchedulerState.RUNNING
    assert not session.player.awaiting_input


def test_player_and_pursuer_alternate(session_factory):
    session = session_factory(OPEN_ROOM, player_at=(5, 5), pursuer_at=(1, 1), start=False)
    turns = []
    session.scheduler.add_listener(lambda actor, outcome: turns.append((actor.kind, outcome)))

    session.start()
    session.keyboard.dispatch("UP")

    assert turns == [
        (ActorKind.PLAYER, TurnOutcome.PENDING),
        (ActorKind.PURSUER, TurnOutcome.ENDED),
        (ActorKind.PLAYER, TurnOutcome.PENDING),
    ]
    assert session.scheduler.state is SchedulerState.SUSPENDED


def test_player_walks_into_capture(session_factory):
    session = session_factory(CORRIDOR, player_at=(1, 1), pursuer_at=(3, 1), start=False)
    turns = []
    session.scheduler.add_listener(lambda actor, outcome: turns.append((actor.kind, outcome)))
    session.start()

    session.keyboard.dispatch("RIGHT")

    assert session.status is SessionStatus.CAPTURED
    assert session.notices == [CAPTURE_NOTICE]
    assert turns[-1] == (ActorKind.PURSUER, TurnOutcome.CAPTURED)
    assert session.scheduler.halted

    # Everything after the capture is a no-op
    frozen = (session.player.position, session.pursuer.position)
    turns.clear()
    session.keyboard.dispatch("LEFT")
    session.scheduler.unlock()
    assert session.scheduler.advance() is None
    assert session.declare_capture() is TurnOutcome.CAPTURED

    assert turns == []
    assert (session.player.position, session.pursuer.position) == frozen
    assert session.notices == [CAPTURE_NOTICE]


def test_spawn_on_same_cell_rejected():
    session = GameSession(build_engine(OPEN_ROOM))
    with pytest.raises(ValueError):
        session.spawn_actors(Point(2, 2), Point(2, 2))


def test_spawn_twice_rejected():
    session = GameSession(build_engine(OPEN_ROOM))
    session.spawn_actors(Point(2, 2), Point(3, 3))
    with pytest.raises(RuntimeError):
        session.spawn_actors(Point(4, 4), Point(5, 5))


def test_scheduler_unavailable_before_spawn():
    session = GameSession(build_engine(OPEN_ROOM))
    with pytest.raises(RuntimeError):
        session.scheduler


def test_tiny_map_cannot_fit_boxes_and_actors():
    config = GameConfig(dungeon=DungeonConfig(width=3, height=3))
    with pytest.raises(ExhaustedPoolError):
        new_game(config, seed=1)


def test_start_publishes_player_stats(session_factory):
    session = session_factory(OPEN_ROOM, player_at=(5, 5), pursuer_at=(1, 1))
    stats = session.events.of_type("stats")
    assert stats[0].payload == {"hitpoints": 100, "max_hitpoints": 100, "moves": 0, "glyph": "@"}


def test_start_before_spawn_rejected():
    session = GameSession(build_engine(OPEN_ROOM))
    with pytest.raises(RuntimeError):
        session.start()
    assert session.events.of_type("stats") == ()
