import random

import pytest

from rogue_pursuit.dungeon.free_cells import FreeCellPool
from rogue_pursuit.dungeon.map import Point
from rogue_pursuit.exceptions import ExhaustedPoolError


class FixedRandom:
    """random.Random stand-in that always returns the same float."""

    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def _pool(n: int) -> FreeCellPool:
    pool = FreeCellPool()
    for i in range(n):
        pool.record_free(Point(i, 0))
    return pool


def test_take_random_never_repeats_and_drains_pool():
    pool = _pool(30)
    rng = random.Random(99)

    drawn = [pool.take_random(rng) for _ in range(30)]

    assert len(set(drawn)) == 30
    assert len(pool) == 0
    assert pool.taken == set(drawn)


def test_exhausted_pool_raises():
    pool = _pool(1)
    pool.take_random(random.Random(1))

    with pytest.raises(ExhaustedPoolError):
        pool.take_random(random.Random(1))


def test_draw_index_follows_rng():
    pool = _pool(5)
    assert pool.take_random(FixedRandom(0.0)) == Point(0, 0)
    assert pool.take_random(FixedRandom(0.999)) == Point(4, 0)
    # Remaining cells keep their recorded order
    assert list(pool) == [Point(1, 0), Point(2, 0), Point(3, 0)]


def test_duplicate_record_is_ignored():
    pool = FreeCellPool()
    pool.record_free(Point(3, 4))
    pool.record_free(Point(3, 4))

    assert len(pool) == 1
    assert Point(3, 4) in pool


def test_taken_cell_cannot_be_recorded_again():
    pool = _pool(1)
    taken = pool.take_random(random.Random(0))

    assert taken not in pool
    with pytest.raises(ValueError):
        pool.record_free(taken)
