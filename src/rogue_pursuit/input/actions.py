from __future__ import annotations

from enum import Enum
from typing import Tuple


class InputAction(Enum):
    """Logical input actions used by the player's turn.

    Movement actions carry their unit vector; the eight directions follow the
    clockwise neighbour order starting north. Screen y grows downwards.
    """

    MOVE_N = (0, -1)
    MOVE_NE = (1, -1)
    MOVE_E = (1, 0)
    MOVE_SE = (1, 1)
    MOVE_S = (0, 1)
    MOVE_SW = (-1, 1)
    MOVE_W = (-1, 0)
    MOVE_NW = (-1, -1)
    INTERACT = (0, 0)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    @property
    def is_move(self) -> bool:
        return self is not InputAction.INTERACT


DIRECTIONS: Tuple[InputAction, ...] = (
    InputAction.MOVE_N,
    InputAction.MOVE_NE,
    InputAction.MOVE_E,
    InputAction.MOVE_SE,
    InputAction.MOVE_S,
    InputAction.MOVE_SW,
    InputAction.MOVE_W,
    InputAction.MOVE_NW,
)


__all__ = ["InputAction", "DIRECTIONS"]
