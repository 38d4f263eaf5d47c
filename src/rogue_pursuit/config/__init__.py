"""
Runtime configuration for Rogue Pursuit.

All values are frozen dataclasses with working defaults; ``load_config`` layers
a YAML file on top of them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

Key = Union[str, int]


def _default_bindings() -> Dict[str, Tuple[Key, ...]]:
    return {
        "MOVE_N": ("UP",),
        "MOVE_NE": ("PAGEUP",),
        "MOVE_E": ("RIGHT",),
        "MOVE_SE": ("PAGEDOWN",),
        "MOVE_S": ("DOWN",),
        "MOVE_SW": ("END",),
        "MOVE_W": ("LEFT",),
        "MOVE_NW": ("HOME",),
        "INTERACT": ("ENTER", "RETURN", "SPACE"),
    }


def _default_aliases() -> Dict[Key, str]:
    # Browser keyCode values
    return {
        38: "UP",
        33: "PAGEUP",
        39: "RIGHT",
        34: "PAGEDOWN",
        40: "DOWN",
        35: "END",
        37: "LEFT",
        36: "HOME",
        13: "ENTER",
        32: "SPACE",
    }


@dataclass(frozen=True)
class DungeonConfig:
    # Logical map size (cells)
    width: int = 80
    height: int = 25

    # BSP partition tuning
    min_leaf_size: int = 8
    max_leaf_size: int = 20
    room_min_size: int = 4
    room_max_size: int = 8


@dataclass(frozen=True)
class PlacementConfig:
    box_count: int = 10


@dataclass(frozen=True)
class InputConfig:
    """Action name -> keys, plus backend key code -> canonical key name."""

    bindings: Dict[str, Tuple[Key, ...]] = field(default_factory=_default_bindings)
    aliases: Dict[Key, str] = field(default_factory=_default_aliases)


@dataclass(frozen=True)
class DisplayConfig:
    # Size of one map cell in the Arcade window (pixels)
    cell_px: int = 16
    font_size: int = 12


@dataclass(frozen=True)
class GameConfig:
    dungeon: DungeonConfig = field(default_factory=DungeonConfig)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    input: InputConfig = field(default_factory=InputConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    seed: Optional[Union[int, str]] = None


from .loader import load_config  # noqa: E402

__all__ = [
    "DungeonConfig",
    "PlacementConfig",
    "InputConfig",
    "DisplayConfig",
    "GameConfig",
    "load_config",
]
