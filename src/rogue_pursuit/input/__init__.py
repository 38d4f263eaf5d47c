"""
Input abstraction layer for Rogue Pursuit.

Exposes:
- InputAction: Logical input actions used by the player's turn.
- InputMapper: Rebindable mapping from physical keys to actions.
- KeyboardDispatcher: The key-press stream actors subscribe to.
"""
from .actions import DIRECTIONS, InputAction
from .keyboard import KeyboardDispatcher
from .mapping import InputMapper

__all__ = [
    "DIRECTIONS",
    "InputAction",
    "InputMapper",
    "KeyboardDispatcher",
]
