"""
Rogue Pursuit package root.

A turn-based roguelike: the player searches a carved dungeon for the prize box
while a pursuer chases them one step per turn. Front-ends (Arcade window,
headless console) stay outside the domain modules.
"""

__version__ = "0.1.0"

__all__ = [
    "game",
]
