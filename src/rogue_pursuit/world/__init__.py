"""World model: the tiles, boxes and actor cores the turn logic queries and moves."""
from .engine import ActorCore, BoxResult, WorldEngine

__all__ = ["ActorCore", "BoxResult", "WorldEngine"]
