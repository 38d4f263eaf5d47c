"""Game rules: actors, map initialization and the session that ties them to the scheduler."""
from .actors import Actor, ActorKind, PlayerActor, PursuerActor
from .map_init import BoxPlacement, MapInitializer, MapLayout
from .session import GameSession, SessionStatus, new_game

__all__ = [
    "Actor",
    "ActorKind",
    "BoxPlacement",
    "GameSession",
    "MapInitializer",
    "MapLayout",
    "PlayerActor",
    "PursuerActor",
    "SessionStatus",
    "new_game",
]
