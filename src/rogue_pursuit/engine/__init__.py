"""Turn coordination: the cooperative scheduler and its suspension protocol."""
from .scheduler import SchedulerState, TurnOutcome, TurnScheduler

__all__ = ["SchedulerState", "TurnOutcome", "TurnScheduler"]
