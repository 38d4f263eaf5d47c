class RoguePursuitError(Exception):
    """Base exception for the Rogue Pursuit project."""


class ExhaustedPoolError(RoguePursuitError):
    """Raised when map generation needs more free cells than were carved."""


class SchedulerError(RoguePursuitError):
    """Raised when the turn scheduler is driven out of order (lock/unlock/advance misuse)."""


class InvalidInputEvent(RoguePursuitError):
    """Raised for key codes that are not bound to any action."""

    def __init__(self, code: object) -> None:
        super().__init__(f"Unrecognized key code: {code!r}")
        self.code = code


class ConfigError(RoguePursuitError):
    """Raised when a configuration file cannot be parsed into a GameConfig."""
