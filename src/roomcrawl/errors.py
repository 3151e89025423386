class RoomcrawlError(Exception):
    """Base exception for the roomcrawl package."""


class ConfigError(RoomcrawlError):
    """Raised when theme data cannot be loaded or fails validation."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])

    def to_human(self) -> str:
        parts = [str(self)]
        for e in self.errors:
            path = "/".join(str(p) for p in e.path) or "<root>"
            parts.append(f" - at {path}: {e.message}")
        return "\n".join(parts)


class InvalidFloorError(RoomcrawlError):
    """Raised when a floor number below 1 is requested."""


class DungeonCompleteError(RoomcrawlError):
    """Raised when advancing a run that already cleared its final floor."""


class NoDoorError(RoomcrawlError):
    """Raised when moving through a side of a room that has no connection."""


class TriggerError(RoomcrawlError):
    """Base class for content trigger rule violations."""


class ContentAlreadyTriggeredError(TriggerError):
    """Raised when triggering content that was already triggered."""


class SecretNotDiscoveredError(TriggerError):
    """Raised when claiming a secret before it has been discovered."""


class ExitLockedError(TriggerError):
    """Raised when using a gated exit while a boss is still standing."""


class PuzzleUnsolvedError(TriggerError):
    """Raised when triggering a puzzle directly instead of solving it through its engine."""


class PuzzleStateError(RoomcrawlError):
    """Raised when a puzzle receives input in a state that does not accept it."""
