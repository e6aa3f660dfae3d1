"""Exception hierarchy for arena generation and open-tile allocation."""
from __future__ import annotations


class ArenaError(Exception):
    """Base class for every error raised by the arena modules."""


class ConfigurationError(ArenaError, ValueError):
    """Raised when a map configuration cannot be used for generation."""


class IndexOutOfRangeError(ConfigurationError, IndexError):
    """Raised when a map index does not match any configured map."""

    def __init__(self, index: int, available: int) -> None:
        self.index = index
        self.available = available
        super().__init__(
            f"map index {index} is out of range (configured maps: {available})"
        )


class EmptyAllocatorError(ArenaError, LookupError):
    """Raised when an open tile is requested but none are available."""


class StaleHandleError(ArenaError, LookupError):
    """Raised when a tile handle from a superseded generation is resolved."""


__all__ = [
    "ArenaError",
    "ConfigurationError",
    "EmptyAllocatorError",
    "IndexOutOfRangeError",
    "StaleHandleError",
]
