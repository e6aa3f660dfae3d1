"""Event definitions for arena generation and tile allocation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Protocol, runtime_checkable

from core.events.topics import EventTopic
from modules.arena.arena import GeneratedMap
from modules.arena.coords import Coord


@runtime_checkable
class _PublishesEvents(Protocol):
    """Protocol capturing the subset of the event bus used here."""

    def publish(self, event_type: str, **payload: object) -> None:
        """Publish an event to all subscribers."""


@dataclass(frozen=True, slots=True)
class GenerateMap:
    """Request generation of the configured map at ``index``."""

    index: int

    topic: ClassVar[str] = EventTopic.GENERATE_MAP.value

    def publish(self, bus: _PublishesEvents) -> None:
        bus.publish(self.topic, index=self.index)


@dataclass(frozen=True, slots=True)
class MapGenerated:
    """Notification carrying the arena that just became active."""

    index: int
    arena: GeneratedMap

    topic: ClassVar[str] = EventTopic.MAP_GENERATED.value

    def publish(self, bus: _PublishesEvents) -> None:
        bus.publish(self.topic, index=self.index, arena=self.arena)


@dataclass(frozen=True, slots=True)
class MapGenerationFailed:
    """Notification that a generation request was refused."""

    index: int
    error: Exception

    topic: ClassVar[str] = EventTopic.MAP_GENERATION_FAILED.value

    def publish(self, bus: _PublishesEvents) -> None:
        bus.publish(self.topic, index=self.index, error=self.error)


@dataclass(frozen=True, slots=True)
class OpenTileRemoved:
    """Notification that ``coord`` no longer takes part in open tile draws."""

    coord: Coord

    topic: ClassVar[str] = EventTopic.OPEN_TILE_REMOVED.value

    def publish(self, bus: _PublishesEvents) -> None:
        bus.publish(self.topic, coord=self.coord)


__all__ = [
    "GenerateMap",
    "MapGenerated",
    "MapGenerationFailed",
    "OpenTileRemoved",
]
