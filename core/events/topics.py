"""Canonical registry of event bus topics used around arena generation.

Each entry is declared as a :class:`~enum.Enum` member and documents the
producer, the intended consumers and the payload guarantees for the associated
event.  Importing modules should rely on the enum members (e.g.
``topics.EventTopic.MAP_GENERATED``) to avoid drifting topic names.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["EventTopic"]


class EventTopic(str, Enum):
    """Enumeration of every topic published on the event bus."""

    GENERATE_MAP = "GenerateMap"
    """Published by wave or level drivers to request a new arena.

    Subscribers: :class:`modules.arena.systems.map_generator.MapGeneratorSystem`.
    Guarantees: provides the configured map ``index``.
    """

    MAP_GENERATED = "MapGenerated"
    """Published once a generation pass succeeded and became authoritative.

    Subscribers: spawners, tile instantiation layers, debug views.
    Guarantees: carries ``index`` and the new ``arena``; earlier handles are stale.
    """

    MAP_GENERATION_FAILED = "MapGenerationFailed"
    """Published when a requested generation was refused.

    Subscribers: wave drivers deciding on a fallback.
    Guarantees: carries ``index`` and the raised ``error``; the previous arena
    remains active.
    """

    OPEN_TILE_REMOVED = "OpenTileRemoved"
    """Published after a tile was permanently withdrawn from spawn draws.

    Subscribers: systems mirroring the open tile set (e.g. tile destroyers).
    Guarantees: carries the removed ``coord``.
    """
