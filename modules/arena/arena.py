"""Generated arena records and the handles given out to collaborators."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple, runtime_checkable

from modules.arena.coords import Coord
from modules.arena.gen.params import Colour, MapConfig
from modules.arena.gen.placement import PlacementResult
from modules.arena.grid import OccupancyGrid


@runtime_checkable
class TileFactory(Protocol):
    """Hook for the layer that instantiates a visual or physical tile per cell."""

    def create_tile(self, coord: Coord, position: Tuple[float, float]) -> Any:
        ...


def coord_to_position(coord: Coord, config: MapConfig, tile_size: float = 1.0) -> Tuple[float, float]:
    """Return the world-space centre of ``coord`` on a map centred at the origin."""

    return (
        (-config.width / 2 + 0.5 + coord.x) * tile_size,
        (-config.height / 2 + 0.5 + coord.y) * tile_size,
    )


@dataclass(frozen=True, slots=True)
class GeneratedMap:
    """Result of one generation pass.

    ``grid`` includes the boundary ring when it is enabled; ``placement``
    describes the density pass only.  ``generation`` increases with every
    successful pass of a :class:`~modules.arena.systems.map_generator.MapGenerator`
    and ties handed-out tile handles to this map.
    """

    index: int
    config: MapConfig
    grid: OccupancyGrid
    placement: PlacementResult
    boundary: List[Coord] = field(default_factory=list)
    obstacle_heights: Dict[Coord, float] = field(default_factory=dict)
    generation: int = 0

    @property
    def center(self) -> Coord:
        return self.config.center

    @property
    def obstacle_count(self) -> int:
        return self.grid.obstacle_count

    @property
    def open_coords(self) -> List[Coord]:
        return self.grid.open_coords()

    @property
    def obstacle_colours(self) -> Dict[Coord, Colour]:
        return {coord: self.config.obstacle_colour(coord.y) for coord in self.grid.obstacle_coords()}


@dataclass(frozen=True, slots=True)
class TileHandle:
    """Reference to an open tile of a specific generation.

    ``tile`` is whatever the configured :class:`TileFactory` produced for the
    cell, or ``None`` when no factory is installed.
    """

    coord: Coord
    generation: int
    position: Tuple[float, float]
    tile: Any = None


__all__ = ["GeneratedMap", "TileFactory", "TileHandle", "coord_to_position"]
