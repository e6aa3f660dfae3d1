"""Arena generation parameters, placement engine and randomness helpers."""

from .allocator import CoordCycle, OpenTileAllocator
from .params import MapConfig
from .placement import ObstaclePlacer, PlacementResult, place_boundary_ring
from .random import get_rng, shuffle, shuffle_in_place
from .validate import ConnectivityValidator, is_fully_accessible, reachable_count

__all__ = [
    "ConnectivityValidator",
    "CoordCycle",
    "MapConfig",
    "ObstaclePlacer",
    "OpenTileAllocator",
    "PlacementResult",
    "get_rng",
    "is_fully_accessible",
    "place_boundary_ring",
    "reachable_count",
    "shuffle",
    "shuffle_in_place",
]
