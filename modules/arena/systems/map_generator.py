"""Arena generation pipeline, regeneration facade and event-bus adapter."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Protocol, Sequence

from core.event_bus import Topic
from modules.arena.arena import GeneratedMap, TileFactory, TileHandle, coord_to_position
from modules.arena.coords import Coord
from modules.arena.errors import (
    ConfigurationError,
    EmptyAllocatorError,
    IndexOutOfRangeError,
    StaleHandleError,
)
from modules.arena.events import GenerateMap, MapGenerated, MapGenerationFailed, OpenTileRemoved
from modules.arena.gen import (
    CoordCycle,
    MapConfig,
    ObstaclePlacer,
    OpenTileAllocator,
    get_rng,
    place_boundary_ring,
)
from modules.arena.grid import OccupancyGrid


logger = logging.getLogger(__name__)


class _EventBus(Protocol):
    def subscribe(self, event_type: Topic, callback: Callable[..., None]) -> None:
        ...

    def unsubscribe(self, event_type: Topic, callback: Callable[..., None]) -> bool:
        ...

    def publish(
        self, event_type: Topic, payload: Mapping[str, object] | None = None, /, **kwargs: object
    ) -> None:
        ...


@dataclass(slots=True)
class _Pipeline:
    arena: GeneratedMap
    tile_cycle: CoordCycle
    allocator: OpenTileAllocator


def _run_pipeline(
    config: MapConfig,
    *,
    index: int,
    generation: int,
    attempt_budget_mode: bool,
) -> _Pipeline:
    grid = OccupancyGrid(config.width, config.height)
    tile_cycle = CoordCycle.shuffled(grid.coords(), config.seed)

    # Candidates are drawn from the all-tiles cycle so that get_random_coord
    # continues right after the last candidate used for placement.
    candidates = (tile_cycle.draw() for _ in range(len(tile_cycle)))
    budget = config.target_obstacle_count if attempt_budget_mode else None
    placement = ObstaclePlacer().place(
        grid,
        config,
        candidates,
        rng=get_rng(config.seed),
        attempt_budget=budget,
    )

    boundary = place_boundary_ring(grid, config)
    heights = dict(placement.heights)
    for coord in boundary:
        heights[coord] = config.max_obstacle_height

    allocator = OpenTileAllocator.shuffled(grid.open_coords(), config.seed)
    arena = GeneratedMap(
        index=index,
        config=config,
        grid=grid,
        placement=placement,
        boundary=boundary,
        obstacle_heights=heights,
        generation=generation,
    )
    return _Pipeline(arena=arena, tile_cycle=tile_cycle, allocator=allocator)


def generate_arena(
    config: MapConfig,
    *,
    index: int = 0,
    attempt_budget_mode: bool = False,
) -> GeneratedMap:
    """Run the generation pipeline for ``config`` and return the resulting map.

    The result depends only on ``config``: the candidate order and the open
    tile order are both seeded permutations, and obstacle heights come from a
    separate generator seeded with the same value.
    """

    return _run_pipeline(
        config,
        index=index,
        generation=0,
        attempt_budget_mode=attempt_budget_mode,
    ).arena


@dataclass(slots=True)
class _ActiveMap:
    arena: GeneratedMap
    tile_cycle: CoordCycle
    allocator: OpenTileAllocator
    tiles: Dict[Coord, Any] = field(default_factory=dict)


class MapGenerator:
    """Own the configured maps and the currently active arena.

    Every successful :meth:`generate_map` call replaces the grid, the
    all-tiles cycle, the open tile allocator and the instantiated tiles in a
    single assignment.  A failed call leaves the previous arena in place.

    Calls are expected to come from one owner at a time; only the allocator
    serialises its own draws.
    """

    def __init__(
        self,
        configs: Sequence[MapConfig],
        *,
        tile_factory: TileFactory | None = None,
        tile_size: float = 1.0,
        attempt_budget_mode: bool = False,
    ) -> None:
        self._configs: tuple[MapConfig, ...] = tuple(configs)
        for config in self._configs:
            if not isinstance(config, MapConfig):
                raise ConfigurationError("configs must contain MapConfig instances")
        if tile_size <= 0:
            raise ConfigurationError("tile_size must be positive")
        self._tile_factory = tile_factory
        self._tile_size = float(tile_size)
        self._attempt_budget_mode = attempt_budget_mode
        self._generation = 0
        self._active: _ActiveMap | None = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def configs(self) -> tuple[MapConfig, ...]:
        return self._configs

    @property
    def tile_size(self) -> float:
        return self._tile_size

    def config_for(self, index: int) -> MapConfig:
        if isinstance(index, bool) or not isinstance(index, int):
            raise ConfigurationError(f"map index must be an integer, got {index!r}")
        if not 0 <= index < len(self._configs):
            raise IndexOutOfRangeError(index, len(self._configs))
        return self._configs[index]

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate_map(self, index: int) -> GeneratedMap:
        """Generate the map configured at ``index`` and make it active."""

        config = self.config_for(index)
        generation = self._generation + 1
        pipeline = _run_pipeline(
            config,
            index=index,
            generation=generation,
            attempt_budget_mode=self._attempt_budget_mode,
        )

        tiles: Dict[Coord, Any] = {}
        if self._tile_factory is not None:
            for coord in pipeline.arena.grid.coords():
                position = coord_to_position(coord, config, self._tile_size)
                tiles[coord] = self._tile_factory.create_tile(coord, position)

        self._active = _ActiveMap(
            arena=pipeline.arena,
            tile_cycle=pipeline.tile_cycle,
            allocator=pipeline.allocator,
            tiles=tiles,
        )
        self._generation = generation

        arena = pipeline.arena
        logger.info(
            "Generated map %s (%sx%s, seed=%s): %s obstacles, %s boundary, %s open tiles",
            index,
            config.width,
            config.height,
            config.seed,
            arena.placement.placed_count,
            len(arena.boundary),
            len(pipeline.allocator),
        )
        return arena

    def _require_active(self) -> _ActiveMap:
        if self._active is None:
            raise LookupError("No map has been generated yet.")
        return self._active

    @property
    def current(self) -> GeneratedMap:
        return self._require_active().arena

    @property
    def map_index(self) -> int:
        return self._require_active().arena.index

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def grid(self) -> OccupancyGrid:
        return self._require_active().arena.grid

    @property
    def allocator(self) -> OpenTileAllocator:
        return self._require_active().allocator

    # ------------------------------------------------------------------
    # Draws
    # ------------------------------------------------------------------
    def get_random_coord(self) -> Coord:
        """Draw from the all-tiles cycle, regardless of occupancy."""

        return self._require_active().tile_cycle.draw()

    def get_random_open_tile(self) -> TileHandle:
        """Draw the next open tile; raises :class:`EmptyAllocatorError` when none remain."""

        active = self._require_active()
        coord = active.allocator.next_open_tile()
        return self._handle(active, coord)

    def try_get_random_open_tile(self) -> TileHandle | None:
        """Like :meth:`get_random_open_tile` but return ``None`` when no tile is left."""

        try:
            return self.get_random_open_tile()
        except EmptyAllocatorError:
            logger.error("No open tiles available on map %s", self.map_index)
            return None

    def remove_open_tile(self, coord: Coord) -> bool:
        """Permanently exclude ``coord`` from open tile draws."""

        return self._require_active().allocator.remove_tile(Coord.from_value(coord))

    def _handle(self, active: _ActiveMap, coord: Coord) -> TileHandle:
        return TileHandle(
            coord=coord,
            generation=active.arena.generation,
            position=coord_to_position(coord, active.arena.config, self._tile_size),
            tile=active.tiles.get(coord),
        )

    # ------------------------------------------------------------------
    # Handle resolution
    # ------------------------------------------------------------------
    def resolve(self, handle: TileHandle) -> Coord:
        """Return the coordinate behind ``handle`` if it belongs to the active map."""

        active = self._require_active()
        if handle.generation != active.arena.generation:
            raise StaleHandleError(
                f"tile handle from generation {handle.generation} is stale "
                f"(active generation {active.arena.generation})"
            )
        return handle.coord

    def tile_for(self, handle: TileHandle) -> Any:
        """Return the instantiated tile object associated with ``handle``."""

        coord = self.resolve(handle)
        return self._require_active().tiles.get(coord)


class MapGeneratorSystem:
    """Listen for :class:`GenerateMap` events and publish the outcome."""

    def __init__(self, generator: MapGenerator, *, event_bus: _EventBus) -> None:
        self._generator = generator
        self._bus = event_bus
        self._bus.subscribe(GenerateMap.topic, self._on_generate_requested)

    @property
    def generator(self) -> MapGenerator:
        return self._generator

    def _on_generate_requested(self, *, index: int, **_: object) -> None:
        try:
            arena = self._generator.generate_map(index)
        except Exception as exc:
            logger.exception("Map generation failed for index %s", index)
            MapGenerationFailed(index=index, error=exc).publish(self._bus)
            raise
        MapGenerated(index=index, arena=arena).publish(self._bus)

    def close(self) -> None:
        """Stop listening for generation requests."""

        self._bus.unsubscribe(GenerateMap.topic, self._on_generate_requested)

    def remove_open_tile(self, coord: Coord) -> bool:
        """Remove ``coord`` from draws and notify subscribers when it was present."""

        coord = Coord.from_value(coord)
        removed = self._generator.remove_open_tile(coord)
        if removed:
            OpenTileRemoved(coord=coord).publish(self._bus)
        return removed


__all__ = ["MapGenerator", "MapGeneratorSystem", "generate_arena"]
