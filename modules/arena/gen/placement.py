"""Obstacle placement with connectivity-preserving rollback."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from modules.arena.coords import Coord
from modules.arena.gen.params import MapConfig
from modules.arena.gen.validate import ConnectivityValidator
from modules.arena.grid import OccupancyGrid


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlacementResult:
    """Outcome of a density-driven placement pass.

    ``open_coords`` lists the cells still open after the pass, in grid
    enumeration order.  Fewer obstacles than ``target`` is a
    legitimate outcome; it is reported through ``under_density`` rather than
    compensated for.
    """

    target: int
    placed: List[Coord] = field(default_factory=list)
    rejected: List[Coord] = field(default_factory=list)
    attempts: int = 0
    open_coords: List[Coord] = field(default_factory=list)
    heights: Dict[Coord, float] = field(default_factory=dict)

    @property
    def placed_count(self) -> int:
        return len(self.placed)

    @property
    def under_density(self) -> bool:
        return len(self.placed) < self.target


def _finished(result: PlacementResult, attempt_budget: int | None) -> bool:
    if len(result.placed) >= result.target:
        return True
    return attempt_budget is not None and result.attempts >= attempt_budget


class ObstaclePlacer:
    """Place obstacles one candidate at a time, rolling back any that isolate a cell."""

    def __init__(self, validator: ConnectivityValidator | None = None) -> None:
        self._validator = validator or ConnectivityValidator()

    def place(
        self,
        grid: OccupancyGrid,
        config: MapConfig,
        candidate_order: Iterable[Coord],
        *,
        rng: random.Random | None = None,
        attempt_budget: int | None = None,
    ) -> PlacementResult:
        """Consume ``candidate_order`` until the density target is reached.

        Cells that are already occupied are skipped without counting as an
        attempt.  The center cell and any cell whose obstacle would leave an
        open cell unreachable from the center are rejected and never offered
        again.  With ``config.boundary_obstacles`` set, outer-ring cells count
        as blocked while validating, so the ring added afterwards cannot cut
        off an interior cell.  ``attempt_budget`` caps the number of
        attempts, rejected ones included.  When ``rng`` is given, every kept
        obstacle draws a height from it in placement order.
        """

        center = config.center
        result = PlacementResult(target=config.target_obstacle_count)

        # The ring goes in after this pass; validate as if it were already there.
        ring = frozenset(grid.boundary_coords()) if config.boundary_obstacles else frozenset()
        open_ring = sum(1 for coord in ring if not grid.is_occupied(coord))

        if not _finished(result, attempt_budget):
            for candidate in candidate_order:
                if grid.is_occupied(candidate):
                    continue

                result.attempts += 1
                grid.occupy(candidate)
                on_ring = candidate in ring
                expected = grid.open_count - open_ring + (1 if on_ring else 0)
                if candidate == center or not self._validator.is_fully_accessible(
                    grid, center, expected, ring
                ):
                    grid.vacate(candidate)
                    result.rejected.append(candidate)
                    logger.debug("Rejected obstacle candidate %s", candidate)
                else:
                    result.placed.append(candidate)
                    if on_ring:
                        open_ring -= 1
                    if rng is not None:
                        result.heights[candidate] = config.obstacle_height(rng.random())

                # candidate_order may draw lazily from a cycle; do not pull one extra.
                if _finished(result, attempt_budget):
                    break

        result.open_coords = grid.open_coords()

        if result.under_density:
            logger.warning(
                "Placed %s of %s requested obstacles on %sx%s map (seed=%s, "
                "%s attempts, %s rejected to keep the map connected)",
                len(result.placed),
                result.target,
                config.width,
                config.height,
                config.seed,
                result.attempts,
                len(result.rejected),
            )
        else:
            logger.debug(
                "Placed %s obstacles in %s attempts (%s rejected)",
                len(result.placed),
                result.attempts,
                len(result.rejected),
            )
        return result


def place_boundary_ring(grid: OccupancyGrid, config: MapConfig) -> List[Coord]:
    """Occupy every free outer-ring cell when ``config.boundary_obstacles`` is set.

    The ring is not validated again here; :meth:`ObstaclePlacer.place`
    already kept the interior connected with the ring treated as blocked.
    Returns the cells that were newly occupied.
    """

    if not config.boundary_obstacles:
        return []

    added: List[Coord] = []
    for coord in grid.boundary_coords():
        if grid.occupy(coord):
            added.append(coord)
    logger.debug("Boundary ring added %s obstacles", len(added))
    return added


__all__ = ["ObstaclePlacer", "PlacementResult", "place_boundary_ring"]
