"""Flood-fill reachability checks over an occupancy grid."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import AbstractSet, List, Tuple

from modules.arena.coords import CARDINAL_OFFSETS, Coord
from modules.arena.grid import OccupancyGrid


@dataclass(slots=True)
class ValidationResult:
    reachable: int
    expected: int

    @property
    def valid(self) -> bool:
        return self.reachable == self.expected


class ConnectivityValidator:
    """Breadth-first reachability from a fixed origin.

    The visited buffer is allocated once per grid size and reused between
    calls.  Each call bumps a stamp instead of clearing the buffer, so a
    cell counts as visited only if it carries the stamp of the current call.
    """

    def __init__(self) -> None:
        self._marks: List[List[int]] = []
        self._stamp = 0
        self._shape: tuple[int, int] = (0, 0)

    def _begin(self, grid: OccupancyGrid) -> int:
        shape = (grid.width, grid.height)
        if shape != self._shape:
            self._marks = [[0] * grid.width for _ in range(grid.height)]
            self._shape = shape
            self._stamp = 0
        self._stamp += 1
        return self._stamp

    def reachable_count(
        self,
        grid: OccupancyGrid,
        origin: Coord,
        blocked: AbstractSet[Coord] = frozenset(),
    ) -> int:
        """Return how many open cells can be reached from ``origin``.

        Cells in ``blocked`` are treated as obstacles even while the grid
        still has them open.  An origin outside the grid, on an obstacle or
        in ``blocked`` reaches nothing.
        """

        if not grid.in_bounds(origin.x, origin.y) or grid.cells[origin.y][origin.x]:
            return 0
        if origin in blocked:
            return 0

        stamp = self._begin(grid)
        marks = self._marks
        cells = grid.cells
        width, height = grid.width, grid.height

        # Pre-stamped cells are skipped by the fill like visited ones.
        for cell in blocked:
            if grid.in_bounds(cell.x, cell.y):
                marks[cell.y][cell.x] = stamp

        queue: deque[Tuple[int, int]] = deque([(origin.x, origin.y)])
        marks[origin.y][origin.x] = stamp
        count = 1
        while queue:
            x, y = queue.popleft()
            for dx, dy in CARDINAL_OFFSETS:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    continue
                if marks[ny][nx] == stamp or cells[ny][nx]:
                    continue
                marks[ny][nx] = stamp
                queue.append((nx, ny))
                count += 1
        return count

    def is_fully_accessible(
        self,
        grid: OccupancyGrid,
        origin: Coord,
        expected_reachable_count: int,
        blocked: AbstractSet[Coord] = frozenset(),
    ) -> bool:
        """Return ``True`` iff exactly ``expected_reachable_count`` cells are reachable."""

        return self.reachable_count(grid, origin, blocked) == expected_reachable_count

    def validate(self, grid: OccupancyGrid, origin: Coord) -> ValidationResult:
        """Check that every open cell of ``grid`` is reachable from ``origin``."""

        return ValidationResult(
            reachable=self.reachable_count(grid, origin),
            expected=grid.open_count,
        )

    def find_unreachable(self, grid: OccupancyGrid, origin: Coord) -> List[Coord]:
        """Return open cells that cannot be reached from ``origin``."""

        self.reachable_count(grid, origin)
        stamp = self._stamp
        origin_open = grid.in_bounds(origin.x, origin.y) and not grid.cells[origin.y][origin.x]
        unreachable: List[Coord] = []
        for coord in grid.coords():
            if grid.cells[coord.y][coord.x]:
                continue
            if origin_open and self._marks[coord.y][coord.x] == stamp:
                continue
            unreachable.append(coord)
        return unreachable


def reachable_count(grid: OccupancyGrid, origin: Coord) -> int:
    """Convenience wrapper running a one-off :class:`ConnectivityValidator`."""

    return ConnectivityValidator().reachable_count(grid, origin)


def is_fully_accessible(
    grid: OccupancyGrid,
    origin: Coord,
    expected_reachable_count: int,
) -> bool:
    return ConnectivityValidator().is_fully_accessible(grid, origin, expected_reachable_count)


__all__ = [
    "ConnectivityValidator",
    "ValidationResult",
    "is_fully_accessible",
    "reachable_count",
]
