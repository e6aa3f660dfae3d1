"""Boolean occupancy grid shared by placement and validation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

from modules.arena.coords import Coord


BoolGrid = List[List[bool]]

OBSTACLE_CHAR = "#"
OPEN_CHAR = "."


@dataclass(slots=True, eq=False)
class OccupancyGrid:
    """Obstacle mask for a rectangular arena.

    Cells are stored row-major (``cells[y][x]``); ``True`` marks an obstacle.
    The obstacle count is tracked incrementally so that placement can query
    it after every provisional mark or rollback.
    """

    width: int
    height: int
    cells: BoolGrid | None = None
    _obstacles: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")

        if self.cells is None:
            self.cells = [[False for _ in range(self.width)] for _ in range(self.height)]
        else:
            if len(self.cells) != self.height or any(len(row) != self.width for row in self.cells):
                raise ValueError("grid dimensions do not match width and height")
            self.cells = [[bool(value) for value in row] for row in self.cells]
        self._obstacles = sum(row.count(True) for row in self.cells)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        """Return ``True`` when ``(x, y)`` lies within the grid bounds."""

        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, coord: Coord) -> None:
        if not self.in_bounds(coord.x, coord.y):
            raise IndexError(f"{coord} lies outside a {self.width}x{self.height} grid")

    def is_occupied(self, coord: Coord) -> bool:
        self._check(coord)
        return self.cells[coord.y][coord.x]

    def occupy(self, coord: Coord) -> bool:
        """Mark ``coord`` as an obstacle; return ``False`` if it already was."""

        self._check(coord)
        if self.cells[coord.y][coord.x]:
            return False
        self.cells[coord.y][coord.x] = True
        self._obstacles += 1
        return True

    def vacate(self, coord: Coord) -> bool:
        """Undo a single obstacle mark; return ``False`` if the cell was open."""

        self._check(coord)
        if not self.cells[coord.y][coord.x]:
            return False
        self.cells[coord.y][coord.x] = False
        self._obstacles -= 1
        return True

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    @property
    def tile_count(self) -> int:
        return self.width * self.height

    @property
    def obstacle_count(self) -> int:
        return self._obstacles

    @property
    def open_count(self) -> int:
        return self.tile_count - self._obstacles

    def coords(self) -> Iterator[Coord]:
        """Enumerate every cell column by column: ``(0, 0), (0, 1), ...``."""

        for x in range(self.width):
            for y in range(self.height):
                yield Coord(x, y)

    def open_coords(self) -> List[Coord]:
        return [coord for coord in self.coords() if not self.cells[coord.y][coord.x]]

    def obstacle_coords(self) -> List[Coord]:
        return [coord for coord in self.coords() if self.cells[coord.y][coord.x]]

    def is_boundary(self, coord: Coord) -> bool:
        return (
            coord.x == 0
            or coord.y == 0
            or coord.x == self.width - 1
            or coord.y == self.height - 1
        )

    def boundary_coords(self) -> List[Coord]:
        """Return the outer ring of cells in enumeration order."""

        return [coord for coord in self.coords() if self.is_boundary(coord)]

    # ------------------------------------------------------------------
    # Export helpers
    # ------------------------------------------------------------------
    def copy(self) -> "OccupancyGrid":
        return OccupancyGrid(self.width, self.height, [list(row) for row in self.cells])

    def to_rows(self) -> BoolGrid:
        return [list(row) for row in self.cells]

    def render(self, *, obstacle: str = OBSTACLE_CHAR, open_: str = OPEN_CHAR) -> str:
        """Return an ASCII picture of the grid, row ``y = 0`` first."""

        return "\n".join(
            "".join(obstacle if cell else open_ for cell in row)
            for row in self.cells
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupancyGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.cells == other.cells
        )


__all__ = ["BoolGrid", "OccupancyGrid"]
