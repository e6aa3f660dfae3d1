"""Grid coordinate value type."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


CARDINAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(frozen=True, slots=True, order=True)
class Coord:
    """Integer tile coordinate, hashable and compared by value."""

    x: int
    y: int

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    @classmethod
    def from_value(cls, value: "Coord | Tuple[int, int]") -> "Coord":
        """Coerce ``value`` (a :class:`Coord` or an ``(x, y)`` pair) to :class:`Coord`."""

        if isinstance(value, Coord):
            return value
        x, y = value
        return cls(int(x), int(y))


__all__ = ["CARDINAL_OFFSETS", "Coord"]
