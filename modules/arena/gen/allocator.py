"""Cyclic coordinate queues used for repeatable random draws."""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Iterable, Iterator, List

from modules.arena.coords import Coord
from modules.arena.errors import EmptyAllocatorError
from modules.arena.gen.random import shuffle


logger = logging.getLogger(__name__)


class CoordCycle:
    """Round-robin queue of coordinates.

    Drawing takes the front coordinate and puts it straight back at the end,
    so the queue never runs dry and one full cycle visits every entry once in
    a fixed order.
    """

    def __init__(self, coords: Iterable[Coord]) -> None:
        self._queue: deque[Coord] = deque(coords)
        self._lock = threading.Lock()

    @classmethod
    def shuffled(cls, coords: Iterable[Coord], seed: int) -> "CoordCycle":
        """Build a cycle whose order is a seeded permutation of ``coords``."""

        return cls(shuffle(coords, seed))

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, coord: object) -> bool:
        return coord in self._queue

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.snapshot())

    @property
    def cycle_length(self) -> int:
        return len(self._queue)

    def snapshot(self) -> List[Coord]:
        """Return the upcoming draw order without consuming it."""

        with self._lock:
            return list(self._queue)

    def _empty(self) -> Exception:
        return IndexError("cannot draw from an empty coordinate cycle")

    def draw(self) -> Coord:
        with self._lock:
            if not self._queue:
                raise self._empty()
            coord = self._queue.popleft()
            self._queue.append(coord)
            return coord


class OpenTileAllocator(CoordCycle):
    """Serve open tiles for spawn selection without ever exhausting them."""

    def _empty(self) -> Exception:
        return EmptyAllocatorError("no open tiles available")

    def next_open_tile(self) -> Coord:
        """Return the next open tile; raises :class:`EmptyAllocatorError` if none exist."""

        return self.draw()

    def remove_tile(self, coord: Coord) -> bool:
        """Permanently drop ``coord`` by rebuilding the queue without it.

        The rebuild is linear in the number of open tiles.  Returns ``False``
        when ``coord`` was not part of the queue.
        """

        with self._lock:
            if coord not in self._queue:
                return False
            self._queue = deque(entry for entry in self._queue if entry != coord)
        logger.debug("Rebuilt open tile queue without %s (%s remaining)", coord, len(self._queue))
        return True


__all__ = ["CoordCycle", "OpenTileAllocator"]
