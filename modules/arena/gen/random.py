"""Deterministic random utilities dedicated to arena generation."""
from __future__ import annotations

import random
from typing import Iterable, List, MutableSequence, TypeVar

_T = TypeVar("_T")


def get_rng(seed: int | None = None) -> random.Random:
    """Return a :class:`random.Random` instance optionally seeded."""

    rng = random.Random()
    if seed is not None:
        rng.seed(seed)
    return rng


def shuffle_in_place(rng: random.Random, sequence: MutableSequence[_T]) -> None:
    """Fisher–Yates shuffle of ``sequence`` driven by ``rng``.

    Position ``i`` is swapped with a uniformly chosen position in
    ``[i, len(sequence))``.  Only :meth:`random.Random.randrange` is used, so
    the resulting permutation depends solely on the seed of ``rng``.
    """

    length = len(sequence)
    for i in range(length - 1):
        j = rng.randrange(i, length)
        sequence[i], sequence[j] = sequence[j], sequence[i]


def shuffle(items: Iterable[_T], seed: int) -> List[_T]:
    """Return a seeded permutation of ``items`` without touching the input."""

    result = list(items)
    shuffle_in_place(get_rng(seed), result)
    return result


__all__ = ["get_rng", "shuffle", "shuffle_in_place"]
