"""Randomness primitives shared by the lottery and grouping engines."""

from __future__ import annotations

import random
import secrets
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def random_index(n: int, rng: Optional[random.Random] = None) -> int:
    """Return an index drawn uniformly from ``[0, n)``.

    Parameters
    ----------
    n : int
        Size of the sequence being indexed. Must be positive.
    rng : Optional[random.Random], default: None
        Explicit generator, mainly for tests. When omitted the ``secrets``
        module is used so results are never reproducible.
    """
    if n <= 0:
        raise ValueError("cannot pick an index from an empty sequence")
    if rng is None:
        return secrets.randbelow(n)
    return rng.randrange(n)


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Return a uniformly random permutation of ``items`` (Fisher–Yates).

    The input sequence is left untouched.
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = random_index(i + 1, rng)
        result[i], result[j] = result[j], result[i]
    return result


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split ``items`` into contiguous chunks of ``size``; the last may be shorter."""
    if size < 1:
        raise ValueError("chunk size must be at least 1")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


__all__ = ["random_index", "shuffled", "chunked"]
