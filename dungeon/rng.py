"""Random numbers for game logic."""

from __future__ import annotations

import random

_random = random.Random()


def gen_range(low, high):
    """Return a random value in ``[low, high)``.

    Integers draw uniformly from the half-open range and need ``low < high``;
    floats draw from the continuous interval.
    """
    if isinstance(low, int) and isinstance(high, int):
        if low >= high:
            raise ValueError(f"empty range [{low}, {high})")
        return _random.randrange(low, high)
    return low + (high - low) * _random.random()