# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Seeded random stream shared by every rule provider.

Every roll in a match is taken from one ``Rng`` instance, in call order.
Replaying a match needs the same seed *and* the same number and order of
``next()`` calls, so callers must never skip or reorder a draw.
"""

from __future__ import annotations

import random


class Rng:
    """Stateful uniform stream with a draw counter."""

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        self._random = random.Random(seed)
        self.draws = 0

    def next(self) -> float:
        """Return a uniform float in [0, 1)."""
        self.draws += 1
        return self._random.random()

    def index(self, n: int) -> int:
        """Return a uniform integer in [0, n), costing exactly one draw."""
        if n <= 0:
            raise ValueError(f"index() needs a positive bound, got {n}")
        return int(self.next() * n)

    def __repr__(self) -> str:
        return f"Rng(seed={self.seed}, draws={self.draws})"
