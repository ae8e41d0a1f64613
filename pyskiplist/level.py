"""Random level assignment for new skip-list nodes.

Levels follow a geometric law truncated at ``max_level``: starting from 1,
each successful coin flip (probability ``p``) adds one level.
"""
from __future__ import annotations

from random import Random

__all__ = ["LevelSampler"]


class LevelSampler:
    """Draws node levels from a list-owned random generator."""

    __slots__ = ("max_level", "probability", "_rng")

    def __init__(self, max_level: int, probability: float, rng: Random):
        self.max_level = max_level
        self.probability = probability
        self._rng = rng

    def __call__(self) -> int:
        if self.probability == 0.5:
            # Each random bit is a fair coin flip; the run of trailing ones
            # is the number of promotions. max_level - 1 bits caps the result.
            bits = self._rng.getrandbits(self.max_level - 1)
            return (~bits & (bits + 1)).bit_length()
        lvl = 1
        while lvl < self.max_level and self._rng.random() < self.probability:
            lvl += 1
        return lvl
