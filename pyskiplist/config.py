"""Construction-time configuration for skip lists.

All options live in a single :class:`SkipListConfig` value which is validated
exactly once when a list is created. Fields left as ``None`` are filled in
with the defaults of the list variant that consumes the config, e.g. the
ordered map turns the hash index on while the comparator-based list cannot
use one at all.
"""
from __future__ import annotations

import enum
import time
from dataclasses import dataclass, replace
from numbers import Real
from typing import Optional

__all__ = [
    "DEFAULT_MAX_LEVEL",
    "DEFAULT_PROBABILITY",
    "ConfigurationError",
    "DuplicatePolicy",
    "SkipListConfig",
]

DEFAULT_MAX_LEVEL = 32
DEFAULT_PROBABILITY = 0.5


class ConfigurationError(ValueError):
    """Raised when a skip list is constructed with invalid options."""


class DuplicatePolicy(enum.Enum):
    """What happens when an equal key is inserted a second time."""
    REPLACE = "replace"  # keep one node, swap its value in place
    ALLOW = "allow"  # keep every node, ordered by insertion among equals


@dataclass(frozen=True)
class SkipListConfig:
    """Options accepted by :class:`~pyskiplist.SkipList` and
    :class:`~pyskiplist.SortedList`.

    Parameters
    ----------
    max_level: int
        Upper bound for the level of any node (and size of the header).
    probability: float
        Chance that a new node is promoted one more level.
    seed: int | None
        Seed of the list's private random generator. Defaults to the current
        wall-clock time in nanoseconds.
    hash_index: bool | None
        Keep a ``dict`` from key to node for O(1) exact-key access.
    duplicates: DuplicatePolicy | None
        Unique keys with in-place replace, or multiset behaviour.
    """

    max_level: int = DEFAULT_MAX_LEVEL
    probability: float = DEFAULT_PROBABILITY
    seed: Optional[int] = None
    hash_index: Optional[bool] = None
    duplicates: Optional[DuplicatePolicy] = None

    def validate(self) -> None:
        if isinstance(self.max_level, bool) or not isinstance(self.max_level, int):
            raise ConfigurationError(
                f"maximum level for skip list must be an integer, got {self.max_level!r}"
            )
        if self.max_level < 1:
            raise ConfigurationError(
                f"maximum level for skip list must be a positive integer, got {self.max_level}"
            )
        if isinstance(self.probability, bool) or not isinstance(self.probability, Real):
            raise ConfigurationError(
                f"probability for skip list must be a real number, got {self.probability!r}"
            )
        if not 0 <= self.probability <= 1:  # also rejects NaN
            raise ConfigurationError(
                "probability for skip list must be a floating point value "
                f"in the range [0, 1], got {float(self.probability):g}"
            )
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigurationError(f"seed for skip list must be an integer, got {self.seed!r}")
        if self.hash_index is not None and not isinstance(self.hash_index, bool):
            raise ConfigurationError(f"hash index flag must be a bool, got {self.hash_index!r}")
        if self.duplicates is not None and not isinstance(self.duplicates, DuplicatePolicy):
            raise ConfigurationError(
                f"duplicate policy must be a DuplicatePolicy, got {self.duplicates!r}"
            )

    def resolve(self, *, hash_index: bool, duplicates: DuplicatePolicy) -> "SkipListConfig":
        """Return a validated copy with unset fields replaced by the given defaults."""
        self.validate()
        return replace(
            self,
            seed=time.time_ns() if self.seed is None else self.seed,
            hash_index=hash_index if self.hash_index is None else self.hash_index,
            duplicates=duplicates if self.duplicates is None else self.duplicates,
        )
