"""Structure shared by every skip-list flavour.

Nodes carry a list of forward references ("lanes", one per level) and a single
backward reference. Lane 0 together with the backward references forms a
doubly linked list in ascending order, which is what makes ``first``,
``last``, ``next``, ``prev`` and ``remove_first`` O(1).

The header is a sentinel node with ``max_level`` lanes. It is never handed
out: the first real node has ``prev() is None``.

Subclasses own the ordering (key comparisons or a ``less`` function) and
therefore the descent; this module only splices nodes in and out given an
*update* vector, i.e. the rightmost node visited on each level.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from random import Random
from typing import Generic, Optional, TypeVar

from .config import DuplicatePolicy, SkipListConfig
from .level import LevelSampler

logger = logging.getLogger(__name__)

N = TypeVar("N", bound="_Node")


class _Node:
    __slots__ = ("_lanes", "_prev")

    def __init__(self, level: int):
        self._lanes: list[Optional[_Node]] = [None] * level
        self._prev: Optional[_Node] = None

    @property
    def level(self) -> int:
        return len(self._lanes)

    def _detach(self) -> None:
        for i in range(len(self._lanes)):
            self._lanes[i] = None
        self._prev = None


class _SkipListBase(Generic[N]):
    """Header, bookkeeping and splicing common to all skip lists."""

    def __init__(self, config: SkipListConfig):
        self._config = config
        self._max_level = config.max_level
        self._sample_level = LevelSampler(config.max_level, config.probability, Random(config.seed))
        self._allow_duplicates = config.duplicates is DuplicatePolicy.ALLOW
        self._header = _Node(config.max_level)
        self._level = 1  # highest level in use, lanes above are empty
        self._last: Optional[N] = None
        self._size = 0
        logger.debug(
            "%s created: max_level=%d probability=%g seed=%d hash_index=%s duplicates=%s",
            type(self).__name__,
            config.max_level,
            config.probability,
            config.seed,
            config.hash_index,
            config.duplicates.value,  # type: ignore[union-attr]
        )

    @property
    def config(self) -> SkipListConfig:
        return self._config

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def first(self) -> Optional[N]:
        """Smallest node, or ``None`` when empty. O(1)."""
        return self._header._lanes[0]  # type: ignore[return-value]

    def last(self) -> Optional[N]:
        """Largest node, or ``None`` when empty. O(1)."""
        return self._last

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def _nodes(self) -> Iterator[N]:
        x = self._header._lanes[0]
        while x is not None:
            yield x  # type: ignore[misc]
            x = x._lanes[0]

    def _nodes_reversed(self) -> Iterator[N]:
        x = self._last
        while x is not None:
            yield x
            x = x._prev  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Splicing
    # ------------------------------------------------------------------
    def _new_update(self) -> list[_Node]:
        return [self._header] * self._max_level

    def _link(self, node: N, update: list[_Node]) -> None:
        """Splice ``node`` in after ``update[i]`` on each of its levels."""
        lvl = len(node._lanes)
        if lvl > self._level:
            # update[] above the old level still holds the header
            self._level = lvl
        for i in range(lvl):
            node._lanes[i] = update[i]._lanes[i]
            update[i]._lanes[i] = node
        pred = update[0]
        node._prev = None if pred is self._header else pred
        succ = node._lanes[0]
        if succ is None:
            self._last = node
        else:
            succ._prev = node
        self._size += 1

    def _unlink(self, node: N, update: list[_Node]) -> None:
        """Route around ``node`` wherever ``update[i]`` points at it, then detach it."""
        for i in range(min(len(node._lanes), self._level)):
            if update[i]._lanes[i] is node:
                update[i]._lanes[i] = node._lanes[i]
        succ = node._lanes[0]
        if succ is None:
            self._last = node._prev  # type: ignore[assignment]
        else:
            succ._prev = node._prev
        self._size -= 1
        self._shrink_level()
        node._detach()

    def _pop_first(self) -> Optional[N]:
        """Detach the first node by patching the header only. O(max_level)."""
        node = self._header._lanes[0]
        if node is None:
            return None
        for i in range(len(node._lanes)):
            if self._header._lanes[i] is node:
                self._header._lanes[i] = node._lanes[i]
        succ = node._lanes[0]
        if succ is None:
            self._last = None
        else:
            succ._prev = None
        self._size -= 1
        self._shrink_level()
        node._detach()
        return node  # type: ignore[return-value]

    def _shrink_level(self) -> None:
        while self._level > 1 and self._header._lanes[self._level - 1] is None:
            self._level -= 1
