"""Ordered map backed by a doubly linked skip list.

Keys only need to support ``<``, ``<=`` and ``==``; with the hash index
enabled (the default) they must also be hashable.

Complexities (average case):
    • get / contains   – O(1) with hash index, else O(log n)
    • set              – O(1) when the key exists and the hash index is on,
                         else O(log n)
    • remove           – O(log n)
    • remove_first     – O(1)
    • before / after / at_or_before / at_or_after – O(log n)
    • first / last / next / prev                  – O(1)

Replacing the value of an existing key never moves or re-levels its node, so
handles obtained earlier stay valid across ``set``.
"""
from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, Optional, TypeVar

from ._core import _Node, _SkipListBase
from .config import DuplicatePolicy, SkipListConfig

__all__ = ["Element", "SkipList"]

K = TypeVar("K")
V = TypeVar("V")


class Element(_Node, Generic[K, V]):
    """Handle to a key/value pair stored in a :class:`SkipList`."""

    __slots__ = ("_key", "_value")

    def __init__(self, key: K, value: V, level: int):
        super().__init__(level)
        self._key = key
        self._value = value

    @property
    def key(self) -> K:
        return self._key

    @property
    def value(self) -> V:
        return self._value

    def next(self) -> Optional[Element[K, V]]:
        """Node directly succeeding this one, or ``None``."""
        return self._lanes[0]  # type: ignore[return-value]

    def prev(self) -> Optional[Element[K, V]]:
        """Node directly preceding this one, or ``None``."""
        return self._prev  # type: ignore[return-value]

    def __repr__(self) -> str:  # pragma: no cover
        return f"Element<{self._key!r}:{self._value!r}>"


class SkipList(_SkipListBase[Element[K, V]], Generic[K, V]):
    """Skip list mapping sorted keys to arbitrary values.

    By default keys are unique (``set`` replaces the value in place) and an
    auxiliary ``dict`` gives O(1) exact-key access. Pass a
    :class:`~pyskiplist.SkipListConfig` to change either, or to seed the
    level generator.
    """

    def __init__(self, config: Optional[SkipListConfig] = None):
        config = (config or SkipListConfig()).resolve(
            hash_index=True, duplicates=DuplicatePolicy.REPLACE
        )
        super().__init__(config)
        # key -> first node carrying that key
        self._index: Optional[dict[K, Element[K, V]]] = {} if config.hash_index else None

    # ---------------------------------------------------------------------
    # Traversal
    # ---------------------------------------------------------------------
    def _descend(self, key: K, inclusive: bool = False, update: Optional[list[_Node]] = None) -> _Node:
        """Return the rightmost node with key < ``key`` (``<=`` if *inclusive*).

        The header is returned when no such node exists. When given,
        ``update[i]`` receives the rightmost node visited on level ``i``.
        """
        x: _Node = self._header
        for i in reversed(range(self._level)):
            if inclusive:
                while (nxt := x._lanes[i]) and nxt._key <= key:  # type: ignore[attr-defined]
                    x = nxt
            else:
                while (nxt := x._lanes[i]) and nxt._key < key:  # type: ignore[attr-defined]
                    x = nxt
            if update is not None:
                update[i] = x
        return x

    # ---------------------------------------------------------------------
    # Mutation API
    # ---------------------------------------------------------------------
    def set(self, key: K, value: V) -> Element[K, V]:
        """Insert ``key`` with ``value`` and return its element.

        If the key exists and duplicates are not allowed, the existing element
        keeps its place and level and only its value is replaced.
        """
        if not self._allow_duplicates and self._index is not None:
            if (elem := self._index.get(key)) is not None:
                elem._value = value
                return elem
        update = self._new_update()
        x = self._descend(key, self._allow_duplicates, update)
        if not self._allow_duplicates and self._index is None:
            nxt = x._lanes[0]
            if nxt is not None and nxt._key == key:  # type: ignore[attr-defined]
                nxt._value = value  # type: ignore[attr-defined]
                return nxt  # type: ignore[return-value]
        elem = Element(key, value, self._sample_level())
        self._link(elem, update)
        if self._index is not None:
            self._index.setdefault(key, elem)
        return elem

    def remove(self, key: K) -> Optional[Element[K, V]]:
        """Remove ``key`` and return its (now detached) element, or ``None``.

        With duplicates allowed the first element with that key is removed.
        """
        if self._index is not None and key not in self._index:
            return None
        update = self._new_update()
        elem = self._descend(key, update=update)._lanes[0]
        if elem is None or elem._key != key:  # type: ignore[attr-defined]
            return None
        self._unindex(elem)  # type: ignore[arg-type]
        self._unlink(elem, update)  # type: ignore[arg-type]
        return elem  # type: ignore[return-value]

    def remove_first(self) -> Optional[Element[K, V]]:
        """Remove and return the smallest element. O(1)."""
        elem = self.first()
        if elem is None:
            return None
        self._unindex(elem)
        return self._pop_first()

    def _unindex(self, elem: Element[K, V]) -> None:
        # elem is always the first node with its key here
        if self._index is None:
            return
        succ = elem._lanes[0]
        if succ is not None and succ._key == elem._key:  # type: ignore[attr-defined]
            self._index[elem._key] = succ  # type: ignore[assignment]
        else:
            del self._index[elem._key]

    # ---------------------------------------------------------------------
    # Query API
    # ---------------------------------------------------------------------
    def get(self, key: K) -> Optional[Element[K, V]]:
        """Element with exactly ``key``, or ``None``."""
        if self._index is not None:
            return self._index.get(key)
        elem = self._descend(key)._lanes[0]
        if elem is not None and elem._key == key:  # type: ignore[attr-defined]
            return elem  # type: ignore[return-value]
        return None

    def contains(self, key: K) -> bool:
        return self.get(key) is not None

    __contains__ = contains

    def at_or_after(self, key: K) -> Optional[Element[K, V]]:
        """Element at ``key`` or else the closest succeeding key (ceiling)."""
        if self._index is not None and (elem := self._index.get(key)) is not None:
            return elem
        return self._descend(key)._lanes[0]  # type: ignore[return-value]

    search = at_or_after

    def after(self, key: K) -> Optional[Element[K, V]]:
        """First element with a key strictly greater than ``key``."""
        elem = self.at_or_after(key)
        while elem is not None and elem._key == key:
            elem = elem.next()
        return elem

    def at_or_before(self, key: K) -> Optional[Element[K, V]]:
        """Element at ``key`` or else the closest preceding key (floor).

        With duplicates allowed the last element with that key is returned.
        """
        if not self._allow_duplicates and self._index is not None:
            if (elem := self._index.get(key)) is not None:
                return elem
        x = self._descend(key, inclusive=True)
        return None if x is self._header else x  # type: ignore[return-value]

    def before(self, key: K) -> Optional[Element[K, V]]:
        """Last element with a key strictly smaller than ``key``."""
        elem = self.at_or_before(key)
        while elem is not None and elem._key == key:
            elem = elem.prev()
        return elem

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[tuple[K, V]]:
        for elem in self._nodes():
            yield elem._key, elem._value

    def __reversed__(self) -> Iterator[tuple[K, V]]:
        for elem in self._nodes_reversed():
            yield elem._key, elem._value

    def keys(self) -> Iterator[K]:
        return (elem._key for elem in self._nodes())

    def values(self) -> Iterator[V]:
        return (elem._value for elem in self._nodes())

    items = __iter__

    def __repr__(self) -> str:  # pragma: no cover
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self)
        return f"SkipList({{{body}}})"
