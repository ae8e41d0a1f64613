"""Sorted multiset of bare values ordered by a caller-supplied ``less``.

Values carry no separate key, so there is no hash index. Two values rank
equal when neither is ``less`` than the other. By default equal-ranked values
all stay in the list, in insertion order; with
``DuplicatePolicy.REPLACE`` they collapse into a single item.

Items are removed through their handle, :meth:`Item.remove_from`, which finds
that exact item even among many equal-ranked neighbours.
"""
from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Generic, Optional, TypeVar

from ._core import _Node, _SkipListBase
from .config import ConfigurationError, DuplicatePolicy, SkipListConfig

__all__ = ["Item", "SortedList"]

T = TypeVar("T")


class Item(_Node, Generic[T]):
    """Handle to a value stored in a :class:`SortedList`."""

    __slots__ = ("_value",)

    def __init__(self, value: T, level: int):
        super().__init__(level)
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def next(self) -> Optional[Item[T]]:
        """Node directly succeeding this one, or ``None``."""
        return self._lanes[0]  # type: ignore[return-value]

    def prev(self) -> Optional[Item[T]]:
        """Node directly preceding this one, or ``None``."""
        return self._prev  # type: ignore[return-value]

    def remove_from(self, lst: SortedList[T]) -> Optional[Item[T]]:
        """Detach this item from ``lst`` if it is still there.

        Returns the item, or ``None`` when it is not a member of ``lst``.
        O(1) for the first item, else O(log n + number of equal values).
        """
        return lst._remove_item(self)

    def __repr__(self) -> str:  # pragma: no cover
        return f"Item<{self._value!r}>"


class SortedList(_SkipListBase[Item[T]], Generic[T]):
    """Skip list of values ordered by ``less(a, b) -> bool``."""

    def __init__(self, less: Callable[[T, T], bool], config: Optional[SkipListConfig] = None):
        if not callable(less):
            raise ConfigurationError(f"ordering function must be callable, got {less!r}")
        config = (config or SkipListConfig()).resolve(
            hash_index=False, duplicates=DuplicatePolicy.ALLOW
        )
        if config.hash_index:
            raise ConfigurationError("hash index is not supported for values without keys")
        super().__init__(config)
        self._less = less

    # ---------------------------------------------------------------------
    # Traversal
    # ---------------------------------------------------------------------
    def _descend(self, value: T, inclusive: bool = False, update: Optional[list[_Node]] = None) -> _Node:
        """Return the rightmost node ranked below ``value`` (at or below if *inclusive*)."""
        less = self._less
        x: _Node = self._header
        for i in reversed(range(self._level)):
            if inclusive:
                while (nxt := x._lanes[i]) and not less(value, nxt._value):  # type: ignore[attr-defined]
                    x = nxt
            else:
                while (nxt := x._lanes[i]) and less(nxt._value, value):  # type: ignore[attr-defined]
                    x = nxt
            if update is not None:
                update[i] = x
        return x

    # ---------------------------------------------------------------------
    # Mutation API
    # ---------------------------------------------------------------------
    def add(self, value: T) -> Item[T]:
        """Insert ``value`` and return its item.

        Under ``DuplicatePolicy.REPLACE`` an equal-ranked item already in the
        list has its value replaced and is returned instead.
        """
        update = self._new_update()
        x = self._descend(value, self._allow_duplicates, update)
        if not self._allow_duplicates:
            nxt = x._lanes[0]
            if nxt is not None and not self._less(value, nxt._value):  # type: ignore[attr-defined]
                nxt._value = value  # type: ignore[attr-defined]
                return nxt  # type: ignore[return-value]
        item = Item(value, self._sample_level())
        self._link(item, update)
        return item

    def remove_first(self) -> Optional[Item[T]]:
        """Remove and return the smallest item. O(1)."""
        return self._pop_first()

    def _remove_item(self, item: Item[T]) -> Optional[Item[T]]:
        if item is self.first():
            return self._pop_first()
        update = self._new_update()
        self._descend(item._value, update=update)
        less = self._less
        # update[i] now precedes the run of values equal to item's; walk that
        # run on every level the item could occupy until the item itself.
        for i in range(min(len(item._lanes), self._level)):
            x = update[i]
            while (nxt := x._lanes[i]) and nxt is not item and not less(item._value, nxt._value):  # type: ignore[attr-defined]
                x = nxt
            update[i] = x
        if update[0]._lanes[0] is not item:
            return None
        self._unlink(item, update)
        return item

    # ---------------------------------------------------------------------
    # Query API
    # ---------------------------------------------------------------------
    def get(self, value: T) -> Optional[Item[T]]:
        """First item ranked equal to ``value``, or ``None``."""
        item = self._descend(value)._lanes[0]
        if item is not None and not self._less(value, item._value):  # type: ignore[attr-defined]
            return item  # type: ignore[return-value]
        return None

    def __contains__(self, value: T) -> bool:
        return self.get(value) is not None

    def at_or_after(self, value: T) -> Optional[Item[T]]:
        """First item ranked at or above ``value``."""
        return self._descend(value)._lanes[0]  # type: ignore[return-value]

    search = at_or_after

    def after(self, value: T) -> Optional[Item[T]]:
        """First item ranked strictly above ``value``."""
        x = self._descend(value, inclusive=True)._lanes[0]
        return x  # type: ignore[return-value]

    def at_or_before(self, value: T) -> Optional[Item[T]]:
        """Last item ranked at or below ``value``."""
        x = self._descend(value, inclusive=True)
        return None if x is self._header else x  # type: ignore[return-value]

    def before(self, value: T) -> Optional[Item[T]]:
        """Last item ranked strictly below ``value``."""
        x = self._descend(value)
        return None if x is self._header else x  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[T]:
        for item in self._nodes():
            yield item._value

    def __reversed__(self) -> Iterator[T]:
        for item in self._nodes_reversed():
            yield item._value

    def __repr__(self) -> str:  # pragma: no cover
        return f"SortedList({list(self)!r})"
