"""pyskiplist: probabilistic ordered containers built on a doubly linked skip list.

`pyskiplist.SkipList` is an ordered map with exact-key, nearest-key and
bidirectional access; `pyskiplist.SortedList` keeps bare values ordered by a
caller-supplied ``less`` function and supports multiset usage. Both are
configured through a single, validated `pyskiplist.SkipListConfig`.
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DuplicatePolicy",
    "Element",
    "Item",
    "SkipList",
    "SkipListConfig",
    "SortedList",
]

from .config import ConfigurationError, DuplicatePolicy, SkipListConfig
from .skiplist import Element, SkipList
from .sortedlist import Item, SortedList
