"""Shared fixtures for the skip list tests."""
import pytest

from pyskiplist import SkipList


def _lane(sl, level):
    nodes = []
    x = sl._header._lanes[level]
    while x is not None:
        nodes.append(x)
        x = x._lanes[level]
    return nodes


def _assert_structure(sl):
    nodes = _lane(sl, 0)
    assert len(nodes) == len(sl)

    # backward references mirror lane 0
    prev = None
    for node in nodes:
        assert node._prev is prev
        prev = node
    assert sl.last() is (nodes[-1] if nodes else None)
    assert sl.first() is (nodes[0] if nodes else None)

    # every lane is the subsequence of nodes tall enough to be on it
    for level in range(sl._max_level):
        expected = [id(n) for n in nodes if n.level > level]
        assert [id(n) for n in _lane(sl, level)] == expected
    assert all(1 <= n.level <= sl._max_level for n in nodes)

    # ordering (ties allowed only for multisets)
    if isinstance(sl, SkipList):
        keys = [n.key for n in nodes]
        for a, b in zip(keys, keys[1:]):
            assert a < b or (sl._allow_duplicates and a == b)
        if sl._index is not None:
            assert set(sl._index) == set(keys)
            for key, elem in sl._index.items():
                assert elem.key == key
                assert elem.prev() is None or elem.prev().key != key
    else:
        values = [n.value for n in nodes]
        for a, b in zip(values, values[1:]):
            assert not sl._less(b, a)


@pytest.fixture
def check_structure():
    """Assert every structural invariant of a skip list."""
    return _assert_structure
