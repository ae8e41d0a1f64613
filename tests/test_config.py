"""Unit tests for construction-time configuration."""
import logging
import operator
from fractions import Fraction

import pytest

from pyskiplist import ConfigurationError, DuplicatePolicy, SkipList, SkipListConfig, SortedList


@pytest.mark.parametrize("max_level", [0, -1, -32])
def test_rejects_non_positive_max_level(max_level):
    with pytest.raises(ConfigurationError, match="positive integer"):
        SkipList(SkipListConfig(max_level=max_level))


@pytest.mark.parametrize(
    "probability", [-0.1, 1.1, float("nan"), float("inf"), Fraction(3, 2), Fraction(-1, 2)]
)
def test_rejects_probability_out_of_range(probability):
    with pytest.raises(ConfigurationError, match=r"range \[0, 1\]"):
        SkipList(SkipListConfig(probability=probability))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_level": 2.5},
        {"max_level": True},
        {"probability": "0.5"},
        {"seed": "abc"},
        {"duplicates": "allow"},
        {"hash_index": "no"},
        {"hash_index": 1},
    ],
)
def test_rejects_wrong_types(kwargs):
    with pytest.raises(ConfigurationError):
        SortedList(operator.lt, SkipListConfig(**kwargs))


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        SkipListConfig(max_level=0).validate()


@pytest.mark.parametrize("probability", [0, 0.0, 1, 1.0])
def test_accepts_probability_bounds(probability):
    sl = SkipList(SkipListConfig(probability=probability, max_level=4))
    for k in range(50):
        sl.set(k, k)
    assert [k for k, _ in sl] == list(range(50))


def test_skiplist_defaults():
    sl = SkipList()
    cfg = sl.config
    assert cfg.max_level == 32
    assert cfg.probability == 0.5
    assert isinstance(cfg.seed, int)
    assert cfg.hash_index is True
    assert cfg.duplicates is DuplicatePolicy.REPLACE


def test_sortedlist_defaults():
    cfg = SortedList(operator.lt).config
    assert cfg.hash_index is False
    assert cfg.duplicates is DuplicatePolicy.ALLOW


def test_explicit_fields_are_kept():
    cfg = SkipListConfig(max_level=8, probability=0.25, seed=99, hash_index=False,
                         duplicates=DuplicatePolicy.ALLOW)
    resolved = SkipList(cfg).config
    assert resolved == cfg


def test_sortedlist_rejects_hash_index():
    with pytest.raises(ConfigurationError, match="hash index"):
        SortedList(operator.lt, SkipListConfig(hash_index=True))


def test_sortedlist_requires_callable():
    with pytest.raises(ConfigurationError, match="callable"):
        SortedList(None)  # type: ignore[arg-type]


def test_construction_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="pyskiplist")
    SkipList(SkipListConfig(seed=5))
    assert "SkipList created" in caplog.text
    assert "seed=5" in caplog.text


def test_hash_index_flag_must_be_bool():
    with pytest.raises(ConfigurationError, match="hash index flag"):
        SkipList(SkipListConfig(hash_index="no"))  # type: ignore[arg-type]


def test_fraction_probability_in_range_is_accepted():
    sl = SkipList(SkipListConfig(probability=Fraction(1, 4), seed=1))
    for k in range(20):
        sl.set(k, k)
    assert list(sl.keys()) == list(range(20))
