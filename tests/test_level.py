"""Unit tests for random level assignment."""
from collections import Counter
from random import Random

import pytest

from pyskiplist.level import LevelSampler

DRAWS = 100_000


@pytest.mark.parametrize("probability", [0.5, 0.25, 0.75])
@pytest.mark.parametrize("max_level", [1, 2, 5, 32])
def test_levels_within_bounds(max_level, probability):
    sample = LevelSampler(max_level, probability, Random(0))
    levels = [sample() for _ in range(2000)]
    assert min(levels) >= 1
    assert max(levels) <= max_level


def test_max_level_one_always_one():
    for p in (0.0, 0.5, 1.0):
        sample = LevelSampler(1, p, Random(0))
        assert {sample() for _ in range(100)} == {1}


def test_probability_extremes():
    never = LevelSampler(16, 0.0, Random(0))
    always = LevelSampler(16, 1.0, Random(0))
    assert {never() for _ in range(100)} == {1}
    assert {always() for _ in range(100)} == {16}


@pytest.mark.parametrize("probability", [0.5, 0.3])
def test_seeded_generator_is_reproducible(probability):
    a = LevelSampler(32, probability, Random(1234))
    b = LevelSampler(32, probability, Random(1234))
    assert [a() for _ in range(1000)] == [b() for _ in range(1000)]


def test_fair_coin_distribution():
    sample = LevelSampler(32, 0.5, Random(0))
    counts = Counter(sample() for _ in range(DRAWS))
    # P(level == k) = 2**-k
    for k in (1, 2, 3, 4):
        assert counts[k] / DRAWS == pytest.approx(2.0**-k, abs=0.01)


def test_truncation_at_max_level():
    sample = LevelSampler(3, 0.5, Random(0))
    counts = Counter(sample() for _ in range(DRAWS))
    # the cap absorbs the whole tail: P(3) = 1/4
    assert set(counts) == {1, 2, 3}
    assert counts[3] / DRAWS == pytest.approx(0.25, abs=0.01)


def test_general_probability_mean():
    p = 0.25
    sample = LevelSampler(32, p, Random(0))
    mean = sum(sample() for _ in range(DRAWS)) / DRAWS
    assert mean == pytest.approx(1 / (1 - p), abs=0.02)
