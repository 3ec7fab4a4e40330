# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest"]
# ///
"""Tests for the seeded random stream."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from rng import Rng


def test_same_seed_same_stream():
    a, b = Rng(123), Rng(123)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_different_seeds_differ():
    a, b = Rng(1), Rng(2)
    assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]


def test_next_in_unit_interval():
    rng = Rng(7)
    for _ in range(1000):
        v = rng.next()
        assert 0.0 <= v < 1.0


def test_index_costs_one_draw():
    rng = Rng(7)
    for n in (1, 2, 9, 100):
        before = rng.draws
        i = rng.index(n)
        assert 0 <= i < n
        assert rng.draws == before + 1


def test_index_matches_scaled_next():
    a, b = Rng(99), Rng(99)
    for _ in range(50):
        assert a.index(14) == int(b.next() * 14)


def test_index_rejects_empty_range():
    with pytest.raises(ValueError):
        Rng(1).index(0)


def test_random_seed_is_recorded():
    rng = Rng()
    assert isinstance(rng.seed, int)
    replay = Rng(rng.seed)
    assert rng.next() == replay.next()
