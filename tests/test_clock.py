"""Tests for the exact sample-count time model."""

from __future__ import annotations

import itertools
from fractions import Fraction

import pytest

from tonegraph import SampleTime


class TestConstruction:
    def test_fields(self) -> None:
        t = SampleTime(3, 48000)
        assert t.count == 3
        assert t.rate == 48000

    def test_zero_rate_raises(self) -> None:
        with pytest.raises(ValueError, match="rate must be positive"):
            SampleTime(1, 0)

    def test_negative_count_raises(self) -> None:
        with pytest.raises(ValueError, match="count must be non-negative"):
            SampleTime(-1, 44100)

    def test_immutable(self) -> None:
        t = SampleTime(1, 48000)
        with pytest.raises(AttributeError):
            t.count = 2  # type: ignore[misc]


class TestConversion:
    def test_as_secs(self) -> None:
        assert SampleTime(24000, 48000).as_secs() == 0.5
        assert SampleTime(1, 440).as_secs() == 1 / 440

    def test_as_fraction(self) -> None:
        assert SampleTime(2, 96000).as_fraction() == Fraction(1, 48000)


class TestComparison:
    def test_equal_across_rates(self) -> None:
        assert SampleTime(1, 48000) == SampleTime(2, 96000)
        assert SampleTime(441, 44100) == SampleTime(480, 48000)

    def test_not_equal(self) -> None:
        assert SampleTime(1, 48000) != SampleTime(1, 44100)

    def test_less_than(self) -> None:
        assert SampleTime(1, 48000) < SampleTime(1, 44100)
        assert not SampleTime(1, 44100) < SampleTime(1, 48000)

    def test_derived_orderings(self) -> None:
        a = SampleTime(1, 4)
        b = SampleTime(1, 2)
        assert a <= b
        assert b > a
        assert b >= a
        assert a <= SampleTime(2, 8)

    def test_not_comparable_with_float(self) -> None:
        assert SampleTime(1, 2) != 0.5
        with pytest.raises(TypeError):
            SampleTime(1, 2) < 0.5  # noqa: B015

    def test_cross_multiplication_rule(self) -> None:
        values = [SampleTime(c, r) for c, r in itertools.product(range(0, 7), range(1, 7))]
        for a, b in itertools.product(values, repeat=2):
            assert (a == b) == (a.count * b.rate == b.count * a.rate)
            assert (a < b) == (a.count * b.rate < b.count * a.rate)

    def test_exact_where_float_rounds(self) -> None:
        # 1/3 + 1/3 + 1/3 in floats differs from 1.0; the tick sum does not.
        third = SampleTime(1, 3)
        assert third + third + third == SampleTime(1, 1)

    def test_large_counts(self) -> None:
        # A year of 192 kHz samples compares exactly.
        year = 192000 * 60 * 60 * 24 * 365
        assert SampleTime(year, 192000) < SampleTime(year + 1, 192000)
        assert SampleTime(year * 2, 384000) == SampleTime(year, 192000)

    def test_hash_consistent_with_eq(self) -> None:
        assert hash(SampleTime(1, 48000)) == hash(SampleTime(2, 96000))
        assert len({SampleTime(1, 2), SampleTime(2, 4), SampleTime(3, 6)}) == 1


class TestAddition:
    def test_same_rate(self) -> None:
        total = SampleTime(3, 48000) + SampleTime(5, 48000)
        assert total.count == 8
        assert total.rate == 48000

    def test_mixed_rates(self) -> None:
        total = SampleTime(1, 4) + SampleTime(1, 6)
        assert total.rate == 12
        assert total.count == 5
