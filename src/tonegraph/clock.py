"""Exact sample-count time model.

A :class:`SampleTime` is ``count`` samples at ``rate`` samples per second.
Comparisons cross-multiply the integer fields, so ordering never depends on
float rounding::

    SampleTime(1, 48000) == SampleTime(2, 96000)   # True
    SampleTime(1, 44100) < SampleTime(1, 44000)    # True

Python integers do not overflow, so the comparison is exact for any duration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from functools import total_ordering


@total_ordering
@dataclass(frozen=True, eq=False)
class SampleTime:
    count: int
    rate: int

    def __post_init__(self) -> None:
        if self.rate <= 0:
            raise ValueError(f"SampleTime rate must be positive, got {self.rate}")
        if self.count < 0:
            raise ValueError(f"SampleTime count must be non-negative, got {self.count}")

    def as_secs(self) -> float:
        """Return the duration in seconds (for continuous math only)."""
        return self.count / self.rate

    def as_fraction(self) -> Fraction:
        return Fraction(self.count, self.rate)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleTime):
            return NotImplemented
        # A/B == C/D <=> A*D == C*B
        return self.count * other.rate == other.count * self.rate

    def __lt__(self, other: SampleTime) -> bool:
        if not isinstance(other, SampleTime):
            return NotImplemented
        # A/B < C/D <=> A*D < C*B
        return self.count * other.rate < other.count * self.rate

    def __hash__(self) -> int:
        return hash(self.as_fraction())

    def __add__(self, other: SampleTime) -> SampleTime:
        if not isinstance(other, SampleTime):
            return NotImplemented
        if self.rate == other.rate:
            return SampleTime(self.count + other.count, self.rate)
        rate = math.lcm(self.rate, other.rate)
        return SampleTime(
            self.count * (rate // self.rate) + other.count * (rate // other.rate),
            rate,
        )
