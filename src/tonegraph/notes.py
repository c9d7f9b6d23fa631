"""Pitch names and 12-tone equal temperament (A440)."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from tonegraph.models import SinOsc

A4_HZ = 440.0


class Key(enum.Enum):
    """Pitch class, valued by its semitone offset from A in the same octave."""

    C = -9
    C_SHARP = -8
    D = -7
    D_SHARP = -6
    E = -5
    F = -4
    F_SHARP = -3
    G = -2
    G_SHARP = -1
    A = 0
    A_SHARP = 1
    B = 2

    def note(self, octave: int) -> Note:
        return Note((octave - 4) * 12 + self.value)


@dataclass(frozen=True)
class Note:
    """A pitch as a signed semitone distance from A4."""

    semitones: int

    def hz(self) -> float:
        return A4_HZ * 2.0 ** (self.semitones / 12.0)

    def sine(self) -> SinOsc:
        return SinOsc(freq=self.hz())
