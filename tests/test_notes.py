from __future__ import annotations

import pytest

from tonegraph import Key, Note, SinOsc


class TestKey:
    def test_a4_is_reference(self) -> None:
        assert Key.A.note(4) == Note(0)

    def test_c4_below_a4(self) -> None:
        assert Key.C.note(4) == Note(-9)

    def test_octaves(self) -> None:
        assert Key.A.note(5) == Note(12)
        assert Key.B.note(3) == Note(-10)


class TestNote:
    def test_a440(self) -> None:
        assert Note(0).hz() == 440.0

    def test_octave_doubles(self) -> None:
        assert Note(12).hz() == 880.0
        assert Note(-12).hz() == 220.0

    def test_middle_c(self) -> None:
        assert Key.C.note(4).hz() == pytest.approx(261.6256, abs=1e-4)

    def test_f4(self) -> None:
        assert Key.F.note(4).hz() == pytest.approx(349.2282, abs=1e-4)

    def test_sine(self) -> None:
        osc = Key.A.note(4).sine()
        assert isinstance(osc, SinOsc)
        assert osc.freq == 440.0
