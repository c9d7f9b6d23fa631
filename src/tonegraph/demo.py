"""The demo chord: A4, C4 and F4 entering one second apart."""

from __future__ import annotations

from tonegraph.algebra import adsr
from tonegraph.models import Graph
from tonegraph.notes import Key


def demo_chord(duration: float = 5.0) -> Graph:
    root = (
        Key.A.note(4).sine().vibrato(2.0, 6.0).wrap() * adsr((0.0, 3.1), 8.0, 15.0, 0.6, 1.0)
        + Key.C.note(4).sine().vibrato(50.0, 8.0).wrap() * adsr((1.0, 3.2), 8.0, 15.0, 0.6, 1.0)
        + Key.F.note(4).sine().vibrato(50.0, 14.0).wrap() * adsr((2.0, 3.4), 8.0, 15.0, 0.6, 1.0)
    )
    return Graph(name="chord", duration=duration, root=root)
