"""Builder helpers and operator composition for node models.

Importing this module monkey-patches ``+`` and ``*`` onto every node model,
so voices can be written the way they sound::

    from tonegraph.algebra import adsr, sine

    voice = sine(440.0).vibrato(2.0, 6.0) * adsr((0.0, 3.1), 8.0, 15.0, 0.6, 1.0)
    chord = voice + other_voice

``a + b`` builds ``BinOp(op="add")`` and ``a * b`` builds ``BinOp(op="mul")``.
Plain numbers work on either side. The operators are sugar only; building the
``BinOp`` by hand produces the same graph.
"""

from __future__ import annotations

from tonegraph.models import ADSR, BinOp, Constant, Ref, SinOsc, Wrapped

# Vibrato depth divisor: depth in Hz = cents / 14. A linear approximation,
# not a true cents-to-frequency-ratio conversion.
CENTS_PER_HZ = 14.0


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def sine(freq: Ref, phase: float = 0.0) -> SinOsc:
    """Sine oscillator at *freq* (Hz, or a node producing Hz)."""
    return SinOsc(freq=freq, phase=phase)


def adsr(
    active: tuple[float, float],
    attack_rate: float,
    decay_rate: float,
    sustain_level: float,
    release_rate: float,
) -> ADSR:
    return ADSR(
        active=active,
        attack_rate=attack_rate,
        decay_rate=decay_rate,
        sustain_level=sustain_level,
        release_rate=release_rate,
    )


def vibrato(osc: SinOsc, hz: Ref, cents: float) -> SinOsc:
    """Return *osc* with its frequency modulated by a sine at *hz*.

    The new frequency source is ``osc.freq + sine(hz) * (cents / 14)``. The
    carrier keeps its starting phase.
    """
    modulation = BinOp(op="mul", a=sine(hz), b=Constant(value=cents / CENTS_PER_HZ))
    return SinOsc(freq=BinOp(op="add", a=osc.freq, b=modulation), phase=osc.phase)


def wrap(node: Ref) -> Wrapped:
    return Wrapped(a=node)


def add(a: Ref, b: Ref) -> BinOp:
    return BinOp(op="add", a=a, b=b)


def mul(a: Ref, b: Ref) -> BinOp:
    return BinOp(op="mul", a=a, b=b)


def mix(*voices: Ref) -> Ref:
    """Left-fold *voices* into a chain of ``add`` nodes."""
    if not voices:
        raise ValueError("mix: at least one voice is required")
    result = voices[0]
    for voice in voices[1:]:
        result = add(result, voice)
    return result


# ---------------------------------------------------------------------------
# Operator overloading (active on import)
# ---------------------------------------------------------------------------

for _cls in (Constant, SinOsc, ADSR, BinOp, Wrapped):
    _cls.__add__ = lambda self, other: add(self, other)  # type: ignore[operator]
    _cls.__radd__ = lambda self, other: add(other, self)  # type: ignore[operator]
    _cls.__mul__ = lambda self, other: mul(self, other)  # type: ignore[operator]
    _cls.__rmul__ = lambda self, other: mul(other, self)  # type: ignore[operator]
    _cls.wrap = lambda self: wrap(self)  # type: ignore[attr-defined]

SinOsc.vibrato = lambda self, hz, cents: vibrato(self, hz, cents)  # type: ignore[attr-defined]
