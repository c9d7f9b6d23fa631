"""Stateful audio-rate sources built from graph node models.

Every source supports two operations:

``advance(elapsed)``
    Move internal state forward by a :class:`SampleTime`. Combinators and
    oscillators advance *all* their children on every call, so nested phases
    and envelope clocks stay aligned with global time however deep they sit.

``current_value()``
    Return the output for the current state. Never mutates; may be called
    any number of times between advances.

:func:`build_source` turns a declarative node tree (see :mod:`tonegraph.models`)
into a fresh runtime tree. Nothing in a built tree is shared with any other
tree, so a built source can be handed to the audio thread outright.
"""

from __future__ import annotations

import enum
import math
from typing import Callable

from tonegraph.clock import SampleTime
from tonegraph.models import ADSR, BinOp, Constant, Graph, Ref, SinOsc, Wrapped

TAU = 2.0 * math.pi


class Source:
    """Base class for runtime sources. ``advance`` defaults to a no-op."""

    def advance(self, elapsed: SampleTime) -> None:
        pass

    def current_value(self) -> float:
        raise NotImplementedError


class ConstSource(Source):
    def __init__(self, value: float) -> None:
        self.value = value

    def current_value(self) -> float:
        return self.value


class WrappedSource(Source):
    """Transparent pass-through around a single child."""

    def __init__(self, inner: Source) -> None:
        self.inner = inner

    def advance(self, elapsed: SampleTime) -> None:
        self.inner.advance(elapsed)

    def current_value(self) -> float:
        return self.inner.current_value()


class SineSource(Source):
    """Sine oscillator driven by a frequency source (Hz)."""

    def __init__(self, freq: Source, phase: float = 0.0) -> None:
        self.freq = freq
        self.phase = phase

    def advance(self, elapsed: SampleTime) -> None:
        self.freq.advance(elapsed)
        phase = (self.phase + elapsed.as_secs() * self.freq.current_value()) % 1.0
        # a tiny negative step rounds up to exactly 1.0
        self.phase = 0.0 if phase >= 1.0 else phase

    def current_value(self) -> float:
        return math.sin(self.phase * TAU)


class AddSource(Source):
    def __init__(self, left: Source, right: Source) -> None:
        self.left = left
        self.right = right

    def advance(self, elapsed: SampleTime) -> None:
        self.left.advance(elapsed)
        self.right.advance(elapsed)

    def current_value(self) -> float:
        return self.left.current_value() + self.right.current_value()


class MulSource(Source):
    def __init__(self, left: Source, right: Source) -> None:
        self.left = left
        self.right = right

    def advance(self, elapsed: SampleTime) -> None:
        self.left.advance(elapsed)
        self.right.advance(elapsed)

    def current_value(self) -> float:
        return self.left.current_value() * self.right.current_value()


# ---------------------------------------------------------------------------
# ADSR envelope
# ---------------------------------------------------------------------------


class EnvelopeState(enum.Enum):
    BEFORE = "before"
    ATTACK = "attack"
    DECAY = "decay"
    SUSTAIN = "sustain"
    RELEASE = "release"
    AFTER = "after"


class AdsrSource(Source):
    """One-shot attack/decay/sustain/release envelope.

    The envelope is gated by a half-open window ``[start, end)`` of elapsed
    seconds since construction. Entering the window starts the attack;
    leaving it while sustaining starts the release. Once the release reaches
    zero the envelope stays silent for good, even if time re-enters the
    window.

    Elapsed time is kept as an exact tick count so window edges fall on the
    exact sample regardless of how many ticks have been accumulated.
    """

    def __init__(
        self,
        active: tuple[float, float],
        attack_rate: float,
        decay_rate: float,
        sustain_level: float,
        release_rate: float,
    ) -> None:
        self.start, self.end = active
        self.attack_rate = attack_rate
        self.decay_rate = decay_rate
        self.sustain_level = sustain_level
        self.release_rate = release_rate

        self._ticks = 0
        self._rate = 1
        self._state = EnvelopeState.BEFORE
        self._level = 0.0

    @property
    def state(self) -> EnvelopeState:
        return self._state

    @property
    def level(self) -> float:
        return self._level

    @property
    def elapsed(self) -> SampleTime:
        return SampleTime(self._ticks, self._rate)

    def _accumulate(self, elapsed: SampleTime) -> float:
        """Add *elapsed* to the tick count and return total seconds."""
        if elapsed.rate != self._rate:
            total = SampleTime(self._ticks, self._rate) + elapsed
            self._ticks, self._rate = total.count, total.rate
        else:
            self._ticks += elapsed.count
        return self._ticks / self._rate

    def _in_window(self, t: float) -> bool:
        return self.start <= t < self.end

    def advance(self, elapsed: SampleTime) -> None:
        dt = elapsed.as_secs()
        t = self._accumulate(elapsed)
        state = self._state

        if state is EnvelopeState.BEFORE:
            if self._in_window(t):
                self._state = EnvelopeState.ATTACK
        elif state is EnvelopeState.ATTACK:
            self._level += self.attack_rate * dt
            if self._level >= 1.0:
                self._level = 1.0
                self._state = EnvelopeState.DECAY
        elif state is EnvelopeState.DECAY:
            self._level -= self.decay_rate * dt
            if self._level <= self.sustain_level:
                self._level = self.sustain_level
                self._state = EnvelopeState.SUSTAIN
        elif state is EnvelopeState.SUSTAIN:
            if not self._in_window(t):
                self._state = EnvelopeState.RELEASE
        elif state is EnvelopeState.RELEASE:
            self._level -= self.release_rate * dt
            if self._level <= 0.0:
                self._level = 0.0
                self._state = EnvelopeState.AFTER

    def current_value(self) -> float:
        return self._level


# ---------------------------------------------------------------------------
# Model -> runtime dispatch
# ---------------------------------------------------------------------------


def _build_constant(node: Constant) -> Source:
    return ConstSource(node.value)


def _build_sinosc(node: SinOsc) -> Source:
    return SineSource(build_source(node.freq), phase=node.phase)


def _build_adsr(node: ADSR) -> Source:
    return AdsrSource(
        node.active,
        node.attack_rate,
        node.decay_rate,
        node.sustain_level,
        node.release_rate,
    )


def _build_binop(node: BinOp) -> Source:
    left = build_source(node.a)
    right = build_source(node.b)
    if node.op == "add":
        return AddSource(left, right)
    return MulSource(left, right)


def _build_wrapped(node: Wrapped) -> Source:
    return WrappedSource(build_source(node.a))


_BUILDERS: dict[str, Callable[..., Source]] = {
    "constant": _build_constant,
    "sinosc": _build_sinosc,
    "adsr": _build_adsr,
    "add": _build_binop,
    "mul": _build_binop,
    "wrapped": _build_wrapped,
}


def build_source(node: Ref | Graph) -> Source:
    """Build a fresh runtime source tree from a node model (or a whole graph)."""
    if isinstance(node, Graph):
        return build_source(node.root)
    if isinstance(node, (int, float)):
        return ConstSource(float(node))
    try:
        builder = _BUILDERS[node.op]
    except (AttributeError, KeyError):
        raise TypeError(f"Cannot build a source from {node!r}") from None
    return builder(node)
