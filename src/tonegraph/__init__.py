"""Real-time tone synthesis from a tree of composable audio-rate sources."""

from tonegraph import algebra  # noqa: F401  (installs + and * on node models)
from tonegraph.algebra import adsr, mix, sine, vibrato, wrap
from tonegraph.clock import SampleTime
from tonegraph.demo import demo_chord
from tonegraph.errors import PlaybackError, SetupError, ToneGraphError
from tonegraph.models import ADSR, BinOp, Constant, Graph, Node, Ref, SinOsc, Wrapped
from tonegraph.notes import Key, Note
from tonegraph.player import play
from tonegraph.render import Renderer, StreamFault, StreamTimestamp, wait_for_duration
from tonegraph.runtime import (
    AddSource,
    AdsrSource,
    ConstSource,
    EnvelopeState,
    MulSource,
    SineSource,
    Source,
    WrappedSource,
    build_source,
)
from tonegraph.settings import PlaybackSettings
from tonegraph.validate import GraphValidationError, validate_graph

__all__ = [
    "ADSR",
    "AddSource",
    "AdsrSource",
    "BinOp",
    "ConstSource",
    "Constant",
    "EnvelopeState",
    "Graph",
    "GraphValidationError",
    "Key",
    "MulSource",
    "Node",
    "Note",
    "PlaybackError",
    "PlaybackSettings",
    "Ref",
    "Renderer",
    "SampleTime",
    "SetupError",
    "SinOsc",
    "SineSource",
    "Source",
    "StreamFault",
    "StreamTimestamp",
    "ToneGraphError",
    "Wrapped",
    "WrappedSource",
    "adsr",
    "build_source",
    "demo_chord",
    "mix",
    "play",
    "sine",
    "validate_graph",
    "vibrato",
    "wait_for_duration",
    "wrap",
]
