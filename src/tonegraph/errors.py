"""Exception hierarchy for tonegraph."""

from __future__ import annotations


class ToneGraphError(Exception):
    """Base class for all tonegraph errors."""


class SetupError(ToneGraphError):
    """Audio output could not be configured (no device, no float32, stream failure)."""


class PlaybackError(ToneGraphError):
    """The audio backend faulted or stopped calling back during playback."""
