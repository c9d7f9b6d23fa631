"""Play a tone graph through an output device."""

from __future__ import annotations

import logging
import queue
from typing import Any, Protocol

from tonegraph.audio import OutputConfig
from tonegraph.models import Graph
from tonegraph.render import Message, Renderer, wait_for_duration
from tonegraph.runtime import build_source
from tonegraph.settings import PlaybackSettings

logger = logging.getLogger(__name__)


class Stream(Protocol):
    """A stream handle; leaving the ``with`` block stops and then closes it."""

    def play(self) -> None: ...

    def __enter__(self) -> Stream: ...

    def __exit__(self, *exc: object) -> None: ...


class Output(Protocol):
    """What :func:`play` needs from the audio backend."""

    channels: int
    sample_rate: int

    def create_stream(
        self, callback: Any, *, blocksize: int = 0, latency: Any = None
    ) -> Stream: ...


def play(
    graph: Graph,
    settings: PlaybackSettings | None = None,
    output: Output | None = None,
) -> float:
    """Render *graph* in real time until ``settings.duration`` has been heard.

    The runtime source tree is built here and handed straight to the stream
    callback; this thread keeps no reference to it. Returns the output
    latency waited out before stopping. The stream is closed on every exit
    path, including a failed stop.
    """
    if settings is None:
        settings = PlaybackSettings(duration=graph.duration)
    if output is None:
        output = OutputConfig.detect(device=settings.device, max_channels=settings.channels)

    messages: queue.SimpleQueue[Message] = queue.SimpleQueue()
    stream = output.create_stream(
        Renderer(build_source(graph), output.sample_rate, messages),
        blocksize=settings.blocksize,
        latency=settings.latency,
    )

    logger.info("playing '%s' for %.3f s", graph.name, settings.duration)
    with stream:
        stream.play()
        delay = wait_for_duration(
            messages, settings.duration, timeout=settings.callback_timeout
        )
    logger.info("stopped '%s'", graph.name)
    return delay
