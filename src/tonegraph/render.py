"""Real-time render loop and the stop decision.

The backend calls a :class:`Renderer` once per output buffer on its own audio
thread. The renderer owns the runtime source tree outright; the controlling
thread only ever sees the :class:`StreamTimestamp` messages the renderer puts
on a FIFO queue, and uses them in :func:`wait_for_duration` to decide when
the target duration has actually been heard.
"""

from __future__ import annotations

import logging
import queue
import time
from dataclasses import dataclass
from typing import Any, Callable, Union

import numpy as np

from tonegraph.clock import SampleTime
from tonegraph.errors import PlaybackError
from tonegraph.runtime import Source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamTimestamp:
    """Backend clock readings for one buffer, in seconds.

    ``callback`` is when the backend asked for the buffer; ``playback`` is
    when the first frame of that buffer is expected to be audible.
    """

    callback: float
    playback: float

    @classmethod
    def from_time_info(cls, time_info: Any) -> StreamTimestamp:
        """Read a PortAudio ``time_info`` struct as passed to stream callbacks."""
        return cls(callback=time_info.currentTime, playback=time_info.outputBufferDacTime)


@dataclass(frozen=True)
class StreamFault:
    """A status flag (e.g. output underflow) reported by the backend."""

    status: str


Message = Union[StreamTimestamp, StreamFault]


class Renderer:
    """Stream callback: advances the source one tick per frame.

    Each frame gets exactly one ``advance(SampleTime(1, sample_rate))`` and one
    ``current_value()`` on the root source; the value is written to every
    channel of the frame.
    """

    def __init__(
        self,
        source: Source,
        sample_rate: int,
        messages: queue.SimpleQueue[Message] | None = None,
    ) -> None:
        self._source = source
        self._tick = SampleTime(1, sample_rate)
        self.sample_rate = sample_rate
        self.messages: queue.SimpleQueue[Message] = (
            messages if messages is not None else queue.SimpleQueue()
        )
        self._scratch = np.zeros(0, dtype=np.float32)
        self.frames_rendered = 0

    def render(self, outdata: np.ndarray, frames: int) -> None:
        """Fill the first *frames* rows of *outdata* (shape ``(frames, channels)``)."""
        if frames > len(self._scratch):
            self._scratch = np.zeros(frames, dtype=np.float32)
        scratch = self._scratch
        source = self._source
        tick = self._tick
        for i in range(frames):
            source.advance(tick)
            scratch[i] = source.current_value()
        # mono signal duplicated across channels
        outdata[:frames] = scratch[:frames, np.newaxis]
        self.frames_rendered += frames

    def __call__(self, outdata: np.ndarray, frames: int, time_info: Any, status: Any) -> None:
        self.messages.put(StreamTimestamp.from_time_info(time_info))
        if status:
            self.messages.put(StreamFault(str(status)))
        self.render(outdata, frames)


def _next_timestamp(messages: queue.SimpleQueue[Message], timeout: float | None) -> StreamTimestamp:
    try:
        msg = messages.get(timeout=timeout)
    except queue.Empty:
        raise PlaybackError(f"no audio callback within {timeout} s") from None
    if isinstance(msg, StreamFault):
        raise PlaybackError(f"audio backend reported: {msg.status}")
    return msg


def wait_for_duration(
    messages: queue.SimpleQueue[Message],
    duration: float,
    *,
    timeout: float | None = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> float:
    """Block until *duration* seconds of audio have been played.

    Playback time is measured from the first timestamp. Once a buffer's
    expected playback time is more than *duration* past the start, sleeps for
    that buffer's callback-to-playback latency so the return lines up with
    what is audible rather than with what was handed to the device.

    Returns the latency slept. Raises :class:`PlaybackError` on a backend
    fault or if no message arrives within *timeout* seconds.
    """
    start = _next_timestamp(messages, timeout).playback
    logger.debug("playback started at %.6f", start)

    while True:
        stamp = _next_timestamp(messages, timeout)
        elapsed = stamp.playback - start
        if elapsed < 0.0:
            continue
        logger.debug("played %.6f s", elapsed)
        if elapsed > duration:
            delay = max(0.0, stamp.playback - stamp.callback)
            logger.info("played %.3f s, waiting %.4f s output latency", elapsed, delay)
            sleep(delay)
            return delay
