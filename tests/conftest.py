from __future__ import annotations

import threading
from types import SimpleNamespace
from typing import Any, Callable

import numpy as np
import pytest

from tonegraph import ADSR, Graph, SinOsc, adsr, sine
from tonegraph.errors import PlaybackError


class FakeStream:
    """Stand-in for an output stream: calls the render callback from a thread.

    Timestamps advance by exactly one buffer per callback; the playback time
    runs *latency* seconds ahead of the callback time.
    """

    def __init__(
        self,
        callback: Callable[..., None],
        *,
        channels: int,
        sample_rate: int,
        blocksize: int,
        latency: float = 0.002,
        max_buffers: int = 1000,
        fault_at: int | None = None,
        silent: bool = False,
        fail_stop: bool = False,
    ) -> None:
        self.callback = callback
        self.channels = channels
        self.sample_rate = sample_rate
        self.blocksize = blocksize or 64
        self.latency = latency
        self.max_buffers = max_buffers
        self.fault_at = fault_at
        self.silent = silent
        self.fail_stop = fail_stop
        self.buffers: list[np.ndarray] = []
        self.started = False
        self.stopped = False
        self.closed = False
        self._halt = threading.Event()
        self._thread: threading.Thread | None = None

    def _run(self) -> None:
        t = 100.0
        for n in range(self.max_buffers):
            if self._halt.is_set():
                return
            outdata = np.zeros((self.blocksize, self.channels), dtype=np.float32)
            time_info = SimpleNamespace(currentTime=t, outputBufferDacTime=t + self.latency)
            status = "output underflow" if n == self.fault_at else None
            self.callback(outdata, self.blocksize, time_info, status)
            self.buffers.append(outdata)
            t += self.blocksize / self.sample_rate

    def play(self) -> None:
        self.started = True
        if not self.silent:
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()

    def stop(self) -> None:
        self.stopped = True
        self._halt.set()
        if self._thread is not None:
            self._thread.join()
        if self.fail_stop:
            raise PlaybackError("failed to stop output stream: device lost")

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeStream:
        return self

    def __exit__(self, *exc: object) -> None:
        try:
            self.stop()
        finally:
            self.close()


class FakeOutput:
    """Audio output boundary backed by :class:`FakeStream`."""

    def __init__(self, channels: int = 2, sample_rate: int = 1000, **stream_kwargs: Any) -> None:
        self.channels = channels
        self.sample_rate = sample_rate
        self.stream_kwargs = stream_kwargs
        self.stream: FakeStream | None = None

    def create_stream(
        self, callback: Callable[..., None], *, blocksize: int = 0, latency: Any = None
    ) -> FakeStream:
        self.stream = FakeStream(
            callback,
            channels=self.channels,
            sample_rate=self.sample_rate,
            blocksize=blocksize,
            **self.stream_kwargs,
        )
        return self.stream


@pytest.fixture
def fake_output() -> FakeOutput:
    return FakeOutput()


@pytest.fixture
def envelope() -> ADSR:
    """Envelope open on [0, 1) with fast rates and sustain at 0.5."""
    return adsr((0.0, 1.0), 10.0, 10.0, 0.5, 10.0)


@pytest.fixture
def voice() -> SinOsc:
    return sine(440.0).vibrato(5.0, 14.0)


@pytest.fixture
def voice_graph(voice: SinOsc, envelope: ADSR) -> Graph:
    return Graph(name="voice", duration=0.05, root=voice * envelope)
