"""Audio output boundary on top of ``sounddevice`` (PortAudio).

Only float32 output is supported. Anything that prevents a stream from being
set up is reported as :class:`SetupError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Union

from tonegraph.errors import PlaybackError, SetupError

logger = logging.getLogger(__name__)

DeviceSpec = Union[int, str, None]


def _sounddevice() -> Any:
    # Importing sounddevice loads the PortAudio shared library.
    try:
        import sounddevice as sd
    except OSError as e:
        raise SetupError(f"PortAudio library is not available: {e}") from e
    return sd


class OutputStream:
    """Thin handle around a ``sounddevice.OutputStream``."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream

    def play(self) -> None:
        sd = _sounddevice()
        try:
            self._stream.start()
        except sd.PortAudioError as e:
            raise SetupError(f"failed to start output stream: {e}") from e

    def stop(self) -> None:
        sd = _sounddevice()
        try:
            self._stream.stop()
        except sd.PortAudioError as e:
            raise PlaybackError(f"failed to stop output stream: {e}") from e

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> OutputStream:
        return self

    def __exit__(self, *exc: object) -> None:
        try:
            self.stop()
        finally:
            self.close()


@dataclass(frozen=True)
class OutputConfig:
    device: int
    name: str
    channels: int
    sample_rate: int

    @classmethod
    def detect(cls, device: DeviceSpec = None, max_channels: int | None = None) -> OutputConfig:
        """Pick an output device and verify it accepts float32 samples.

        *device* is a PortAudio index, a name substring, or ``None`` for the
        default output device. The channel count is the device maximum,
        capped at *max_channels* when given; the sample rate is the device default.
        """
        sd = _sounddevice()
        try:
            info = sd.query_devices(device, kind="output")
        except (ValueError, sd.PortAudioError) as e:
            raise SetupError(f"missing output device: {e}") from e

        channels = int(info["max_output_channels"])
        if channels < 1:
            raise SetupError(f"device '{info['name']}' has no output channels")
        if max_channels is not None:
            channels = min(channels, max_channels)
        sample_rate = int(info["default_samplerate"])

        try:
            sd.check_output_settings(
                device=info["index"],
                channels=channels,
                dtype="float32",
                samplerate=sample_rate,
            )
        except (ValueError, sd.PortAudioError) as e:
            raise SetupError(f"no float32 output support on '{info['name']}': {e}") from e

        config = cls(
            device=int(info["index"]),
            name=str(info["name"]),
            channels=channels,
            sample_rate=sample_rate,
        )
        logger.info(
            "output device %r: %d channel(s) at %d Hz", config.name, channels, sample_rate
        )
        return config

    def create_stream(
        self,
        callback: Callable[[Any, int, Any, Any], None],
        *,
        blocksize: int = 0,
        latency: float | str | None = None,
    ) -> OutputStream:
        """Create an unstarted float32 output stream that pulls from *callback*."""
        sd = _sounddevice()
        try:
            stream = sd.OutputStream(
                device=self.device,
                channels=self.channels,
                samplerate=self.sample_rate,
                dtype="float32",
                blocksize=blocksize,
                latency=latency,
                callback=callback,
            )
        except (ValueError, sd.PortAudioError) as e:
            raise SetupError(f"failed to create output stream: {e}") from e
        return OutputStream(stream)
