from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field


class PlaybackSettings(BaseModel):
    duration: float = Field(default=5.0, gt=0.0)  # seconds of audible output
    device: Union[int, str, None] = None  # PortAudio index or name; None = default
    channels: Union[int, None] = Field(default=None, ge=1)  # channel cap; None uses all
    blocksize: int = Field(default=0, ge=0)  # 0 lets the backend choose
    latency: Union[float, str, None] = None
    callback_timeout: float = Field(default=2.0, gt=0.0)
