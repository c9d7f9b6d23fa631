from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Node types (discriminated union on "op")
#
# Nodes form a tree: each node owns its children outright. A bare number is
# accepted anywhere a child node is expected and behaves as a Constant.
# ---------------------------------------------------------------------------


class Constant(BaseModel):
    op: Literal["constant"] = "constant"
    value: float


class SinOsc(BaseModel):
    op: Literal["sinosc"] = "sinosc"
    freq: Ref  # frequency source in Hz
    phase: float = 0.0  # starting phase in [0, 1)


class ADSR(BaseModel):
    op: Literal["adsr"] = "adsr"
    active: tuple[float, float]  # [start, end) in seconds
    attack_rate: float  # level per second
    decay_rate: float
    sustain_level: float
    release_rate: float


class BinOp(BaseModel):
    op: Literal["add", "mul"]
    a: Ref
    b: Ref


class Wrapped(BaseModel):
    op: Literal["wrapped"] = "wrapped"
    a: Ref


Node = Annotated[
    Union[
        Constant,
        SinOsc,
        ADSR,
        BinOp,
        Wrapped,
    ],
    Field(discriminator="op"),
]

# Type alias for child references: a nested node or a literal float.
Ref = Union[float, Node]

for _model in (SinOsc, BinOp, Wrapped):
    _model.model_rebuild()


# ---------------------------------------------------------------------------
# Top-level graph
# ---------------------------------------------------------------------------


class Graph(BaseModel):
    name: str
    duration: float = 5.0  # seconds of playback
    root: Ref
