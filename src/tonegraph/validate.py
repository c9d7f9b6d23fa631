from __future__ import annotations

from collections.abc import Iterator

from tonegraph.models import ADSR, BinOp, Constant, Graph, Ref, SinOsc, Wrapped


class GraphValidationError(str):
    """A structured validation error that behaves as a plain string.

    Subclasses ``str`` so call sites can compare, join and print errors
    directly (``"; ".join(errors)``, ``print(f"error: {err}")``).
    """

    kind: str
    path: str | None
    severity: str  # "error" | "warning"

    def __new__(
        cls,
        kind: str,
        message: str,
        *,
        path: str | None = None,
        severity: str = "error",
    ) -> GraphValidationError:
        return super().__new__(cls, message)

    def __init__(
        self,
        kind: str,
        message: str,
        *,
        path: str | None = None,
        severity: str = "error",
    ) -> None:
        self.kind = kind
        self.path = path
        self.severity = severity


def _walk(node: Ref, path: str) -> Iterator[tuple[str, Ref]]:
    """Yield ``(path, node)`` for *node* and all its descendants, depth first."""
    yield path, node
    if isinstance(node, SinOsc):
        yield from _walk(node.freq, f"{path}.freq")
    elif isinstance(node, BinOp):
        yield from _walk(node.a, f"{path}.a")
        yield from _walk(node.b, f"{path}.b")
    elif isinstance(node, Wrapped):
        yield from _walk(node.a, f"{path}.a")


def _check_adsr(node: ADSR, path: str, errors: list[GraphValidationError]) -> None:
    for field_name in ("attack_rate", "decay_rate", "release_rate"):
        rate = getattr(node, field_name)
        if rate < 0.0:
            errors.append(
                GraphValidationError(
                    "negative_rate",
                    f"Node '{path}': {field_name} must be non-negative, got {rate}",
                    path=path,
                )
            )
    if not 0.0 <= node.sustain_level <= 1.0:
        errors.append(
            GraphValidationError(
                "sustain_range",
                f"Node '{path}': sustain_level must be in [0, 1], got {node.sustain_level}",
                path=path,
            )
        )
    start, end = node.active
    if start >= end:
        # Accepted, but the envelope will never open.
        errors.append(
            GraphValidationError(
                "empty_window",
                f"Node '{path}': active window [{start}, {end}) is empty",
                path=path,
                severity="warning",
            )
        )


def _check_sinosc(node: SinOsc, path: str, errors: list[GraphValidationError]) -> None:
    if not 0.0 <= node.phase < 1.0:
        errors.append(
            GraphValidationError(
                "phase_range",
                f"Node '{path}': phase must be in [0, 1), got {node.phase}",
                path=path,
                severity="warning",
            )
        )
    freq = node.freq
    if isinstance(freq, Constant):
        freq = freq.value
    if isinstance(freq, (int, float)) and freq <= 0.0:
        errors.append(
            GraphValidationError(
                "non_positive_freq",
                f"Node '{path}': constant frequency {freq} Hz is not positive",
                path=path,
                severity="warning",
            )
        )


def validate_graph(graph: Graph) -> list[GraphValidationError]:
    """Validate a tone graph and return a list of errors (empty = valid).

    Errors are listed before warnings.
    """
    found: list[GraphValidationError] = []

    if graph.duration <= 0.0:
        found.append(
            GraphValidationError(
                "duration",
                f"Graph '{graph.name}': duration must be positive, got {graph.duration}",
            )
        )

    for path, node in _walk(graph.root, "root"):
        if isinstance(node, ADSR):
            _check_adsr(node, path, found)
        elif isinstance(node, SinOsc):
            _check_sinosc(node, path, found)

    errors = [e for e in found if e.severity == "error"]
    warnings = [e for e in found if e.severity == "warning"]
    return errors + warnings
