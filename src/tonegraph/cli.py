"""Command-line interface for tonegraph."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from tonegraph.demo import demo_chord
from tonegraph.errors import ToneGraphError
from tonegraph.models import Graph
from tonegraph.player import play
from tonegraph.settings import PlaybackSettings
from tonegraph.validate import validate_graph


def _load_graph(path: str) -> Graph:
    """Load and parse a graph JSON file."""
    text = Path(path).read_text()
    data = json.loads(text)
    return Graph.model_validate(data)


def _device_arg(value: str) -> int | str:
    """PortAudio device: an integer index or a name substring."""
    try:
        return int(value)
    except ValueError:
        return value


def _latency_arg(value: str) -> float | str:
    if value in ("low", "high"):
        return value
    return float(value)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_play(args: argparse.Namespace) -> int:
    graph = _load_graph(args.file) if args.file else demo_chord()

    errors = [e for e in validate_graph(graph) if e.severity == "error"]
    if errors:
        for err in errors:
            print(f"error: {err}", file=sys.stderr)
        return 1

    try:
        settings = PlaybackSettings(
            duration=args.duration if args.duration is not None else graph.duration,
            device=args.device,
            channels=args.channels,
            blocksize=args.blocksize,
            latency=args.latency,
            callback_timeout=args.timeout,
        )
    except ValidationError as e:
        print(f"error: invalid playback settings: {e}", file=sys.stderr)
        return 1
    play(graph, settings)
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    text = demo_chord().model_dump_json(indent=2) + "\n"
    if args.output:
        Path(args.output).write_text(text)
    else:
        sys.stdout.write(text)
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    graph = _load_graph(args.file)
    errors = validate_graph(graph)

    has_errors = any(e.severity == "error" for e in errors)
    has_warnings = any(e.severity == "warning" for e in errors)

    for err in errors:
        prefix = "warning" if err.severity == "warning" else "error"
        print(f"{prefix}: {err}", file=sys.stderr)

    if has_errors:
        return 1
    if has_warnings:
        print("valid (with warnings)")
    else:
        print("valid")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the tonegraph CLI."""
    parser = argparse.ArgumentParser(
        prog="tonegraph",
        description="Play, dump, and validate real-time tone graphs.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command")

    # play
    p_play = sub.add_parser("play", help="Play a graph (default: demo chord)")
    p_play.add_argument("file", nargs="?", help="Graph JSON file")
    p_play.add_argument("-d", "--duration", type=float, help="Seconds to play")
    p_play.add_argument("--device", type=_device_arg, help="Output device index or name")
    p_play.add_argument("--channels", type=int, help="Maximum output channels (default: all)")
    p_play.add_argument("--blocksize", type=int, default=0, help="Frames per buffer (0 = auto)")
    p_play.add_argument(
        "--latency", type=_latency_arg, help="Output latency: seconds, 'low' or 'high'"
    )
    p_play.add_argument(
        "--timeout", type=float, default=2.0, help="Seconds to wait for an audio callback"
    )

    # dump
    p_dump = sub.add_parser("dump", help="Write the demo chord graph as JSON")
    p_dump.add_argument("-o", "--output", help="Output file (default: stdout)")

    # validate
    p_validate = sub.add_parser("validate", help="Validate graph JSON")
    p_validate.add_argument("file", help="Graph JSON file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    try:
        if args.command == "play":
            return _cmd_play(args)
        elif args.command == "dump":
            return _cmd_dump(args)
        elif args.command == "validate":
            return _cmd_validate(args)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"error: invalid JSON: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"error: invalid graph: {e}", file=sys.stderr)
        return 1
    except ToneGraphError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0  # pragma: no cover


if __name__ == "__main__":
    sys.exit(main())
