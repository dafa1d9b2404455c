"""Command-line interface for the Syllable Counter.

WHY: Users need a quick way to meter a poem or lyric sheet from the
terminal, and to keep counts on screen while they edit the file in
another editor. The CLI wires a host, a renderer, and a synchronizer
together behind a single command.

HOW: Uses argparse for the input path, display options, viewport, and
watch mode. One-shot mode loads the text into a MemoryHost and awaits a
single pass. Watch mode attaches a polling FileHost and lets the
synchronizer's debounced triggers re-render until Ctrl-C. The async
part runs via asyncio.run().

RULES:
- Positional argument: input file path, or "-" for stdin (no --watch)
- Annotations go to stdout; status and errors go to stderr
- --viewport-top/--viewport-height are in lines; without them the
  visible-range policy has no geometry and annotates from the top
- --all-lines turns the visible-range policy off
- Exit codes: 0 success, 1 user error, 130 interrupted
- Python 3.9+ compatible — no match/case, no X | Y unions
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from syllable_counter.config import (
    DEFAULT_SHOW_ZERO_SYLLABLES,
    load_settings,
)
from syllable_counter.core.models import TriggerReason, Verbosity
from syllable_counter.core.settings import SynchronizerSettings
from syllable_counter.core.synchronizer import AnnotationSynchronizer
from syllable_counter.hosts.file import DEFAULT_POLL_INTERVAL_S, FileHost
from syllable_counter.hosts.memory import MemoryHost
from syllable_counter.renderers import RENDERERS, TextStreamRenderer


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _settings_from_args(args: argparse.Namespace) -> SynchronizerSettings:
    """Overlay CLI flags on the environment-backed defaults.

    RULES:
    - Only flags the user actually passed override the defaults
    - Raises pydantic.ValidationError for out-of-bounds values
    """
    changes = {"show_zero_syllables": args.show_zero}
    if args.terse:
        changes["verbosity"] = Verbosity.TERSE
    if args.max_lines is not None:
        changes["max_lines_to_process"] = args.max_lines
    if args.debounce_ms is not None:
        changes["debounce_interval_ms"] = args.debounce_ms
    if args.all_lines:
        changes["only_visible_range"] = False
    return load_settings().merged(**changes)


def _apply_viewport(host: MemoryHost, args: argparse.Namespace) -> None:
    if args.viewport_top is None and args.viewport_height is None:
        return
    host.show_lines(args.viewport_top or 0, args.viewport_height or 40)


def _build_renderer(args: argparse.Namespace, host: MemoryHost, clear_screen: bool = False):
    if args.output == "text":
        return TextStreamRenderer(sys.stdout, host.get_document_text, clear_screen=clear_screen)
    return RENDERERS[args.output](sys.stdout, host.get_document_text)


async def _run_once(args: argparse.Namespace, settings: SynchronizerSettings, text: str) -> int:
    """Annotate ``text`` with a single pass and print the result."""
    host = MemoryHost(text=text)
    _apply_viewport(host, args)

    synchronizer = AnnotationSynchronizer(_build_renderer(args, host), settings=settings, host=host)
    try:
        await synchronizer.synchronize()
        annotations = synchronizer.annotations
    finally:
        synchronizer.shutdown()

    if args.output == "text":
        _status("{} annotated line(s), {} syllable(s)".format(
            len(annotations), sum(a.count for a in annotations),
        ))
    return 0


async def _run_watch(args: argparse.Namespace, settings: SynchronizerSettings, path: Path) -> int:
    """Re-annotate ``path`` whenever it changes, until cancelled."""
    host = FileHost(path, poll_interval_s=args.poll_interval)
    _apply_viewport(host, args)

    renderer = _build_renderer(args, host, clear_screen=sys.stdout.isatty())
    synchronizer = AnnotationSynchronizer(renderer, settings=settings, host=host)
    _status("Watching {} (Ctrl-C to stop)".format(path))
    try:
        synchronizer.on_trigger(TriggerReason.CONTEXT_CHANGED)
        await asyncio.Event().wait()
    finally:
        synchronizer.shutdown()
        host.stop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running a pass.
    """
    parser = argparse.ArgumentParser(
        prog="syllable-counter",
        description="Annotate each line of a text file with its estimated syllable count.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the text file to annotate, or '-' to read stdin.",
    )

    parser.add_argument(
        "--output",
        choices=sorted(RENDERERS.keys()),
        default="text",
        help="Output style (default: %(default)s).",
    )

    parser.add_argument(
        "--terse",
        action="store_true",
        help="Print bare numbers instead of 'N syllables'.",
    )

    parser.add_argument(
        "--show-zero",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_SHOW_ZERO_SYLLABLES,
        help="Annotate lines with zero syllables (default: %(default)s).",
    )

    parser.add_argument(
        "--max-lines",
        type=int,
        default=None,
        help="Maximum number of lines annotated per pass.",
    )

    parser.add_argument(
        "--all-lines",
        action="store_true",
        help="Ignore the viewport and annotate from the first line.",
    )

    parser.add_argument(
        "--viewport-top",
        type=int,
        default=None,
        help="0-based first line of the simulated viewport.",
    )

    parser.add_argument(
        "--viewport-height",
        type=int,
        default=None,
        help="Number of lines in the simulated viewport (default: 40 when --viewport-top is set).",
    )

    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and re-annotate whenever the file changes.",
    )

    parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL_S,
        help="Seconds between file checks in --watch mode (default: %(default)s).",
    )

    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=None,
        help="Quiet period in milliseconds before re-annotating in --watch mode.",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log synchronizer activity to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Returns the process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = _settings_from_args(args)
    except ValidationError as e:
        print("Error: invalid option: {}".format(e.errors()[0]["msg"]), file=sys.stderr)
        return 1

    try:
        if args.input_file == "-":
            if args.watch:
                print("Error: --watch needs a file path, not stdin", file=sys.stderr)
                return 1
            return asyncio.run(_run_once(args, settings, sys.stdin.read()))

        path = Path(args.input_file)
        if not path.is_file():
            print("Error: File not found: {}".format(path), file=sys.stderr)
            return 1

        if args.watch:
            return asyncio.run(_run_watch(args, settings, path))

        text = path.read_text(encoding="utf-8", errors="replace")
        return asyncio.run(_run_once(args, settings, text))
    except KeyboardInterrupt:
        _status("\nStopped.")
        return 130
    except OSError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
