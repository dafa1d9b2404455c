"""Stream renderers for the command line: aligned text and JSON lines.

WHY: The CLI shows annotations next to the lines they describe, either
for a person (aligned columns) or for an editor plugin reading stdout
(one JSON object per pass).

HOW: Both renderers take the output stream and a callable returning the
current document text, so each placement can be printed beside its line.
TextStreamRenderer optionally clears the terminal on clear_annotations()
for watch mode.

RULES:
- Output is written and flushed once per render_annotations() call
- Line numbers are printed 1-based; JSON keeps 0-based line_index
- A placement whose line no longer exists prints with empty text
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict
from typing import Callable, List, Optional, Sequence, TextIO

from syllable_counter.core.models import Placement
from syllable_counter.renderers.base import AnnotationRenderer

TextSource = Callable[[], Optional[str]]

_CLEAR_SCREEN = "\x1b[2J\x1b[H"


def _split_lines(source: Optional[TextSource]) -> List[str]:
    if source is None:
        return []
    text = source()
    return text.split("\n") if text is not None else []


class TextStreamRenderer(AnnotationRenderer):
    """Prints ``<line no> | <line text> | <count>`` rows."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        text_source: Optional[TextSource] = None,
        clear_screen: bool = False,
        text_width: int = 60,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.text_source = text_source
        self.clear_screen = clear_screen
        self.text_width = text_width

    def render_annotations(self, placements: Sequence[Placement]) -> None:
        lines = _split_lines(self.text_source)
        rows = []
        for placement in placements:
            text = lines[placement.line_index] if placement.line_index < len(lines) else ""
            if len(text) > self.text_width:
                text = text[: self.text_width - 1] + "…"
            rows.append("{:>5} | {:<{width}} | {}".format(
                placement.line_index + 1, text, placement.display_text, width=self.text_width,
            ))
        if rows:
            self.stream.write("\n".join(rows) + "\n")
        self.stream.flush()

    def clear_annotations(self) -> None:
        if self.clear_screen:
            self.stream.write(_CLEAR_SCREEN)
            self.stream.flush()


class JsonLinesRenderer(AnnotationRenderer):
    """Prints one ``{"annotations": [...]}`` object per pass."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        text_source: Optional[TextSource] = None,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.text_source = text_source

    def render_annotations(self, placements: Sequence[Placement]) -> None:
        payload = {"annotations": [asdict(p) for p in placements]}
        self.stream.write(json.dumps(payload, ensure_ascii=False) + "\n")
        self.stream.flush()

    def clear_annotations(self) -> None:
        return None
