"""Dataclasses and enums shared by the synchronizer, hosts, and renderers.

WHY: The synchronizer talks to two external collaborators — the editor
host (text, line geometry, viewport) and the renderer (placements). A
small set of typed records is the contract between them, so hosts and
renderers can be swapped without touching the pass logic.

HOW: Frozen dataclasses for geometry and annotations, str-based enums
for closed sets (trigger reasons, verbosity), and one helper that turns
a count into display text.

RULES:
- Annotation is synchronizer-owned; renderers only ever see Placement
- All geometry is in host units (pixels for a GUI, rows for a terminal)
- Rect.top <= Rect.bottom and ViewportBounds.top <= ViewportBounds.bottom
- Enums inherit from str so values serialize cleanly to JSON
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List


class TriggerReason(str, enum.Enum):
    """Why a synchronization pass was requested.

    RULES:
    - document_changed / context_changed are edit-class triggers
    - scrolled / dom_mutated are view-class triggers
    - Each class is debounced independently
    """

    DOCUMENT_CHANGED = "document_changed"
    CONTEXT_CHANGED = "context_changed"
    SCROLLED = "scrolled"
    DOM_MUTATED = "dom_mutated"

    @property
    def is_view_trigger(self) -> bool:
        return self in (TriggerReason.SCROLLED, TriggerReason.DOM_MUTATED)


class Verbosity(str, enum.Enum):
    """How an annotation count is rendered."""

    VERBOSE = "verbose"
    TERSE = "terse"


@dataclass(frozen=True)
class Rect:
    """Vertical extent of a rendered line."""

    top: float
    bottom: float


@dataclass(frozen=True)
class LineElement:
    """One rendered line as reported by the host.

    Attributes:
        index: Zero-based line index in the document.
        vertical_offset: Offset used to position the annotation.
        rect: Bounding box in the same coordinate space as the viewport.
    """

    index: int
    vertical_offset: float
    rect: Rect


@dataclass(frozen=True)
class ViewportBounds:
    """Top and bottom edges of the scrolled viewport."""

    top: float
    bottom: float


@dataclass(frozen=True)
class VisibleRange:
    """Inclusive span of line indices to annotate."""

    start_line: int
    end_line: int

    def __len__(self) -> int:
        return max(0, self.end_line - self.start_line + 1)

    def indices(self) -> range:
        return range(self.start_line, self.end_line + 1)


@dataclass(frozen=True)
class Annotation:
    """A computed syllable count pinned to a line.

    WHY: The synchronizer keeps the last emitted set so it can be cleared
    and compared between passes.

    RULES:
    - Created only during a pass, for lines that pass the display filter
    - Never mutated; a new pass builds a new list
    """

    line_index: int
    count: int
    vertical_offset: float


@dataclass(frozen=True)
class Placement:
    """Render instruction handed to an AnnotationRenderer."""

    line_index: int
    display_text: str
    vertical_offset: float


@dataclass
class SynchronizerState:
    """Mutable per-context state of an AnnotationSynchronizer.

    RULES:
    - is_processing: True only while a pass is between entry and release
    - pending_update: set by triggers that arrive during a pass
    - current_annotations: exactly what was last emitted (empty after clear)
    """

    is_processing: bool = False
    pending_update: bool = False
    current_annotations: List[Annotation] = field(default_factory=list)

    def reset(self) -> None:
        self.pending_update = False
        self.current_annotations = []


def format_count(count: int, verbosity: Verbosity = Verbosity.VERBOSE) -> str:
    """Render a syllable count as display text.

    RULES:
    - verbose: "1 syllable", "0 syllables", "7 syllables"
    - terse: the bare number
    """
    if Verbosity(verbosity) is Verbosity.TERSE:
        return str(count)
    return "{} {}".format(count, "syllable" if count == 1 else "syllables")


def to_placement(annotation: Annotation, verbosity: Verbosity = Verbosity.VERBOSE) -> Placement:
    return Placement(
        line_index=annotation.line_index,
        display_text=format_count(annotation.count, verbosity),
        vertical_offset=annotation.vertical_offset,
    )
