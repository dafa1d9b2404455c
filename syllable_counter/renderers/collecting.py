"""Renderer that keeps the last emitted placements in memory.

WHY: The HTTP API returns placements in a response body instead of
drawing them, and tests need to see exactly what each pass emitted.

HOW: Stores the most recent batch and counts render/clear calls.
"""

from __future__ import annotations

from typing import List, Sequence

from syllable_counter.core.models import Placement
from syllable_counter.renderers.base import AnnotationRenderer


class CollectingRenderer(AnnotationRenderer):
    """Keeps the current placements and a history of batches."""

    def __init__(self) -> None:
        self.placements: List[Placement] = []
        self.batches: List[List[Placement]] = []
        self.clear_count = 0

    @property
    def render_count(self) -> int:
        return len(self.batches)

    def render_annotations(self, placements: Sequence[Placement]) -> None:
        batch = list(placements)
        self.batches.append(batch)
        self.placements = batch

    def clear_annotations(self) -> None:
        self.clear_count += 1
        self.placements = []
