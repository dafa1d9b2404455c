"""Abstract annotation renderer.

WHY: The synchronizer produces placements; something else draws them.
This base class keeps the pass logic independent of the display — a
terminal, a GUI overlay, or an HTTP response body.

HOW: AnnotationRenderer is an ABC with two requirements — a batched
``render_annotations()`` and ``clear_annotations()``.

RULES:
- render_annotations() receives the complete set for one pass in one call
- A renderer never mutates the placements it receives
- Either method may raise; the synchronizer logs and carries on

To add a new renderer:
1. Create a new file in renderers/
2. Subclass AnnotationRenderer and implement both methods
3. Register it in RENDERERS in renderers/__init__.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from syllable_counter.core.models import Placement


class AnnotationRenderer(ABC):
    """Sink for annotation placements."""

    @abstractmethod
    def render_annotations(self, placements: Sequence[Placement]) -> None:
        """Display a full set of placements in one operation."""

    @abstractmethod
    def clear_annotations(self) -> None:
        """Remove everything previously rendered."""
