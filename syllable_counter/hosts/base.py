"""Abstract editor host: the document and geometry the synchronizer reads.

WHY: The synchronizer must not know whether it is annotating a GUI text
widget, a terminal view of a file, or a document posted over HTTP. This
base class is the one seam every editing environment implements.

HOW: EditorHost is an ABC with three read methods and an optional
``watch()`` event source. A host returns None from a read method when
it currently has nothing to offer (no document open, no layout yet).

RULES:
- get_document_text() returns the full text or None when no document
- get_line_elements() returns rendered lines in document order, or None
- get_viewport_bounds() returns None when visibility is unknown
- watch() registers a content-changed callback and returns a callable
  that unsubscribes; the default implementation never fires

To add a new host:
1. Subclass EditorHost
2. Implement the three read methods
3. Override watch() if the environment can push change notifications
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from syllable_counter.core.models import LineElement, TriggerReason, ViewportBounds

TriggerCallback = Callable[[TriggerReason], None]
Unsubscribe = Callable[[], None]


def _noop() -> None:
    return None


class EditorHost(ABC):
    """Source of document text, line geometry, and change events."""

    @abstractmethod
    def get_document_text(self) -> Optional[str]:
        """Full document text, or None if no document is active."""

    @abstractmethod
    def get_line_elements(self) -> Optional[List[LineElement]]:
        """Rendered lines with geometry, or None if layout is unavailable."""

    @abstractmethod
    def get_viewport_bounds(self) -> Optional[ViewportBounds]:
        """Current viewport edges, or None if they cannot be determined."""

    def watch(self, callback: TriggerCallback) -> Unsubscribe:
        """Subscribe to content-changed events. Hosts without events ignore this."""
        return _noop
