"""In-memory editor host with synthesized uniform line geometry.

WHY: The HTTP API and the CLI have no real text widget, only a string.
They still need line elements and a viewport so the synchronizer can
run its visible-range logic unchanged. Tests use the same host to drive
edits and scrolls deterministically.

HOW: Line ``i`` occupies [i * line_height, (i + 1) * line_height) and is
annotated at offset ``i * line_height``. The viewport is a window of
``viewport_height`` units starting at ``scroll_top``. Mutators notify
watchers synchronously with the matching TriggerReason.

RULES:
- text=None means "no document open" (get_document_text() returns None)
- rendered_line_count overrides how many line elements exist, to model
  layout lagging behind the text
- viewport_height=None means visibility is unknown
- Watchers are called in subscription order; exceptions are logged
"""

from __future__ import annotations

import logging
from typing import List, Optional

from syllable_counter.core.models import LineElement, Rect, TriggerReason, ViewportBounds
from syllable_counter.hosts.base import EditorHost, TriggerCallback, Unsubscribe

logger = logging.getLogger(__name__)

DEFAULT_LINE_HEIGHT = 20.0


def uniform_line_elements(line_count: int, line_height: float = DEFAULT_LINE_HEIGHT) -> List[LineElement]:
    """Build ``line_count`` stacked line elements of equal height."""
    return [
        LineElement(
            index=i,
            vertical_offset=i * line_height,
            rect=Rect(top=i * line_height, bottom=(i + 1) * line_height),
        )
        for i in range(line_count)
    ]


class MemoryHost(EditorHost):
    """Editor host backed by a string held in memory."""

    def __init__(
        self,
        text: Optional[str] = "",
        line_height: float = DEFAULT_LINE_HEIGHT,
        scroll_top: float = 0.0,
        viewport_height: Optional[float] = None,
        rendered_line_count: Optional[int] = None,
    ) -> None:
        self._text = text
        self.line_height = line_height
        self.scroll_top = scroll_top
        self.viewport_height = viewport_height
        self.rendered_line_count = rendered_line_count
        self._watchers: List[TriggerCallback] = []

    # -- EditorHost --------------------------------------------------------

    def get_document_text(self) -> Optional[str]:
        return self._text

    def get_line_elements(self) -> Optional[List[LineElement]]:
        text = self.get_document_text()
        if text is None:
            return None
        count = self.rendered_line_count
        if count is None:
            count = len(text.split("\n"))
        return uniform_line_elements(count, self.line_height)

    def get_viewport_bounds(self) -> Optional[ViewportBounds]:
        if self.viewport_height is None:
            return None
        return ViewportBounds(top=self.scroll_top, bottom=self.scroll_top + self.viewport_height)

    def watch(self, callback: TriggerCallback) -> Unsubscribe:
        self._watchers.append(callback)

        def unsubscribe() -> None:
            if callback in self._watchers:
                self._watchers.remove(callback)

        return unsubscribe

    # -- mutators ----------------------------------------------------------

    @property
    def watcher_count(self) -> int:
        return len(self._watchers)

    def set_text(self, text: Optional[str]) -> None:
        """Replace the document and notify watchers of a document change."""
        self._text = text
        self.notify(TriggerReason.DOCUMENT_CHANGED)

    def scroll_to(self, top: float) -> None:
        """Move the viewport and notify watchers of a scroll."""
        self.scroll_top = top
        self.notify(TriggerReason.SCROLLED)

    def show_lines(self, first_line: int, line_count: int) -> None:
        """Size the viewport to ``line_count`` lines starting at ``first_line``."""
        self.viewport_height = line_count * self.line_height
        self.scroll_to(first_line * self.line_height)

    def notify(self, reason: TriggerReason) -> None:
        for callback in list(self._watchers):
            try:
                callback(reason)
            except Exception:
                logger.exception("Change watcher failed for %s", reason)
