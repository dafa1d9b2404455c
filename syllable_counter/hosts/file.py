"""Editor host backed by a text file on disk, with poll-and-diff watching.

WHY: ``syllable-counter --watch poem.txt`` keeps annotations current while
the poem is edited in any external editor. Portable file-change
notification is not available everywhere, so the host polls.

HOW: get_document_text() reads the file. watch() starts an asyncio task
that re-reads the file every ``poll_interval_s`` and, when the content
differs from the last read (including the file appearing or
disappearing), notifies watchers with DOCUMENT_CHANGED. Geometry comes
from MemoryHost's uniform layout.

RULES:
- A missing or unreadable file is "no document" (None), not an error
- Files are read as UTF-8 with replacement of undecodable bytes
- The poll task starts with the first watcher and stops with the last
- watch() requires a running event loop
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from syllable_counter.core.models import TriggerReason
from syllable_counter.hosts.base import TriggerCallback, Unsubscribe
from syllable_counter.hosts.memory import DEFAULT_LINE_HEIGHT, MemoryHost

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_S = 0.5


class FileHost(MemoryHost):
    """Editor host whose document is a file on disk."""

    def __init__(
        self,
        path: Union[str, Path],
        line_height: float = DEFAULT_LINE_HEIGHT,
        scroll_top: float = 0.0,
        viewport_height: Optional[float] = None,
        poll_interval_s: float = DEFAULT_POLL_INTERVAL_S,
    ) -> None:
        super().__init__(
            text=None,
            line_height=line_height,
            scroll_top=scroll_top,
            viewport_height=viewport_height,
        )
        self.path = Path(path)
        self.poll_interval_s = poll_interval_s
        self._last_seen: Optional[str] = None
        self._poll_task: Optional[asyncio.Task] = None

    def get_document_text(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            logger.debug("Cannot read %s", self.path)
            return None

    def set_text(self, text: Optional[str]) -> None:
        """Write ``text`` to the file (None deletes it) and notify watchers."""
        if text is None:
            self.path.unlink(missing_ok=True)
        else:
            self.path.write_text(text, encoding="utf-8")
        self._last_seen = self.get_document_text()
        self.notify(TriggerReason.DOCUMENT_CHANGED)

    def watch(self, callback: TriggerCallback) -> Unsubscribe:
        unsubscribe_inner = super().watch(callback)
        if self._poll_task is None:
            self._last_seen = self.get_document_text()
            self._poll_task = asyncio.get_running_loop().create_task(self._poll())
            logger.info("Watching %s every %.2fs", self.path, self.poll_interval_s)

        def unsubscribe() -> None:
            unsubscribe_inner()
            if self.watcher_count == 0:
                self.stop()

        return unsubscribe

    def stop(self) -> None:
        """Stop polling. Safe to call repeatedly."""
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None

    def check_for_changes(self) -> bool:
        """Re-read the file and notify watchers if it changed since the last read."""
        current = self.get_document_text()
        if current == self._last_seen:
            return False
        self._last_seen = current
        self.notify(TriggerReason.DOCUMENT_CHANGED)
        return True

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval_s)
            self.check_for_changes()
