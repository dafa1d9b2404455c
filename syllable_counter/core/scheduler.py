"""Single-slot delayed tasks for debouncing triggers on an asyncio loop.

WHY: Editors fire change and scroll events in bursts — one per keystroke
or per scroll frame. Running a pass for each would be wasted work. A
single-slot delayed task coalesces a burst into one call after a quiet
period, and gives the synchronizer a cancellable handle for shutdown.

HOW: DelayedTask wraps ``loop.call_later``. Scheduling while a call is
already pending cancels the old timer and starts a new one, so the
deadline slides with every new trigger. The callback runs on the loop
thread and any exception it raises is logged, never propagated.

RULES:
- At most one pending call per DelayedTask
- schedule() replaces a pending call (callback and deadline)
- cancel() is idempotent and returns whether a call was pending
- The event loop is resolved lazily, so instances can be built outside
  a running loop and used inside one later
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class DelayedTask:
    """A named, replaceable, cancellable delayed call."""

    def __init__(
        self,
        name: str,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.name = name
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay_s: float, callback: Callable[..., Any], *args: Any) -> None:
        """Run ``callback(*args)`` after ``delay_s`` seconds, replacing any pending call.

        RULES:
        - Must be called from the loop thread (or with a running loop)
        - Negative delays are treated as zero
        """
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(max(0.0, delay_s), self._fire, callback, args)

    def cancel(self) -> bool:
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self, callback: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        try:
            callback(*args)
        except Exception:
            logger.exception("Delayed task %s failed", self.name)
