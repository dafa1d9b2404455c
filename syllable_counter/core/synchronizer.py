"""Annotation synchronizer: keeps per-line syllable counts in step with a view.

WHY: Recounting every line of a document on every keystroke or scroll
frame is wasted work, and two overlapping recounts can leave a mix of
old and new annotations on screen. The synchronizer decides when to
recount, which lines to recount, and hands the renderer one complete
annotation set per pass.

HOW: Triggers land in one of two debounce slots (edit-class and
view-class). When a slot fires, a pass runs as a coroutine on the event
loop: clear → measure → compute → emit, yielding between phases. An
``is_processing`` flag keeps passes from overlapping; triggers that hit
a running pass set ``pending_update`` and produce exactly one follow-up
pass shortly after the running one ends.

RULES:
- At most one pass in flight per synchronizer
- Every pass clears and rebuilds the full annotation set
- A pass snapshots settings when it starts; configure() affects the next pass
- Default range is [0, min(total_lines, max_lines_to_process) - 1]
- Visible range is padded by RANGE_PADDING_LINES and capped at
  max_lines_to_process lines; unknown visibility falls back to default
- Missing document or layout aborts the pass with no annotations and no error
- Renderer failures are logged; no retry until the next trigger
- Nothing raised inside a pass escapes it
- Scroll triggers are ignored when only_visible_range is off
- A pass that outlives its editing context (context lost, host swapped,
  shutdown) does not emit
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional, Sequence, Set, Tuple

from syllable_counter.config import (
    FOLLOW_UP_DELAY_MS,
    RANGE_PADDING_LINES,
    VISIBILITY_TOLERANCE,
    load_settings,
)
from syllable_counter.core.estimator import estimate_syllables
from syllable_counter.core.models import (
    Annotation,
    LineElement,
    SynchronizerState,
    TriggerReason,
    ViewportBounds,
    VisibleRange,
    to_placement,
)
from syllable_counter.core.scheduler import DelayedTask
from syllable_counter.core.settings import SynchronizerSettings
from syllable_counter.hosts.base import EditorHost, Unsubscribe
from syllable_counter.renderers.base import AnnotationRenderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Range computation
# ---------------------------------------------------------------------------


def default_range(total_lines: int, max_lines: int) -> VisibleRange:
    """Lines [0, min(total_lines, max_lines) - 1]."""
    return VisibleRange(0, min(total_lines, max_lines) - 1)


def find_visible_range(
    elements: Sequence[LineElement],
    viewport: Optional[ViewportBounds],
    tolerance: float = VISIBILITY_TOLERANCE,
    padding: int = RANGE_PADDING_LINES,
) -> Optional[VisibleRange]:
    """Locate the lines on or near screen, padded on both sides.

    WHY: Annotating only what the user can see (plus a margin so a short
    scroll does not expose bare lines) keeps passes cheap on long
    documents.

    HOW: Walks the elements in order. A line is visible when its rect
    overlaps the viewport widened by ``tolerance`` on each edge. Once a
    visible line has been seen, the walk stops at the first line starting
    below the viewport. The span is then padded and clamped.

    RULES:
    - Returns None when the viewport is unknown or no line is visible
    - Indices are positions in ``elements``
    - Result is clamped to [0, len(elements) - 1]
    """
    if viewport is None or not elements:
        return None

    start = -1
    end = -1
    for position, element in enumerate(elements):
        rect = element.rect
        if rect.bottom >= viewport.top - tolerance and rect.top <= viewport.bottom + tolerance:
            if start == -1:
                start = position
            end = position
        elif start != -1 and rect.top > viewport.bottom:
            break

    if start == -1:
        return None

    return VisibleRange(
        start_line=max(0, start - padding),
        end_line=min(len(elements) - 1, end + padding),
    )


def compute_candidate_range(
    total_lines: int,
    elements: Sequence[LineElement],
    viewport: Optional[ViewportBounds],
    settings: SynchronizerSettings,
) -> VisibleRange:
    """Pick the line span one pass will annotate.

    RULES:
    - only_visible_range off → default_range()
    - only_visible_range on → padded visible range, truncated at the end
      to max_lines_to_process lines
    - Visibility unknown → default_range()
    """
    fallback = default_range(total_lines, settings.max_lines_to_process)
    if not settings.only_visible_range:
        return fallback

    visible = find_visible_range(elements, viewport)
    if visible is None:
        return fallback

    if len(visible) > settings.max_lines_to_process:
        visible = VisibleRange(
            start_line=visible.start_line,
            end_line=visible.start_line + settings.max_lines_to_process - 1,
        )
    return visible


# ---------------------------------------------------------------------------
# Synchronizer
# ---------------------------------------------------------------------------


class AnnotationSynchronizer:
    """Debounced, non-overlapping syllable annotation for one editing context.

    WHY: One instance per open document/view owns that view's annotations
    and pass state, with explicit lifecycle calls instead of load/unload
    hooks.

    HOW: attach() binds a host and subscribes to its change events.
    on_trigger() debounces into a pass. synchronize() is the pass itself
    and may also be awaited directly for an immediate, undebounced run.
    on_context_lost() and shutdown() clear and cancel.

    RULES:
    - Renderer is fixed for the synchronizer's lifetime
    - Host may be None (no active context); passes then abort cleanly
    - on_trigger() needs a running event loop
    - After shutdown() every trigger is ignored
    """

    def __init__(
        self,
        renderer: AnnotationRenderer,
        settings: Optional[SynchronizerSettings] = None,
        host: Optional[EditorHost] = None,
        estimator: Callable[[str], int] = estimate_syllables,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._renderer = renderer
        self._settings = settings if settings is not None else load_settings()
        self._estimator = estimator
        self._loop = loop
        self._state = SynchronizerState()
        self._host: Optional[EditorHost] = None
        self._unsubscribe: Optional[Unsubscribe] = None
        self._edit_slot = DelayedTask("edit-trigger", loop)
        self._view_slot = DelayedTask("view-trigger", loop)
        self._follow_up = DelayedTask("follow-up-pass", loop)
        self._tasks: Set[asyncio.Task] = set()
        self._context_epoch = 0
        self._closed = False
        self.pass_count = 0

        if host is not None:
            self.attach(host)

    # -- accessors ---------------------------------------------------------

    @property
    def settings(self) -> SynchronizerSettings:
        return self._settings

    @property
    def state(self) -> SynchronizerState:
        return self._state

    @property
    def host(self) -> Optional[EditorHost]:
        return self._host

    @property
    def annotations(self) -> List[Annotation]:
        return list(self._state.current_annotations)

    @property
    def closed(self) -> bool:
        return self._closed

    # -- lifecycle ---------------------------------------------------------

    def configure(self, settings: Optional[SynchronizerSettings] = None, **changes: Any) -> SynchronizerSettings:
        """Replace or update settings for the next pass.

        RULES:
        - A full SynchronizerSettings replaces the current one, then
          ``changes`` are applied on top
        - Raises pydantic.ValidationError on invalid values
        - Passes already running keep the settings they started with
        """
        base = settings if settings is not None else self._settings
        self._settings = base.merged(**changes) if changes else base
        logger.debug("Synchronizer settings updated: %s", self._settings)
        return self._settings

    def attach(self, host: EditorHost) -> None:
        """Make ``host`` the active editing context.

        Does not schedule a pass; callers follow up with
        ``on_trigger(TriggerReason.CONTEXT_CHANGED)``.
        """
        if self._closed:
            raise RuntimeError("Synchronizer has been shut down")
        self._release_host()
        self._context_epoch += 1
        self._host = host
        self._unsubscribe = host.watch(self.on_trigger)
        logger.info("Attached editing context %s", type(host).__name__)

    def on_trigger(self, reason: TriggerReason = TriggerReason.DOCUMENT_CHANGED) -> None:
        """Schedule a debounced pass in response to a host event."""
        if self._closed:
            logger.debug("Ignoring %s trigger after shutdown", reason)
            return

        reason = TriggerReason(reason)
        settings = self._settings
        if reason is TriggerReason.SCROLLED and not settings.only_visible_range:
            return

        slot = self._view_slot if reason.is_view_trigger else self._edit_slot
        slot.schedule(settings.debounce_interval_s, self._start_pass)

    def on_context_lost(self) -> None:
        """Drop the active context: clear annotations and reset state."""
        self._context_epoch += 1
        self._cancel_scheduled()
        self._release_host()
        self._clear_annotations()
        self._state.reset()
        logger.info("Editing context lost; annotations cleared")

    def shutdown(self) -> None:
        """Clear annotations, unsubscribe from the host, cancel scheduled work."""
        if self._closed:
            return
        self.on_context_lost()
        self._closed = True
        logger.info("Synchronizer shut down")

    async def wait_idle(self, poll_interval_s: float = 0.01) -> None:
        """Return once no pass is running or scheduled."""
        while self._tasks or self._edit_slot.pending or self._view_slot.pending or self._follow_up.pending:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(poll_interval_s)

    # -- the pass ----------------------------------------------------------

    async def synchronize(self) -> None:
        """Run one synchronization pass, or mark one pending if a pass is running.

        WHY: This is the whole algorithm: exclusion, clear, measure,
        compute, emit, release. It is a coroutine so the loop can service
        other callbacks between phases; triggers that arrive then are
        coalesced rather than queued.

        RULES:
        - Returns immediately with pending_update=True if a pass is running
        - Never raises
        - Emits nothing if the editing context changed during the pass
        """
        state = self._state
        if state.is_processing:
            state.pending_update = True
            return

        state.is_processing = True
        state.pending_update = False
        self.pass_count += 1
        settings = self._settings
        epoch = self._context_epoch

        try:
            self._clear_annotations()
            await asyncio.sleep(0)

            snapshot = self._measure(settings)
            if snapshot is None:
                return
            lines, elements, viewport = snapshot
            await asyncio.sleep(0)

            candidate = compute_candidate_range(len(lines), elements, viewport, settings)
            annotations = self._build_annotations(lines, elements, candidate, settings)
            await asyncio.sleep(0)

            if epoch != self._context_epoch:
                logger.debug("Editing context changed during pass; discarding results")
                return
            self._emit(annotations, settings)
            logger.debug(
                "Pass %d annotated %d of lines %d-%d",
                self.pass_count,
                len(annotations),
                candidate.start_line,
                candidate.end_line,
            )
        except Exception:
            logger.exception("Error updating syllable counts")
            state.current_annotations = []
        finally:
            state.is_processing = False
            if state.pending_update and not self._closed:
                self._follow_up.schedule(FOLLOW_UP_DELAY_MS / 1000.0, self._start_pass)

    # -- internals ---------------------------------------------------------

    def _start_pass(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self.synchronize())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _measure(
        self,
        settings: SynchronizerSettings,
    ) -> Optional[Tuple[List[str], List[LineElement], Optional[ViewportBounds]]]:
        host = self._host
        if host is None:
            logger.debug("No editing context; skipping pass")
            return None

        text = host.get_document_text()
        if text is None:
            return None

        elements = host.get_line_elements()
        if not elements:
            return None

        viewport = None
        if settings.only_visible_range:
            try:
                viewport = host.get_viewport_bounds()
            except Exception:
                logger.warning("Viewport bounds unavailable; annotating from the top", exc_info=True)

        return text.split("\n"), list(elements), viewport

    def _build_annotations(
        self,
        lines: Sequence[str],
        elements: Sequence[LineElement],
        candidate: VisibleRange,
        settings: SynchronizerSettings,
    ) -> List[Annotation]:
        annotations: List[Annotation] = []
        for index in candidate.indices():
            # Text and layout can disagree for a moment during edits
            if index >= len(lines) or index >= len(elements):
                continue

            count = self._estimator(lines[index])
            if count > 0 or (settings.show_zero_syllables and count == 0):
                annotations.append(Annotation(
                    line_index=index,
                    count=count,
                    vertical_offset=elements[index].vertical_offset,
                ))
        return annotations

    def _emit(self, annotations: List[Annotation], settings: SynchronizerSettings) -> None:
        placements = [to_placement(a, settings.verbosity) for a in annotations]
        try:
            self._renderer.render_annotations(placements)
        except Exception:
            logger.exception("Error rendering %d syllable annotations", len(placements))
            self._state.current_annotations = []
            return
        self._state.current_annotations = annotations

    def _clear_annotations(self) -> None:
        try:
            self._renderer.clear_annotations()
        except Exception:
            logger.exception("Error clearing syllable annotations")
        self._state.current_annotations = []

    def _cancel_scheduled(self) -> None:
        self._edit_slot.cancel()
        self._view_slot.cancel()
        self._follow_up.cancel()

    def _release_host(self) -> None:
        if self._unsubscribe is not None:
            try:
                self._unsubscribe()
            except Exception:
                logger.exception("Error unsubscribing from editing context")
            self._unsubscribe = None
        self._host = None
