"""Shared test fixtures for the syllable_counter test suite.

WHY: Most synchronizer, API, and CLI tests need the same building blocks
— a sample poem, fast (undebounced) settings, a collecting renderer,
and a counting estimator. Centralizing them keeps the tests short.

HOW: Plain pytest fixtures plus a few helper classes for injecting
failures into the renderer and host seams.

RULES:
- Settings fixtures use debounce_interval_ms=0 so tests do not sleep long
- Async scenarios are driven with asyncio.run() inside each test
- No fixture shares mutable state between tests
"""

from typing import List, Sequence

import pytest

from syllable_counter.core.estimator import estimate_syllables
from syllable_counter.core.models import Placement
from syllable_counter.core.settings import SynchronizerSettings
from syllable_counter.renderers.base import AnnotationRenderer
from syllable_counter.renderers.collecting import CollectingRenderer


# ---------------------------------------------------------------------------
# Sample text
# ---------------------------------------------------------------------------

# Per-line estimates: 9, 8, 0, 1, 3
SAMPLE_POEM = "\n".join([
    "The woods are lovely, dark and deep,",
    "But I have promises to keep,",
    "",
    "cat",
    "banana",
])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class CountingEstimator:
    """Wraps estimate_syllables and records every line it is asked about."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def __call__(self, line: str) -> int:
        self.calls.append(line)
        return estimate_syllables(line)


class FailingRenderer(AnnotationRenderer):
    """Renderer whose render and/or clear raise."""

    def __init__(self, fail_render: bool = True, fail_clear: bool = False) -> None:
        self.fail_render = fail_render
        self.fail_clear = fail_clear
        self.rendered: List[Placement] = []

    def render_annotations(self, placements: Sequence[Placement]) -> None:
        if self.fail_render:
            raise RuntimeError("renderer detached")
        self.rendered = list(placements)

    def clear_annotations(self) -> None:
        if self.fail_clear:
            raise RuntimeError("clear failed")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_poem():
    return SAMPLE_POEM


@pytest.fixture
def renderer():
    return CollectingRenderer()


@pytest.fixture
def all_lines_settings():
    """No debounce, visible-range policy off, defaults otherwise."""
    return SynchronizerSettings(debounce_interval_ms=0, only_visible_range=False)


@pytest.fixture
def visible_settings():
    """No debounce, visible-range policy on."""
    return SynchronizerSettings(debounce_interval_ms=0, only_visible_range=True)


@pytest.fixture
def counting_estimator():
    return CountingEstimator()
