"""Pydantic model for synchronizer configuration.

WHY: Settings arrive from three places — .env defaults, CLI flags, and
HTTP request bodies. A single validated model rejects nonsense values
(zero line budget, negative debounce) at the boundary instead of deep
inside a pass.

HOW: SynchronizerSettings is a pydantic BaseModel with Field constraints
and descriptions (which also feed the OpenAPI docs). merged() applies a
partial update and re-validates.

RULES:
- max_lines_to_process > 0; documented range 100–2000
- debounce_interval_ms >= 0; documented range 100–2000
- verbosity is "verbose" or "terse"
- Instances are treated as immutable; updates produce a new model
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from syllable_counter.core.models import Verbosity


class SynchronizerSettings(BaseModel):
    """Configuration read by each synchronization pass."""

    max_lines_to_process: int = Field(
        default=500,
        gt=0,
        description="Upper bound on lines annotated per pass (documented range 100–2000).",
    )
    debounce_interval_ms: int = Field(
        default=500,
        ge=0,
        description="Quiet period before a burst of triggers runs a pass (documented range 100–2000).",
    )
    only_visible_range: bool = Field(
        default=True,
        description="Annotate only lines near the viewport instead of from the top of the document.",
    )
    show_zero_syllables: bool = Field(
        default=False,
        description="Also annotate lines whose estimate is zero.",
    )
    verbosity: Verbosity = Field(
        default=Verbosity.VERBOSE,
        description="'verbose' renders '3 syllables', 'terse' renders '3'.",
    )

    model_config = {"frozen": True}

    @property
    def debounce_interval_s(self) -> float:
        return self.debounce_interval_ms / 1000.0

    def merged(self, **changes: Any) -> "SynchronizerSettings":
        """Return a validated copy with ``changes`` applied.

        RULES:
        - Unknown keys are ignored, matching pydantic's default
        - Raises pydantic.ValidationError on invalid values
        """
        data = self.model_dump()
        data.update(changes)
        return SynchronizerSettings.model_validate(data)
