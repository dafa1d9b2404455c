"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: Each endpoint has its own request and response model. Synchronizer
settings reuse core.settings.SynchronizerSettings so the API and the
engine can never disagree about field names or bounds.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Line indices in responses are 0-based
- Documents are capped at MAX_DOCUMENT_CHARS characters
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from syllable_counter.core.settings import SynchronizerSettings

MAX_DOCUMENT_CHARS = 1_000_000


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class SyllableRequest(BaseModel):
    """Text to count, line by line."""

    text: str = Field(
        max_length=MAX_DOCUMENT_CHARS,
        description="Document text. Lines are separated by '\\n'.",
    )


class AnnotationRequest(BaseModel):
    """A document plus an optional viewport for one synchronization pass.

    RULES:
    - first_visible_line and visible_line_count must be given together
      for the visible-range policy to apply
    - settings defaults to the server's environment-backed defaults
    """

    text: str = Field(
        max_length=MAX_DOCUMENT_CHARS,
        description="Document text. Lines are separated by '\\n'.",
    )
    first_visible_line: Optional[int] = Field(
        default=None,
        ge=0,
        description="0-based index of the first line in the viewport.",
    )
    visible_line_count: Optional[int] = Field(
        default=None,
        gt=0,
        description="Number of lines the viewport shows.",
    )
    settings: Optional[SynchronizerSettings] = Field(
        default=None,
        description="Synchronizer settings for this pass.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "text": "The woods are lovely, dark and deep,\nBut I have promises to keep,",
                "first_visible_line": 0,
                "visible_line_count": 40,
                "settings": {"verbosity": "terse", "show_zero_syllables": False},
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class LineCount(BaseModel):
    """Syllable estimate for one line."""

    line_index: int = Field(description="0-based line index.")
    count: int = Field(description="Estimated syllables (0 for empty or letterless lines).")


class SyllableResponse(BaseModel):
    """Per-line estimates and their sum."""

    lines: List[LineCount] = Field(description="One entry per line of the input.")
    total: int = Field(description="Sum of all line estimates.")


class AnnotationModel(BaseModel):
    """One placement emitted by the synchronizer."""

    line_index: int = Field(description="0-based line index.")
    count: int = Field(description="Estimated syllables for the line.")
    display_text: str = Field(description="Rendered label, e.g. '7 syllables' or '7'.")
    vertical_offset: float = Field(description="Offset of the line in synthesized layout units.")


class AnnotationResponse(BaseModel):
    """Annotations produced by one pass."""

    annotations: List[AnnotationModel] = Field(description="Annotations in line order.")
    line_count: int = Field(description="Number of lines in the submitted document.")


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = Field(description="Always 'ok' when the service is up.")
    version: str = Field(description="Service version.")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error message.")
