"""FastAPI application exposing syllable counts and annotation passes.

WHY: Editor plugins written in other languages (and quick curl checks)
need the estimator and the synchronizer's range/display policy without
embedding Python. An HTTP API gives them both, with OpenAPI docs.

HOW: POST /syllables runs the estimator over every line. POST
/annotations builds a MemoryHost from the posted document and viewport,
runs one synchronizer pass into a CollectingRenderer, and returns the
placements. Each request gets its own synchronizer; no state is shared.

RULES:
- Requests are stateless; annotations are never cached between calls
- Viewport lines map onto MemoryHost's uniform synthesized geometry
- Validation errors are 422 (FastAPI/pydantic default)
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from syllable_counter import __version__
from syllable_counter.config import load_settings
from syllable_counter.core.estimator import estimate_syllables
from syllable_counter.core.models import format_count
from syllable_counter.core.synchronizer import AnnotationSynchronizer
from syllable_counter.hosts.memory import MemoryHost
from syllable_counter.renderers.collecting import CollectingRenderer
from syllable_counter.server.models import (
    AnnotationModel,
    AnnotationRequest,
    AnnotationResponse,
    ErrorResponse,
    HealthResponse,
    LineCount,
    SyllableRequest,
    SyllableResponse,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Syllable Counter API",
    description=(
        "Heuristic English syllable estimation per line, and one-shot "
        "annotation passes with the same visible-range and display policy "
        "the interactive synchronizer uses."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Endpoints: Syllables
# ---------------------------------------------------------------------------


@app.post(
    "/syllables",
    response_model=SyllableResponse,
    tags=["syllables"],
    summary="Count syllables per line",
    description="Returns the estimate for every line of the submitted text and their total.",
    responses={422: {"model": ErrorResponse, "description": "Invalid request body"}},
)
async def count_syllables(request: SyllableRequest) -> SyllableResponse:
    lines = [
        LineCount(line_index=i, count=estimate_syllables(line))
        for i, line in enumerate(request.text.split("\n"))
    ]
    return SyllableResponse(lines=lines, total=sum(line.count for line in lines))


# ---------------------------------------------------------------------------
# Endpoints: Annotations
# ---------------------------------------------------------------------------


@app.post(
    "/annotations",
    response_model=AnnotationResponse,
    tags=["annotations"],
    summary="Run one annotation pass",
    description=(
        "Runs a single synchronization pass over the submitted document. "
        "With only_visible_range enabled and a viewport given, only lines "
        "near the viewport are annotated; otherwise annotation starts at "
        "the top, up to max_lines_to_process lines."
    ),
    responses={422: {"model": ErrorResponse, "description": "Invalid request body"}},
)
async def create_annotations(request: AnnotationRequest) -> AnnotationResponse:
    settings = request.settings if request.settings is not None else load_settings()

    host = MemoryHost(text=request.text)
    if request.first_visible_line is not None and request.visible_line_count is not None:
        host.show_lines(request.first_visible_line, request.visible_line_count)

    renderer = CollectingRenderer()
    synchronizer = AnnotationSynchronizer(renderer, settings=settings, host=host)
    try:
        await synchronizer.synchronize()
        annotations = synchronizer.annotations
    finally:
        synchronizer.shutdown()

    logger.debug(
        "Annotated %d line(s) of a %d-line document",
        len(annotations), request.text.count("\n") + 1,
    )

    return AnnotationResponse(
        annotations=[
            AnnotationModel(
                line_index=a.line_index,
                count=a.count,
                display_text=format_count(a.count, settings.verbosity),
                vertical_offset=a.vertical_offset,
            )
            for a in annotations
        ],
        line_count=len(request.text.split("\n")),
    )


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the syllable-counter-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
