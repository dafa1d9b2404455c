"""Annotation renderer registry.

WHY: The CLI picks an output style by name (``--output text``). A
central dict keeps that lookup in one place; adding a renderer is one
class plus one line here.

HOW: RENDERERS maps string keys to stream renderer *classes*. Callers
instantiate with ``(stream, text_source)``.

RULES:
- Keys are lowercase identifiers used as CLI choices
- CollectingRenderer is not registered; it has no stream
"""

from __future__ import annotations

from typing import Dict, Type

from syllable_counter.renderers.base import AnnotationRenderer
from syllable_counter.renderers.collecting import CollectingRenderer
from syllable_counter.renderers.terminal import JsonLinesRenderer, TextStreamRenderer

RENDERERS: Dict[str, Type[AnnotationRenderer]] = {
    "text": TextStreamRenderer,
    "json": JsonLinesRenderer,
}

__all__ = [
    "AnnotationRenderer",
    "CollectingRenderer",
    "JsonLinesRenderer",
    "RENDERERS",
    "TextStreamRenderer",
]
