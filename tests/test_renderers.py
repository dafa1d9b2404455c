"""Tests for the collecting, text, and JSON-lines renderers.

WHY: Renderers are the user-visible end of every pass; their output
format is what the CLI prints and what editor plugins parse.

HOW: Stream renderers write into io.StringIO and the output is checked
line by line.
"""

import io
import json

from syllable_counter.core.models import Placement
from syllable_counter.renderers import RENDERERS, CollectingRenderer, JsonLinesRenderer, TextStreamRenderer

PLACEMENTS = [
    Placement(line_index=0, display_text="1 syllable", vertical_offset=0.0),
    Placement(line_index=2, display_text="3 syllables", vertical_offset=40.0),
]


class TestRegistry:

    def test_registered_renderers(self):
        assert RENDERERS == {"text": TextStreamRenderer, "json": JsonLinesRenderer}


class TestCollectingRenderer:
    """Keeps batches and the current set."""

    def test_render_and_clear(self):
        renderer = CollectingRenderer()
        renderer.render_annotations(PLACEMENTS)
        assert renderer.placements == PLACEMENTS
        assert renderer.render_count == 1

        renderer.clear_annotations()
        assert renderer.placements == []
        assert renderer.clear_count == 1
        assert renderer.batches == [PLACEMENTS]


class TestTextStreamRenderer:
    """Aligned rows beside the line text."""

    def test_rows(self):
        stream = io.StringIO()
        renderer = TextStreamRenderer(stream, lambda: "cat\n\nbanana", text_width=10)
        renderer.render_annotations(PLACEMENTS)

        rows = stream.getvalue().splitlines()
        assert rows == [
            "    1 | cat        | 1 syllable",
            "    3 | banana     | 3 syllables",
        ]

    def test_long_lines_are_truncated(self):
        stream = io.StringIO()
        renderer = TextStreamRenderer(stream, lambda: "a" * 30, text_width=10)
        renderer.render_annotations([PLACEMENTS[0]])
        assert "| aaaaaaaaa… |" in stream.getvalue()

    def test_missing_line_prints_empty_text(self):
        stream = io.StringIO()
        renderer = TextStreamRenderer(stream, lambda: None, text_width=3)
        renderer.render_annotations([PLACEMENTS[1]])
        assert stream.getvalue() == "    3 |     | 3 syllables\n"

    def test_empty_batch_writes_nothing(self):
        stream = io.StringIO()
        TextStreamRenderer(stream).render_annotations([])
        assert stream.getvalue() == ""

    def test_clear_screen_only_when_enabled(self):
        quiet, loud = io.StringIO(), io.StringIO()
        TextStreamRenderer(quiet).clear_annotations()
        TextStreamRenderer(loud, clear_screen=True).clear_annotations()
        assert quiet.getvalue() == ""
        assert loud.getvalue().startswith("\x1b[2J")


class TestJsonLinesRenderer:
    """One JSON object per pass."""

    def test_one_object_per_batch(self):
        stream = io.StringIO()
        renderer = JsonLinesRenderer(stream)
        renderer.render_annotations(PLACEMENTS)
        renderer.render_annotations([])

        first, second = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert first["annotations"][1] == {
            "line_index": 2,
            "display_text": "3 syllables",
            "vertical_offset": 40.0,
        }
        assert second == {"annotations": []}
