"""Tests for MemoryHost and FileHost.

WHY: Hosts synthesize the geometry the visible-range policy relies on,
and FileHost's poll-and-diff watcher is the CLI's only change signal.

HOW: MemoryHost is exercised directly. FileHost uses pytest's tmp_path
and short poll intervals inside asyncio.run().
"""

import asyncio
import logging

from syllable_counter.core.models import Rect, TriggerReason, ViewportBounds
from syllable_counter.hosts.file import FileHost
from syllable_counter.hosts.memory import MemoryHost, uniform_line_elements


class TestUniformLayout:
    """Stacked equal-height lines."""

    def test_offsets_and_rects(self):
        elements = uniform_line_elements(3, 10.0)
        assert [e.index for e in elements] == [0, 1, 2]
        assert [e.vertical_offset for e in elements] == [0.0, 10.0, 20.0]
        assert elements[2].rect == Rect(top=20.0, bottom=30.0)

    def test_empty(self):
        assert uniform_line_elements(0) == []


class TestMemoryHost:
    """Text, geometry, viewport, and change notification."""

    def test_line_elements_follow_text(self):
        host = MemoryHost("a\nb\nc")
        assert len(host.get_line_elements()) == 3

    def test_empty_text_has_one_line(self):
        assert len(MemoryHost("").get_line_elements()) == 1

    def test_no_document(self):
        host = MemoryHost(text=None)
        assert host.get_document_text() is None
        assert host.get_line_elements() is None

    def test_rendered_line_count_override(self):
        host = MemoryHost("a\nb\nc", rendered_line_count=1)
        assert len(host.get_line_elements()) == 1

    def test_viewport_unknown_by_default(self):
        assert MemoryHost("a").get_viewport_bounds() is None

    def test_show_lines(self):
        host = MemoryHost("a", line_height=20.0)
        host.show_lines(5, 10)
        assert host.get_viewport_bounds() == ViewportBounds(top=100.0, bottom=300.0)

    def test_watch_and_unsubscribe(self):
        host = MemoryHost("a")
        reasons = []
        unsubscribe = host.watch(reasons.append)

        host.set_text("b")
        host.scroll_to(40.0)
        assert reasons == [TriggerReason.DOCUMENT_CHANGED, TriggerReason.SCROLLED]

        unsubscribe()
        host.set_text("c")
        assert len(reasons) == 2
        assert host.watcher_count == 0

    def test_failing_watcher_does_not_block_others(self, caplog):
        host = MemoryHost("a")
        reasons = []

        def broken(reason):
            raise RuntimeError("watcher broke")

        host.watch(broken)
        host.watch(reasons.append)
        with caplog.at_level(logging.ERROR):
            host.set_text("b")
        assert reasons == [TriggerReason.DOCUMENT_CHANGED]
        assert "Change watcher failed" in caplog.text


class TestFileHost:
    """Disk-backed document with polling."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "poem.txt"
        path.write_text("cat\nbanana", encoding="utf-8")
        host = FileHost(path)
        assert host.get_document_text() == "cat\nbanana"
        assert len(host.get_line_elements()) == 2

    def test_missing_file_is_no_document(self, tmp_path):
        host = FileHost(tmp_path / "missing.txt")
        assert host.get_document_text() is None
        assert host.get_line_elements() is None

    def test_check_for_changes(self, tmp_path):
        path = tmp_path / "poem.txt"
        path.write_text("cat", encoding="utf-8")
        host = FileHost(path)
        reasons = []
        host._watchers.append(reasons.append)

        assert host.check_for_changes() is True
        assert host.check_for_changes() is False
        path.write_text("banana", encoding="utf-8")
        assert host.check_for_changes() is True
        assert reasons == [TriggerReason.DOCUMENT_CHANGED] * 2

    def test_set_text_writes_and_deletes(self, tmp_path):
        path = tmp_path / "poem.txt"
        host = FileHost(path)
        host.set_text("apple")
        assert path.read_text(encoding="utf-8") == "apple"
        host.set_text(None)
        assert not path.exists()

    def test_watch_polls_for_changes(self, tmp_path):
        path = tmp_path / "poem.txt"
        path.write_text("cat", encoding="utf-8")
        host = FileHost(path, poll_interval_s=0.01)
        reasons = []

        async def scenario():
            unsubscribe = host.watch(reasons.append)
            await asyncio.sleep(0.03)
            assert reasons == []
            path.write_text("banana", encoding="utf-8")
            await asyncio.sleep(0.05)
            unsubscribe()

        asyncio.run(scenario())
        assert reasons == [TriggerReason.DOCUMENT_CHANGED]
        assert host._poll_task is None

    def test_file_disappearing_is_a_change(self, tmp_path):
        path = tmp_path / "poem.txt"
        path.write_text("cat", encoding="utf-8")
        host = FileHost(path, poll_interval_s=0.01)
        reasons = []

        async def scenario():
            host.watch(reasons.append)
            path.unlink()
            await asyncio.sleep(0.05)
            host.stop()

        asyncio.run(scenario())
        assert reasons == [TriggerReason.DOCUMENT_CHANGED]
