"""Tests for the command-line interface.

WHY: The CLI is the primary way people use the counter. These tests
check argument handling, exit codes, both output styles, and that watch
mode re-renders when the file changes.

HOW: main() is called with explicit argv; stdout/stderr are captured
with capsys. Watch mode is run under asyncio.wait_for with a short
timeout, which cancels it the same way Ctrl-C does.

RULES:
- No test depends on the terminal being a TTY
"""

import asyncio
import io
import json

import pytest

from syllable_counter import cli


@pytest.fixture
def poem_file(tmp_path, sample_poem):
    path = tmp_path / "poem.txt"
    path.write_text(sample_poem, encoding="utf-8")
    return path


class TestParser:
    """Argument defaults."""

    def test_defaults(self):
        args = cli.build_parser().parse_args(["poem.txt"])
        assert args.input_file == "poem.txt"
        assert args.output == "text"
        assert args.terse is False
        assert args.watch is False
        assert args.max_lines is None

    def test_settings_from_args(self):
        args = cli.build_parser().parse_args(
            ["poem.txt", "--terse", "--show-zero", "--max-lines", "100", "--all-lines", "--debounce-ms", "0"]
        )
        settings = cli._settings_from_args(args)
        assert settings.verbosity.value == "terse"
        assert settings.show_zero_syllables is True
        assert settings.max_lines_to_process == 100
        assert settings.only_visible_range is False
        assert settings.debounce_interval_ms == 0


class TestOneShot:
    """Single pass over a file or stdin."""

    def test_text_output(self, poem_file, capsys):
        assert cli.main([str(poem_file)]) == 0
        captured = capsys.readouterr()
        rows = captured.out.splitlines()
        assert len(rows) == 4
        assert rows[0].startswith("    1 | The woods are lovely")
        assert rows[0].endswith("| 9 syllables")
        assert rows[2].endswith("| 1 syllable")
        assert "4 annotated line(s), 21 syllable(s)" in captured.err

    def test_terse_show_zero(self, poem_file, capsys):
        assert cli.main([str(poem_file), "--terse", "--show-zero"]) == 0
        rows = capsys.readouterr().out.splitlines()
        assert [row.rsplit("| ", 1)[1] for row in rows] == ["9", "8", "0", "1", "3"]

    def test_json_output(self, poem_file, capsys):
        assert cli.main([str(poem_file), "--output", "json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert [a["line_index"] for a in payload["annotations"]] == [0, 1, 3, 4]

    def test_viewport(self, tmp_path, capsys):
        path = tmp_path / "long.txt"
        path.write_text("\n".join(["cat"] * 100), encoding="utf-8")
        assert cli.main([str(path), "--output", "json", "--viewport-top", "50", "--viewport-height", "10"]) == 0
        indices = [a["line_index"] for a in json.loads(capsys.readouterr().out)["annotations"]]
        assert (indices[0], indices[-1]) == (34, 75)

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("banana"))
        assert cli.main(["-", "--output", "json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["annotations"][0]["display_text"] == "3 syllables"


class TestErrors:
    """Exit codes for user errors."""

    def test_missing_file(self, tmp_path, capsys):
        assert cli.main([str(tmp_path / "nope.txt")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_max_lines(self, poem_file, capsys):
        assert cli.main([str(poem_file), "--max-lines", "0"]) == 1
        assert "invalid option" in capsys.readouterr().err

    def test_watch_stdin_rejected(self, capsys):
        assert cli.main(["-", "--watch"]) == 1
        assert "--watch needs a file path" in capsys.readouterr().err


class TestWatch:
    """--watch keeps re-rendering until cancelled."""

    def test_renders_initial_and_changed_content(self, tmp_path, capsys):
        path = tmp_path / "poem.txt"
        path.write_text("banana", encoding="utf-8")
        args = cli.build_parser().parse_args(
            [str(path), "--watch", "--debounce-ms", "0", "--poll-interval", "0.01", "--output", "json"]
        )
        settings = cli._settings_from_args(args)

        async def scenario():
            watcher = asyncio.ensure_future(cli._run_watch(args, settings, path))
            await asyncio.sleep(0.1)
            path.write_text("cat", encoding="utf-8")
            await asyncio.sleep(0.2)
            watcher.cancel()
            with pytest.raises(asyncio.CancelledError):
                await watcher

        asyncio.run(scenario())
        batches = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        texts = [b["annotations"][0]["display_text"] for b in batches if b["annotations"]]
        assert texts[0] == "3 syllables"
        assert texts[-1] == "1 syllable"
