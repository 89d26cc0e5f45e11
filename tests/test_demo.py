"""Tests for pi.linenoise.demo -- the interactive demo command."""

from __future__ import annotations

from click.testing import CliRunner

from pi.linenoise.config import LineNoiseOptions
from pi.linenoise.demo import complete, hint, main, run_demo
from pi.linenoise.editor import LineNoise

from .mock_io import MockInput, MockOutput


def make_editor(data: str) -> LineNoise:
    return LineNoise(
        MockInput(data),
        MockOutput(),
        options=LineNoiseOptions(term="xterm", color_term=""),
    )


class TestDemoCallbacks:
    def test_complete_filters_by_prefix(self) -> None:
        assert complete("Hello, L") == ["Hello, Linenoise!"]
        assert complete("nothing") == []

    def test_hint_returns_missing_part(self) -> None:
        assert hint("Carpe") == (" Diem", (127, 0, 127))

    def test_no_hint(self) -> None:
        assert hint("zzz") == (None, None)


class TestRunDemo:
    """The read loop echoes lines and stops on exit, Ctrl-C or end of input."""

    def test_echoes_until_exit(self) -> None:
        editor = make_editor("Hel\t\rexit\rignored\r")
        echoed: list[str] = []
        run_demo(editor, echoed.append)
        assert echoed == [
            "Type 'exit' to quit",
            "\nOutput: Hello, world!",
            "\nOutput: exit",
        ]
        assert editor.history.entries == ["Hello, world!", "exit"]

    def test_stops_on_interrupt(self) -> None:
        echoed: list[str] = []
        run_demo(make_editor("\x03"), echoed.append)
        assert echoed[-1] == "\nCaptured Ctrl-C. Quitting."

    def test_stops_at_end_of_input(self) -> None:
        echoed: list[str] = []
        run_demo(make_editor("one\r"), echoed.append)
        assert echoed[-1] == "\nEnd of input. Quitting."

    def test_eol_marker(self) -> None:
        echoed: list[str] = []
        run_demo(make_editor("x\r"), echoed.append, eol_marker=True)
        assert echoed[1] == "<EOL>\nOutput: x"

    def test_saves_history(self, tmp_path) -> None:
        path = tmp_path / "history"
        run_demo(make_editor("a\rb\r"), lambda text: None, history_file=str(path))
        assert path.read_text(encoding="utf-8") == "a\nb\n"


class TestDemoCommand:
    def test_help(self) -> None:
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--history-file" in result.output
        assert "--preserve-edits" in result.output

    def test_rejects_zero_history_length(self) -> None:
        result = CliRunner().invoke(main, ["--max-history", "0"])
        assert result.exit_code != 0
