"""Tests for pi.linenoise.renderer.Renderer -- line redraws and width probing."""

from __future__ import annotations

import logging

from pi.linenoise.edit_state import EditState
from pi.linenoise.hints import HintEngine
from pi.linenoise.renderer import DEFAULT_COLUMNS, Renderer, parse_cursor_report

from .mock_io import MockInput, MockOutput, answer_cursor_queries


def make_state(buffer: str, location: int | None = None, prompt: str = "> ") -> EditState:
    state = EditState(prompt)
    state.set(buffer)
    state.location = len(buffer) if location is None else location
    return state


class TestRendererRefresh:
    """Each refresh is one write that redraws the whole line."""

    def test_refresh_sequence(self) -> None:
        output = MockOutput()
        renderer = Renderer(output, MockInput())
        renderer.refresh(make_state("abc", 1))
        assert output.writes == ["\r> abc\x1b[0K\r\x1b[3C"]

    def test_refresh_at_column_zero_emits_no_cursor_move(self) -> None:
        output = MockOutput()
        renderer = Renderer(output, MockInput())
        renderer.refresh(make_state("", prompt=""))
        assert output.writes == ["\r\x1b[0K\r"]

    def test_cursor_column_uses_prompt_display_width(self) -> None:
        output = MockOutput()
        renderer = Renderer(output, MockInput())
        renderer.refresh(make_state("a", prompt="\x1b[1m世界\x1b[0m "))
        assert output.writes[0].endswith("\r\x1b[6C")

    def test_update_cursor_position(self) -> None:
        output = MockOutput()
        renderer = Renderer(output, MockInput())
        renderer.update_cursor_position(make_state("abc", 2))
        assert output.writes == ["\r\x1b[4C"]

    def test_bell_and_clear_screen(self) -> None:
        output = MockOutput()
        renderer = Renderer(output, MockInput())
        renderer.bell()
        renderer.clear_screen()
        assert output.writes == ["\x07", "\x1b[H\x1b[2J"]

    def test_refresh_with_hint(self) -> None:
        output = MockOutput()
        hints = HintEngine(lambda buf: ("cd", None))
        renderer = Renderer(output, MockInput(), hints=hints)
        renderer.refresh(make_state("ab"))
        assert output.writes == ["\r> ab\x1b[30;1;49mcd\x1b[0m\x1b[0K\r\x1b[4C"]

    def test_refresh_without_hints(self) -> None:
        output = MockOutput()
        hints = HintEngine(lambda buf: ("cd", None))
        renderer = Renderer(output, MockInput(), hints=hints)
        renderer.refresh(make_state("ab"), show_hints=False)
        assert output.writes == ["\r> ab\x1b[0K\r\x1b[4C"]


class TestRendererColumns:
    """Terminal width from the device, a cursor probe or the default."""

    @staticmethod
    def probing_renderer(*replies: str, pending: str = "") -> tuple[Renderer, MockInput, MockOutput]:
        inp = MockInput(pending)
        output = MockOutput(columns=None, on_write=answer_cursor_queries(inp, *replies))
        return Renderer(output, inp), inp, output

    def test_device_width_preferred(self) -> None:
        output = MockOutput(columns=120)
        renderer = Renderer(output, MockInput())
        assert renderer.columns() == 120
        assert output.writes == []

    def test_probe_when_device_has_no_width(self) -> None:
        renderer, _, output = self.probing_renderer("\x1b[5;3R", "\x1b[5;132R")
        assert renderer.columns() == 132
        assert output.writes == [
            "\x1b[6n",
            "\x1b[999C",
            "\x1b[6n",
            "\r\x1b[2C",
        ]

    def test_probe_timeout_falls_back_to_default(self, caplog) -> None:
        renderer, _, _ = self.probing_renderer()
        with caplog.at_level(logging.WARNING, logger="pi.linenoise.renderer"):
            assert renderer.columns() == DEFAULT_COLUMNS
        assert "no cursor position report" in caplog.text

    def test_typed_ahead_input_is_not_read_as_a_report(self) -> None:
        renderer, inp, output = self.probing_renderer("\x1b[5;3R", pending="b\r")
        assert renderer.columns() == DEFAULT_COLUMNS
        assert output.writes == []
        assert inp.remaining == b"b\r"

    def test_reply_not_starting_with_escape_is_rejected(self) -> None:
        renderer, inp, _ = self.probing_renderer("garbageR")
        assert renderer.columns() == DEFAULT_COLUMNS
        assert inp.remaining == b"arbageR"

    def test_malformed_report_falls_back_to_default(self) -> None:
        renderer, _, _ = self.probing_renderer("\x1b[xR")
        assert renderer.columns() == DEFAULT_COLUMNS

    def test_overlong_report_is_rejected(self) -> None:
        renderer, _, _ = self.probing_renderer("\x1b[" + "1" * 40 + "R")
        assert renderer.query_cursor_column() is None

    def test_query_cursor_column(self) -> None:
        renderer, _, _ = self.probing_renderer("\x1b[12;40R")
        assert renderer.query_cursor_column() == 40


class TestParseCursorReport:
    def test_valid(self) -> None:
        assert parse_cursor_report("\x1b[24;80R") == 80

    def test_missing_prefix(self) -> None:
        assert parse_cursor_report("[24;80R") is None

    def test_missing_separator(self) -> None:
        assert parse_cursor_report("\x1b[80R") is None

    def test_non_numeric(self) -> None:
        assert parse_cursor_report("\x1b[a;bR") is None
