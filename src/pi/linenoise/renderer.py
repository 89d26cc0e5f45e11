"""Redraw the edited line and keep the terminal cursor in step with it."""

from __future__ import annotations

import logging

from pi.linenoise import ansi
from pi.linenoise.decoder import decode_character
from pi.linenoise.edit_state import EditState
from pi.linenoise.hints import HintEngine
from pi.linenoise.keys import BELL, ESC
from pi.linenoise.terminal import LineInput, LineOutput

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 80

# Longest cursor position report accepted, ESC [ rrrr ; cccc R with margin
_MAX_REPORT_LENGTH = 32


class Renderer:
    """Writes the prompt, buffer and hint to the output device.

    Each refresh is a single write: return to column 0, draw everything,
    erase what is left of the old line, then move the cursor to
    ``prompt width + cursor offset``.
    """

    def __init__(
        self,
        output: LineOutput,
        input_device: LineInput,
        encoding: str = "utf-8",
        *,
        hints: HintEngine | None = None,
        cursor_query_timeout: float | None = 0.5,
    ) -> None:
        self.output = output
        self.input = input_device
        self.encoding = encoding
        self.hints = hints or HintEngine()
        self.cursor_query_timeout = cursor_query_timeout

    # -- primitive output ---------------------------------------------------

    def write(self, text: str) -> None:
        self.output.write(text)

    def bell(self) -> None:
        self.output.write(BELL)

    def clear_screen(self) -> None:
        self.output.write(ansi.HOME_CURSOR + ansi.CLEAR_SCREEN)

    # -- line drawing -------------------------------------------------------

    def refresh(self, state: EditState, *, show_hints: bool = True) -> None:
        parts = ["\r", state.prompt, state.buffer]
        if show_hints:
            parts.append(self.hints.render(state, self.columns))
        parts.append(ansi.ERASE_RIGHT)
        parts.append("\r")
        parts.append(ansi.cursor_forward(state.display_column))
        self.output.write("".join(parts))

    def update_cursor_position(self, state: EditState) -> None:
        self.output.write("\r" + ansi.cursor_forward(state.display_column))

    # -- terminal size ------------------------------------------------------

    def columns(self) -> int:
        """Terminal width from the device, a cursor probe, or the default."""
        columns = self.output.columns
        if columns:
            return columns

        logger.debug("device did not report its width, probing cursor position")
        start = self.query_cursor_column()
        if start is None:
            return DEFAULT_COLUMNS

        self.output.write(ansi.cursor_forward(999))
        columns = self.query_cursor_column()
        # Back to where we started
        self.output.write("\r" + ansi.cursor_forward(start - 1))
        if columns is None:
            return DEFAULT_COLUMNS
        return columns

    def query_cursor_column(self) -> int | None:
        """Ask the terminal where the cursor is and return its 1-based column.

        The reply ``ESC [ row ; col R`` is read character by character; each
        read waits at most ``cursor_query_timeout`` seconds. Nothing is asked
        while typed-ahead input is pending, since the reply would be mixed
        into it.
        """
        if self.input.poll(0):
            logger.debug("input pending, skipping cursor position query")
            return None
        self.output.write(ansi.CURSOR_POSITION_QUERY)

        reply: list[str] = []
        while len(reply) < _MAX_REPORT_LENGTH:
            if self.cursor_query_timeout is not None and not self.input.poll(self.cursor_query_timeout):
                logger.warning("no cursor position report within %ss", self.cursor_query_timeout)
                return None
            char = decode_character(self.input.read_byte, self.encoding)
            if char is None:
                return None
            if not reply and char != ESC:
                logger.warning("unexpected %r instead of a cursor position report", char)
                return None
            reply.append(char)
            if char == "R":
                break
        else:
            logger.warning("cursor position report too long: %r", "".join(reply))
            return None

        return parse_cursor_report("".join(reply))


def parse_cursor_report(reply: str) -> int | None:
    """Column from a ``ESC [ row ; col R`` report, or ``None`` if malformed."""
    if not reply.startswith(ESC + "[") or not reply.endswith("R"):
        return None
    row_col = reply[2:-1].split(";")
    if len(row_col) != 2:
        return None
    try:
        return int(row_col[1])
    except ValueError:
        return None
