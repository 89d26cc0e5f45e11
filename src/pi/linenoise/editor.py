"""Readline-style line editing over a raw terminal.

``LineNoise`` is the public entry point. It decides once, from the input
device and ``$TERM``, how lines are read:

* ``supported-tty``: raw mode with full editing, history, completion and hints
* ``unsupported-tty``: prompt is written and a plain line is read
* ``not-a-tty``: bytes are read up to a line feed (files and pipes)

Each raw-mode read is driven by a ``LineEditor``, which reads one
character at a time, maps it to an edit action, applies it to an
``EditState`` and redraws.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Callable, Literal, Optional

from pi.linenoise.colors import detect_color_support
from pi.linenoise.completion import CompletionCallback, CompletionEngine
from pi.linenoise.config import LineNoiseOptions
from pi.linenoise.decoder import decode_character, normalize_encoding
from pi.linenoise.edit_state import EditState
from pi.linenoise.errors import EndOfInput, Interrupted
from pi.linenoise.escape import parse_escape_sequence
from pi.linenoise.hints import HintEngine, HintsCallback
from pi.linenoise.history import History, HistoryDirection
from pi.linenoise.keybindings import EditAction, KeybindingsManager
from pi.linenoise.keys import LINE_FEED, is_control_char
from pi.linenoise.renderer import Renderer
from pi.linenoise.terminal import (
    FileDescriptorInput,
    FileDescriptorOutput,
    LineInput,
    LineOutput,
)

logger = logging.getLogger(__name__)

Mode = Literal["supported-tty", "unsupported-tty", "not-a-tty"]
LineStatus = Literal["line", "end-of-input", "interrupt"]
EditorPhase = Literal["reading", "completing", "terminated"]

CharReader = Callable[[], Optional[str]]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineResult:
    """Outcome of one line-read."""

    status: LineStatus
    text: str = ""

    @classmethod
    def line(cls, text: str) -> LineResult:
        return cls("line", text)

    @classmethod
    def end_of_input(cls) -> LineResult:
        return cls("end-of-input")

    @classmethod
    def interrupt(cls) -> LineResult:
        return cls("interrupt")

    def unwrap(self) -> str:
        """Return the line or raise the matching termination error."""
        if self.status == "interrupt":
            raise Interrupted("interrupted")
        if self.status == "end-of-input":
            raise EndOfInput("end of input")
        return self.text


def detect_mode(input_device: LineInput, term: str) -> Mode:
    if not input_device.is_tty:
        return "not-a-tty"
    if input_device.is_supported(term):
        return "supported-tty"
    return "unsupported-tty"


# ---------------------------------------------------------------------------
# LineEditor
# ---------------------------------------------------------------------------


class LineEditor:
    """Dispatch loop for a single line read in raw mode.

    Phases: ``reading`` -> (``completing`` -> ``reading``)* -> ``terminated``.
    """

    def __init__(
        self,
        prompt: str,
        *,
        read_char: CharReader,
        renderer: Renderer,
        history: History,
        completion: CompletionEngine,
        keybindings: KeybindingsManager,
        preserve_history_edits: bool = False,
    ) -> None:
        self.state = EditState(prompt)
        self.phase: EditorPhase = "reading"
        self.renderer = renderer
        self.history = history
        self.completion = completion
        self.keybindings = keybindings
        self.preserve_history_edits = preserve_history_edits
        self._read_char = read_char
        self._chars_read = 0

        self._handlers: dict[str, Callable[[], Optional[LineResult]]] = {
            "cursorLeft": lambda: self._move(self.state.move_left),
            "cursorRight": lambda: self._move(self.state.move_right),
            "cursorLineStart": lambda: self._move(self.state.move_home),
            "cursorLineEnd": lambda: self._move(self.state.move_end),
            "deleteCharBackward": lambda: self._edit(self.state.backspace),
            "deleteCharForward": lambda: self._edit(self.state.delete_character),
            "deleteCharForwardOrEof": self._delete_forward_or_eof,
            "deleteWordBackward": lambda: self._edit(self.state.delete_previous_word),
            "deleteToLineEnd": self._delete_to_line_end,
            "deleteLine": self._delete_line,
            "transposeChars": lambda: self._edit(self.state.swap_character_with_previous),
            "historyPrevious": lambda: self._move_history("previous"),
            "historyNext": lambda: self._move_history("next"),
            "clearScreen": self._clear_screen,
            "escapeSequence": self._escape_sequence,
            "submit": self._submit,
            "interrupt": self._interrupt,
        }

    # -- main loop ----------------------------------------------------------

    def run(self) -> LineResult:
        self.renderer.write(self.state.prompt)
        while True:
            char = self._read()
            if char is None:
                return self._end_of_input()
            result = self.process(char)
            if result is not None:
                return result

    def process(self, char: str) -> LineResult | None:
        """Apply one character; returns a result once the line is finished."""
        action = self.keybindings.action_for(char)

        if action == "complete" and self.completion.active:
            self.phase = "completing"
            outcome = self.completion.complete(self.state, self.renderer, self._read, cycle_key=char)
            self.phase = "reading"
            if outcome.end_of_input:
                return self._end_of_input()
            if outcome.char is None:
                return None
            char = outcome.char
            action = self.keybindings.action_for(char)

        return self._dispatch(char, action)

    def _dispatch(self, char: str, action: EditAction | None) -> LineResult | None:
        handler = self._handlers.get(action) if action is not None else None
        if handler is not None:
            return handler()
        if is_control_char(char):
            return None
        self.state.insert_character(char)
        self.renderer.refresh(self.state)
        return None

    def _read(self) -> str | None:
        char = self._read_char()
        if char is not None:
            self._chars_read += 1
        return char

    # -- termination --------------------------------------------------------

    def _finish(self, result: LineResult) -> LineResult:
        self.phase = "terminated"
        return result

    def _end_of_input(self) -> LineResult:
        # Only a read that saw input may hand back a partial line
        if self._chars_read:
            return self._finish(LineResult.line(self.state.buffer))
        return self._finish(LineResult.end_of_input())

    def _submit(self) -> LineResult:
        moved = self.state.move_end()
        if self.renderer.hints.active:
            self.renderer.refresh(self.state, show_hints=False)
        elif moved:
            self.renderer.update_cursor_position(self.state)
        return self._finish(LineResult.line(self.state.buffer))

    def _interrupt(self) -> LineResult:
        return self._finish(LineResult.interrupt())

    # -- edit actions -------------------------------------------------------

    def _move(self, motion: Callable[[], bool]) -> None:
        if motion():
            self.renderer.update_cursor_position(self.state)
        else:
            self.renderer.bell()

    def _edit(self, operation: Callable[[], bool]) -> None:
        if operation():
            self.renderer.refresh(self.state)
        else:
            self.renderer.bell()

    def _delete_forward_or_eof(self) -> LineResult | None:
        if self.state.erase_character_right():
            self.renderer.refresh(self.state)
        elif not self.state.buffer:
            return self._finish(LineResult.end_of_input())
        else:
            self.renderer.bell()
        return None

    def _delete_to_line_end(self) -> None:
        if not self.state.delete_to_end_of_line():
            self.renderer.bell()
        self.renderer.refresh(self.state)

    def _delete_line(self) -> None:
        self.state.clear()
        self.renderer.refresh(self.state)

    def _clear_screen(self) -> None:
        self.renderer.clear_screen()
        self.renderer.refresh(self.state)

    def _move_history(self, direction: HistoryDirection) -> None:
        text = self.history.navigate(
            direction,
            self.state.buffer,
            preserve_edits=self.preserve_history_edits,
        )
        if text is None:
            self.renderer.bell()
            return
        self.state.set(text)
        self.state.move_end()
        self.renderer.refresh(self.state)

    def _escape_sequence(self) -> LineResult | None:
        command = parse_escape_sequence(self._read)
        if command == "endOfInput":
            return self._end_of_input()
        if command is None:
            return None
        return self._handlers[command]()


# ---------------------------------------------------------------------------
# LineNoise
# ---------------------------------------------------------------------------


class LineNoise:
    """Line editor bound to an input and an output device.

    Parameters
    ----------
    input_device, output_device:
        Default to stdin / stdout file descriptors.
    encoding:
        Overrides ``options.encoding``. UTF-8 or any single-byte codec.
    options:
        See :class:`~pi.linenoise.config.LineNoiseOptions`.
    history:
        History shared across reads. The caller owns it; a fresh one is
        created when omitted.
    keybindings:
        Custom control-key table.
    """

    def __init__(
        self,
        input_device: LineInput | None = None,
        output_device: LineOutput | None = None,
        encoding: str | None = None,
        *,
        options: LineNoiseOptions | None = None,
        history: History | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        opts = (options or LineNoiseOptions()).resolved()
        if encoding is not None:
            opts = replace(opts, encoding=encoding)
        self.options = opts
        self.encoding = normalize_encoding(opts.encoding)

        self.input: LineInput = input_device or FileDescriptorInput(sys.stdin.fileno())
        self.output: LineOutput = output_device or FileDescriptorOutput(
            sys.stdout.fileno(), self.encoding, opts.write_log_path
        )

        self.history = history if history is not None else History()
        if opts.history_max_length is not None:
            self.history.max_length = opts.history_max_length
        self.preserve_history_edits = opts.preserve_history_edits

        self.keybindings = keybindings or KeybindingsManager()
        self.completion = CompletionEngine()
        self.hints = HintEngine(color_support=detect_color_support(opts.term, opts.color_term))
        self.renderer = Renderer(
            self.output,
            self.input,
            self.encoding,
            hints=self.hints,
            cursor_query_timeout=opts.cursor_query_timeout,
        )

        self.mode: Mode = detect_mode(self.input, opts.term or "")
        logger.debug("line editor mode %s (TERM=%r, encoding=%s)", self.mode, opts.term, self.encoding)

    # -- configuration ------------------------------------------------------

    def add_history(self, line: str) -> None:
        """Add *line* to history. Nothing is added automatically."""
        self.history.add(line)

    def set_history_max_length(self, length: int | None) -> None:
        self.history.max_length = length

    def load_history(self, path: str | os.PathLike[str]) -> None:
        self.history.load(path)

    def save_history(self, path: str | os.PathLike[str]) -> None:
        self.history.save(path)

    def set_completion_callback(self, callback: CompletionCallback | None) -> None:
        self.completion.callback = callback

    def set_hints_callback(self, callback: HintsCallback | None) -> None:
        self.hints.callback = callback

    def clear_screen(self) -> None:
        self.renderer.clear_screen()

    # -- reading ------------------------------------------------------------

    def get_line(self, prompt: str = "", history: History | None = None) -> str:
        """Read one line.

        Raises :class:`EndOfInput` when the input is exhausted (or Ctrl-D on
        an empty line) and :class:`Interrupted` on Ctrl-C. The terminal is
        back in its original mode before either is raised.
        """
        return self.read_line(prompt, history).unwrap()

    def read_line(self, prompt: str = "", history: History | None = None) -> LineResult:
        """Like :meth:`get_line` but returns termination as a ``LineResult``."""
        history = history if history is not None else self.history
        history.reset_navigation()

        if self.mode == "not-a-tty":
            return self._read_plain_line()
        if self.mode == "unsupported-tty":
            self.output.write(prompt)
            return self._read_plain_line()
        return self._read_edited_line(prompt, history)

    def _read_char(self) -> str | None:
        return decode_character(self.input.read_byte, self.encoding)

    def _read_plain_line(self) -> LineResult:
        chars: list[str] = []
        while True:
            char = self._read_char()
            if char is None:
                if not chars:
                    return LineResult.end_of_input()
                return LineResult.line("".join(chars).removesuffix("\r"))
            if char == LINE_FEED:
                return LineResult.line("".join(chars).removesuffix("\r"))
            chars.append(char)

    def _read_edited_line(self, prompt: str, history: History) -> LineResult:
        editor = LineEditor(
            prompt,
            read_char=self._read_char,
            renderer=self.renderer,
            history=history,
            completion=self.completion,
            keybindings=self.keybindings,
            preserve_history_edits=self.preserve_history_edits,
        )
        with self.input.raw_mode():
            return editor.run()
