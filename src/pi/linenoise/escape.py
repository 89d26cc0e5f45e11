"""Resolve the bytes that follow ESC into an edit command.

Only the small set of CSI (``ESC [``) and SS3 (``ESC O``) sequences a
readline-style editor needs is recognised:

====================  =====================
sequence              command
====================  =====================
``ESC [ A``           historyPrevious
``ESC [ B``           historyNext
``ESC [ C``           cursorRight
``ESC [ D``           cursorLeft
``ESC [ H`` / ``F``   cursorLineStart / End
``ESC [ 1 ~``, ``7~`` cursorLineStart
``ESC [ 3 ~``         deleteCharForward
``ESC [ 4 ~``         cursorLineEnd
``ESC O H`` / ``F``   cursorLineStart / End
====================  =====================

Everything else is consumed and ignored.
"""

from __future__ import annotations

from typing import Callable, Literal, Optional

EscapeCommand = Literal[
    "historyPrevious",
    "historyNext",
    "cursorRight",
    "cursorLeft",
    "cursorLineStart",
    "cursorLineEnd",
    "deleteCharForward",
    "endOfInput",
]

CharReader = Callable[[], Optional[str]]

CSI_COMMANDS: dict[str, EscapeCommand] = {
    "A": "historyPrevious",
    "B": "historyNext",
    "C": "cursorRight",
    "D": "cursorLeft",
    "H": "cursorLineStart",
    "F": "cursorLineEnd",
}

CSI_TILDE_COMMANDS: dict[str, EscapeCommand] = {
    "1": "cursorLineStart",
    "7": "cursorLineStart",
    "3": "deleteCharForward",
    "4": "cursorLineEnd",
}

SS3_COMMANDS: dict[str, EscapeCommand] = {
    "H": "cursorLineStart",
    "F": "cursorLineEnd",
}


def parse_escape_sequence(read_char: CharReader) -> EscapeCommand | None:
    """Read the rest of an escape sequence and return its command.

    ``"endOfInput"`` is returned if the input ends part-way through;
    ``None`` for sequences with no meaning to the editor.
    """
    first = read_char()
    if first is None:
        return "endOfInput"
    second = read_char()
    if second is None:
        return "endOfInput"

    if first == "[":
        if "0" <= second <= "9":
            third = read_char()
            if third is None:
                return "endOfInput"
            if third == "~":
                return CSI_TILDE_COMMANDS.get(second)
            return None
        return CSI_COMMANDS.get(second)

    if first == "O":
        return SS3_COMMANDS.get(second)

    return None
