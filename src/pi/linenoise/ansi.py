"""ANSI escape sequences emitted by the line editor."""

from __future__ import annotations

ERASE_RIGHT = "\x1b[0K"
HOME_CURSOR = "\x1b[H"
CLEAR_SCREEN = "\x1b[2J"
CURSOR_POSITION_QUERY = "\x1b[6n"
RESET_COLOR = "\x1b[0m"

_CURSOR_FORWARD_FMT = "\x1b[{}C"
_COLOR_16_FMT = "\x1b[{};{};49m"
_COLOR_256_FMT = "\x1b[38;5;{}m"


def cursor_forward(columns: int) -> str:
    """Move right by *columns*; empty for zero since ``ESC[0C`` moves one column."""
    if columns <= 0:
        return ""
    return _CURSOR_FORWARD_FMT.format(columns)


def term_color(color: int, bold: bool) -> str:
    """16-colour foreground select with the default background."""
    return _COLOR_16_FMT.format(color, 1 if bold else 0)


def term_color_256(color: int) -> str:
    return _COLOR_256_FMT.format(color)
