"""Inline hints drawn after the cursor."""

from __future__ import annotations

from typing import Callable, Optional

from pi.linenoise import ansi
from pi.linenoise.colors import DEFAULT_HINT_COLOR, RGB, ColorSupport, closest_color
from pi.linenoise.edit_state import EditState

HintsCallback = Callable[[str], tuple[Optional[str], Optional[RGB]]]


class HintEngine:
    """Asks the hints callback for a suggestion and formats it for display."""

    def __init__(
        self,
        callback: HintsCallback | None = None,
        color_support: ColorSupport = "standard",
    ) -> None:
        self.callback = callback
        self.color_support = color_support

    @property
    def active(self) -> bool:
        return self.callback is not None

    def color_code(self, color: RGB | None) -> str:
        """Escape sequence selecting the hint colour for this terminal."""
        if color is None:
            index = DEFAULT_HINT_COLOR
        else:
            index = closest_color(color, self.color_support)

        if self.color_support == "256":
            return ansi.term_color_256(index)
        return ansi.term_color(30 + (index & 0x7), bold=index > 7)

    def render(self, state: EditState, columns: Callable[[], int]) -> str:
        """Coloured hint text for *state*, or ``""``.

        The hint is dropped when it would not fit on the line. *columns* is
        only called when there is a hint to show.
        """
        if self.callback is None:
            return ""

        result = self.callback(state.buffer)
        if not result:
            return ""
        hint, color = result
        if not hint:
            return ""

        line_width = state.prompt_width + len(state.buffer)
        if len(hint) + line_width > columns():
            return ""

        return self.color_code(color) + hint + ansi.RESET_COLOR
