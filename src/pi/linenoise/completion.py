"""Tab completion cycling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from pi.linenoise.edit_state import EditState
from pi.linenoise.keys import ESC, TAB
from pi.linenoise.renderer import Renderer

CompletionCallback = Callable[[str], list[str]]
CharReader = Callable[[], Optional[str]]


@dataclass(frozen=True)
class CompletionResult:
    """How a completion cycle ended.

    ``char`` is a key the cycle read but did not consume; the caller
    dispatches it as ordinary input. ``end_of_input`` is set when the stream
    ran dry mid-cycle.
    """

    char: str | None = None
    end_of_input: bool = False


@dataclass
class CompletionCycle:
    """Position in the candidate list plus one extra "no selection" slot."""

    candidates: list[str]
    index: int = 0

    @property
    def on_candidate(self) -> bool:
        return self.index < len(self.candidates)

    @property
    def current(self) -> str | None:
        return self.candidates[self.index] if self.on_candidate else None

    def advance(self) -> None:
        self.index = (self.index + 1) % (len(self.candidates) + 1)


class CompletionEngine:
    """Runs the repeated-Tab interaction against a completion callback.

    While cycling, each candidate is shown by temporarily replacing the
    buffer; nothing is committed until a key other than Tab or Escape
    arrives. Tab past the last candidate rings the bell and shows the
    original line. Escape shows the original line and hands ESC back to
    the caller unconsumed.
    """

    def __init__(self, callback: CompletionCallback | None = None) -> None:
        self.callback = callback

    @property
    def active(self) -> bool:
        return self.callback is not None

    def complete(
        self,
        state: EditState,
        renderer: Renderer,
        read_char: CharReader,
        cycle_key: str = TAB,
    ) -> CompletionResult:
        """Cycle candidates for the current buffer until a non-cycling key.

        *cycle_key* is the key bound to completion; pressing it again moves
        to the next candidate.
        """
        if self.callback is None:
            return CompletionResult()

        candidates = list(self.callback(state.buffer))
        if not candidates:
            renderer.bell()
            return CompletionResult()

        cycle = CompletionCycle(candidates)
        while True:
            candidate = cycle.current
            if candidate is not None:
                with state.temporary_state():
                    state.set(candidate)
                    state.move_end()
                    renderer.refresh(state)
            else:
                renderer.refresh(state)

            char = read_char()
            if char is None:
                return CompletionResult(end_of_input=True)

            if char == cycle_key:
                cycle.advance()
                if not cycle.on_candidate:
                    renderer.bell()
                continue

            if char == ESC:
                if cycle.on_candidate:
                    renderer.refresh(state)
                return CompletionResult(char=char)

            if candidate is not None:
                state.set(candidate)
                state.move_end()
            return CompletionResult(char=char)
