"""Line buffer and cursor for a single line-read."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from pi.linenoise.utils import visible_width

_NEWLINES = ("\r", "\n")


def _is_space(char: str) -> bool:
    return char.isspace()


@dataclass(frozen=True)
class EditSnapshot:
    buffer: str
    location: int


class EditState:
    """Owns the line being edited and the cursor position within it.

    The cursor (``location``) is a character offset with
    ``0 <= location <= len(buffer)``. Each character occupies one display
    column. Editing operations that cannot do anything return ``False`` so
    the caller can ring the bell.
    """

    def __init__(self, prompt: str) -> None:
        self.prompt = prompt
        self.prompt_width = visible_width(prompt)
        self._buffer: str = ""
        self._location: int = 0
        self._snapshot: EditSnapshot | None = None

    # -- accessors ----------------------------------------------------------

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def location(self) -> int:
        return self._location

    @location.setter
    def location(self, value: int) -> None:
        if not 0 <= value <= len(self._buffer):
            raise ValueError(f"cursor {value} outside buffer of length {len(self._buffer)}")
        self._location = value

    @property
    def cursor_position(self) -> int:
        """Cursor offset from the start of the buffer, in columns."""
        return self._location

    @property
    def display_column(self) -> int:
        """Cursor column counted from the start of the prompt."""
        return self.prompt_width + self._location

    @property
    def at_end(self) -> bool:
        return self._location == len(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    # -- whole-buffer operations -------------------------------------------

    def set(self, buffer: str) -> None:
        """Replace the buffer, keeping the cursor if it still fits."""
        for newline in ("\r\n", *_NEWLINES):
            buffer = buffer.replace(newline, "")
        self._buffer = buffer
        self._location = min(self._location, len(buffer))

    def clear(self) -> bool:
        had_text = bool(self._buffer)
        self._buffer = ""
        self._location = 0
        return had_text

    def save_snapshot(self) -> None:
        self._snapshot = EditSnapshot(self._buffer, self._location)

    def restore_snapshot(self) -> bool:
        """Roll back to the last saved snapshot; ``False`` if there is none."""
        snapshot = self._snapshot
        if snapshot is None:
            return False
        self._buffer = snapshot.buffer
        self._location = snapshot.location
        self._snapshot = None
        return True

    @contextmanager
    def temporary_state(self) -> Iterator[EditSnapshot]:
        """Allow arbitrary edits inside the block, then undo them."""
        snapshot = EditSnapshot(self._buffer, self._location)
        self._snapshot = snapshot
        try:
            yield snapshot
        finally:
            self.restore_snapshot()

    # -- insertion ----------------------------------------------------------

    def insert_character(self, char: str) -> None:
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        if char in _NEWLINES:
            raise ValueError("line breaks cannot be inserted into the line buffer")
        self._buffer = self._buffer[: self._location] + char + self._buffer[self._location :]
        self._location += 1

    # -- cursor motion ------------------------------------------------------

    def move_left(self) -> bool:
        if self._location == 0:
            return False
        self._location -= 1
        return True

    def move_right(self) -> bool:
        if self._location >= len(self._buffer):
            return False
        self._location += 1
        return True

    def move_home(self) -> bool:
        if self._location == 0:
            return False
        self._location = 0
        return True

    def move_end(self) -> bool:
        if self._location == len(self._buffer):
            return False
        self._location = len(self._buffer)
        return True

    # -- deletion -----------------------------------------------------------

    def backspace(self) -> bool:
        """Remove the character left of the cursor."""
        if self._location == 0:
            return False
        self._buffer = self._buffer[: self._location - 1] + self._buffer[self._location :]
        self._location -= 1
        return True

    def delete_character(self) -> bool:
        """Remove the character under the cursor."""
        if self._location >= len(self._buffer):
            return False
        self._buffer = self._buffer[: self._location] + self._buffer[self._location + 1 :]
        return True

    def erase_character_right(self) -> bool:
        """Ctrl-D flavour of :meth:`delete_character`.

        ``False`` tells the caller there was nothing to erase, which on an
        empty line means end of input.
        """
        return self.delete_character()

    def delete_to_end_of_line(self) -> bool:
        if self._location >= len(self._buffer):
            return False
        self._buffer = self._buffer[: self._location]
        return True

    def delete_previous_word(self) -> bool:
        """Delete the whitespace before the cursor and the word before that."""
        if self._location == 0:
            return False

        start = self._location
        while start > 0 and _is_space(self._buffer[start - 1]):
            start -= 1
        while start > 0 and not _is_space(self._buffer[start - 1]):
            start -= 1

        self._buffer = self._buffer[:start] + self._buffer[self._location :]
        self._location = start
        return True

    def swap_character_with_previous(self) -> bool:
        """Transpose two characters, moving the cursor past them.

        At the end of the line the last two characters swap and the cursor
        stays put; at the start the first two swap.
        """
        length = len(self._buffer)
        if length < 2:
            return False

        if self._location == 0:
            left = 0
        elif self._location >= length:
            left = length - 2
        else:
            left = self._location - 1

        chars = list(self._buffer)
        chars[left], chars[left + 1] = chars[left + 1], chars[left]
        self._buffer = "".join(chars)
        self._location = min(left + 2, length)
        return True
