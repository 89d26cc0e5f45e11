"""In-memory devices for testing -- implement ``LineInput`` / ``LineOutput``.

``MockInput`` replays a byte string and counts raw-mode entries and
exits. ``MockOutput`` records everything written for assertions.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator


class MockInput:
    """Byte source backed by a buffer.

    Parameters
    ----------
    data:
        Bytes to deliver; ``str`` is encoded with *encoding* first.
    is_tty:
        Whether the device claims to be a terminal.
    supported:
        Result of ``is_supported`` regardless of ``$TERM``.
    """

    def __init__(
        self,
        data: bytes | str = b"",
        *,
        encoding: str = "utf-8",
        is_tty: bool = True,
        supported: bool = True,
    ) -> None:
        if isinstance(data, str):
            data = data.encode(encoding)
        self._data = bytearray(data)
        self._is_tty = is_tty
        self.supported = supported
        self.raw_enter_count = 0
        self.raw_exit_count = 0
        self.in_raw_mode = False

    # -- LineInput protocol -------------------------------------------------

    @property
    def is_tty(self) -> bool:
        return self._is_tty

    def read_byte(self) -> int | None:
        if not self._data:
            return None
        return self._data.pop(0)

    def poll(self, timeout: float | None) -> bool:
        return bool(self._data)

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        self.raw_enter_count += 1
        self.in_raw_mode = True
        try:
            yield
        finally:
            self.in_raw_mode = False
            self.raw_exit_count += 1

    def is_supported(self, terminal: str) -> bool:
        return self.supported

    # -- Test helpers -------------------------------------------------------

    def feed(self, data: bytes | str, encoding: str = "utf-8") -> None:
        if isinstance(data, str):
            data = data.encode(encoding)
        self._data.extend(data)

    @property
    def remaining(self) -> bytes:
        return bytes(self._data)


class MockOutput:
    """Text sink that records every write.

    *on_write*, if given, sees each write after it is recorded; tests use it
    to answer queries the way a terminal would.
    """

    def __init__(
        self,
        columns: int | None = 80,
        on_write: Callable[[str], None] | None = None,
    ) -> None:
        self._columns = columns
        self.on_write = on_write
        self.writes: list[str] = []

    @property
    def columns(self) -> int | None:
        return self._columns

    @columns.setter
    def columns(self, value: int | None) -> None:
        self._columns = value

    def write(self, text: str) -> None:
        self.writes.append(text)
        if self.on_write is not None:
            self.on_write(text)

    # -- Test helpers -------------------------------------------------------

    @property
    def text(self) -> str:
        return "".join(self.writes)

    def clear(self) -> None:
        self.writes.clear()


def answer_cursor_queries(inp: MockInput, *replies: str) -> Callable[[str], None]:
    """``on_write`` hook feeding *replies* in turn after each ``ESC [ 6 n``."""
    pending = list(replies)

    def on_write(text: str) -> None:
        if text == "\x1b[6n" and pending:
            inp.feed(pending.pop(0))

    return on_write
