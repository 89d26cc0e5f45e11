"""Terminal devices and raw-mode control.

Provides the ``LineInput`` / ``LineOutput`` protocols the editor talks to,
file-descriptor implementations of both, and the raw-mode scope that
switches a tty out of canonical mode and always restores it.
"""

from __future__ import annotations

import logging
import os
import select
import termios
from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Protocol, TypeVar

from pi.linenoise.errors import DeviceError, NotATTYError, UnencodableText

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNSUPPORTED_TERMINALS: frozenset[str] = frozenset({"", "dumb", "cons25", "emacs"})

# Indices into the list returned by termios.tcgetattr
_IFLAG, _OFLAG, _CFLAG, _LFLAG, _ISPEED, _OSPEED, _CC = range(7)


# ---------------------------------------------------------------------------
# Device protocols
# ---------------------------------------------------------------------------


class LineInput(Protocol):
    """Byte source the editor reads keystrokes from."""

    @property
    def is_tty(self) -> bool: ...

    def read_byte(self) -> int | None:
        """Block for one byte; ``None`` at end of input."""
        ...

    def poll(self, timeout: float | None) -> bool:
        """Wait up to *timeout* seconds for a byte to become readable."""
        ...

    def raw_mode(self) -> ContextManager[None]: ...

    def is_supported(self, terminal: str) -> bool: ...


class LineOutput(Protocol):
    """Text sink the editor renders to."""

    def write(self, text: str) -> None: ...

    @property
    def columns(self) -> int | None:
        """Terminal width if the device can report it, else ``None``."""
        ...


# ---------------------------------------------------------------------------
# Capability checks
# ---------------------------------------------------------------------------


def is_terminal(fd: int) -> bool:
    return os.isatty(fd)


def is_supported_terminal(terminal: str) -> bool:
    """False for terminal types that cannot handle the editing escape codes."""
    return terminal not in UNSUPPORTED_TERMINALS


def terminal_columns(fd: int) -> int | None:
    """Width reported by ``TIOCGWINSZ``, or ``None`` if unavailable."""
    try:
        columns = os.get_terminal_size(fd).columns
    except (ValueError, OSError):
        return None
    return columns or None


# ---------------------------------------------------------------------------
# Raw mode
# ---------------------------------------------------------------------------


def make_raw_attributes(attrs: list) -> list:
    """Return a copy of *attrs* with raw-mode flags applied.

    Input: no break signal, CR->NL mapping, parity check, stripping or
    flow control. Output: no post-processing. 8-bit characters. Local: no
    echo, canonical mode, extended functions or signal characters. Reads
    return after one byte with no timer.
    """
    raw = list(attrs)
    raw[_IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    raw[_OFLAG] &= ~termios.OPOST
    raw[_CFLAG] |= termios.CS8
    raw[_LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    cc = list(attrs[_CC])
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 0
    raw[_CC] = cc
    return raw


@contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    """Put *fd* into raw mode for the duration of the ``with`` block.

    The original attributes are restored exactly once on every exit path,
    including exceptions raised by the block.
    """
    if not is_terminal(fd):
        raise NotATTYError(f"file descriptor {fd} is not a terminal")

    try:
        original = termios.tcgetattr(fd)
        termios.tcsetattr(fd, termios.TCSADRAIN, make_raw_attributes(original))
    except termios.error as exc:
        raise DeviceError(f"cannot enter raw mode on fd {fd}") from exc
    logger.debug("raw mode enabled on fd %d", fd)

    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, original)
        logger.debug("raw mode restored on fd %d", fd)


def with_raw_mode(fd: int, body: Callable[[], T]) -> T:
    """Run *body* with *fd* in raw mode and return its result."""
    with raw_mode(fd):
        return body()


# ---------------------------------------------------------------------------
# File descriptor devices
# ---------------------------------------------------------------------------


class FileDescriptorInput:
    """Unbuffered byte reader over a POSIX file descriptor."""

    def __init__(self, fd: int) -> None:
        self.fd = fd

    @property
    def is_tty(self) -> bool:
        return is_terminal(self.fd)

    def read_byte(self) -> int | None:
        try:
            data = os.read(self.fd, 1)
        except OSError as exc:
            raise DeviceError(f"read from fd {self.fd} failed") from exc
        return data[0] if data else None

    def poll(self, timeout: float | None) -> bool:
        try:
            readable, _, _ = select.select([self.fd], [], [], timeout)
        except (OSError, ValueError) as exc:
            raise DeviceError(f"select on fd {self.fd} failed") from exc
        return bool(readable)

    def raw_mode(self) -> ContextManager[None]:
        return raw_mode(self.fd)

    def is_supported(self, terminal: str) -> bool:
        return is_supported_terminal(terminal)


class FileDescriptorOutput:
    """Encodes text and writes all of it to a POSIX file descriptor.

    When *write_log_path* is set every chunk written is also appended to
    that file, which is handy for debugging rendering.
    """

    def __init__(self, fd: int, encoding: str = "utf-8", write_log_path: str | None = None) -> None:
        self.fd = fd
        self.encoding = encoding
        self._write_log_path = write_log_path or ""

    @property
    def columns(self) -> int | None:
        return terminal_columns(self.fd)

    def write(self, text: str) -> None:
        try:
            data = text.encode(self.encoding)
        except UnicodeEncodeError:
            raise UnencodableText(text, self.encoding) from None

        view = memoryview(data)
        try:
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
        except OSError as exc:
            raise DeviceError(f"write to fd {self.fd} failed") from exc

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8", newline="") as f:
                    f.write(text)
            except OSError:
                pass
