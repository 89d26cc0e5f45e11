"""Exceptions raised by the line editor.

End-of-input and interrupt are normally carried as ``LineResult`` values
inside the editor and only turned into :class:`EndOfInput` /
:class:`Interrupted` by :meth:`LineNoise.get_line` once the terminal has been
restored. Encoding and device errors propagate as exceptions.
"""

from __future__ import annotations


class LineNoiseError(Exception):
    """Base class for all line editor errors."""


class EndOfInput(LineNoiseError, EOFError):
    """The input stream has no more data."""


class Interrupted(LineNoiseError):
    """The user pressed the interrupt key (Ctrl-C)."""


class NotATTYError(LineNoiseError):
    """Raw mode was requested on a device that is not a terminal."""


class DeviceError(LineNoiseError):
    """Reading from or writing to the underlying device failed."""


# ---------------------------------------------------------------------------
# Encoding errors
# ---------------------------------------------------------------------------


class EncodingError(LineNoiseError, ValueError):
    """Bytes could not be turned into characters, or the reverse."""


class InvalidLeadByte(EncodingError):
    def __init__(self, byte: int) -> None:
        super().__init__(f"invalid UTF-8 lead byte 0x{byte:02x}")
        self.byte = byte


class InvalidContinuationByte(EncodingError):
    def __init__(self, byte: int) -> None:
        super().__init__(f"invalid UTF-8 continuation byte 0x{byte:02x}")
        self.byte = byte


class StrayContinuationByte(InvalidLeadByte, InvalidContinuationByte):
    """A continuation byte (``10xxxxxx``) arrived where a lead byte was expected."""

    def __init__(self, byte: int) -> None:
        EncodingError.__init__(
            self, f"UTF-8 continuation byte 0x{byte:02x} without a lead byte"
        )
        self.byte = byte


class TruncatedCharacter(EncodingError):
    """The stream ended in the middle of a multi-byte character."""

    def __init__(self, data: bytes) -> None:
        super().__init__(f"input ended inside a character after {data!r}")
        self.data = data


class UndecodableSequence(EncodingError):
    def __init__(self, data: bytes, encoding: str) -> None:
        super().__init__(f"{data!r} is not a valid character in {encoding}")
        self.data = data
        self.encoding = encoding


class UnencodableText(EncodingError):
    def __init__(self, text: str, encoding: str) -> None:
        super().__init__(f"{text!r} cannot be encoded as {encoding}")
        self.text = text
        self.encoding = encoding


class UnsupportedEncoding(EncodingError):
    """Only UTF-8 and single-byte encodings can be decoded a character at a time."""

    def __init__(self, encoding: str) -> None:
        super().__init__(f"unsupported terminal encoding: {encoding}")
        self.encoding = encoding
