"""Turn a raw byte stream into characters, one Unicode scalar at a time.

UTF-8 input is assembled from its lead byte and the continuation bytes the
lead byte announces, so a character is never split across reads. Single-byte
encodings (latin-1, cp437, ...) map one byte to one character.
"""

from __future__ import annotations

import codecs
from typing import Callable, Optional

from pi.linenoise.errors import (
    InvalidContinuationByte,
    InvalidLeadByte,
    StrayContinuationByte,
    TruncatedCharacter,
    UndecodableSequence,
    UnsupportedEncoding,
)

ByteReader = Callable[[], Optional[int]]

_UTF8 = "utf-8"


def normalize_encoding(encoding: str) -> str:
    """Return the canonical codec name, raising if it cannot be decoded bytewise."""
    try:
        name = codecs.lookup(encoding).name
    except LookupError:
        raise UnsupportedEncoding(encoding) from None
    if name == _UTF8 or is_single_byte_encoding(name):
        return name
    raise UnsupportedEncoding(encoding)


def is_single_byte_encoding(encoding: str) -> bool:
    """True if every byte value decodes to exactly one character."""
    try:
        decoded = bytes(range(256)).decode(encoding, errors="replace")
    except (LookupError, TypeError):
        return False
    return len(decoded) == 256


def leading_ones(byte: int) -> int:
    """Number of consecutive one bits at the top of *byte*."""
    count = 0
    mask = 0x80
    while mask and byte & mask:
        count += 1
        mask >>= 1
    return count


def utf8_sequence_length(lead: int) -> int:
    """Total byte count of the UTF-8 sequence introduced by *lead* (1-4)."""
    ones = leading_ones(lead)
    if ones == 0:
        return 1
    if ones == 1:
        raise StrayContinuationByte(lead)
    if ones <= 4:
        return ones
    raise InvalidLeadByte(lead)


def decode_character(read_byte: ByteReader, encoding: str = _UTF8) -> str | None:
    """Read and decode one character, or return ``None`` at end of input.

    End of input part-way through a UTF-8 sequence raises
    :class:`TruncatedCharacter` rather than returning ``None``.
    """
    first = read_byte()
    if first is None:
        return None

    run = bytearray((first,))
    if codecs.lookup(encoding).name == _UTF8:
        for _ in range(utf8_sequence_length(first) - 1):
            byte = read_byte()
            if byte is None:
                raise TruncatedCharacter(bytes(run))
            if leading_ones(byte) != 1:
                raise InvalidContinuationByte(byte)
            run.append(byte)

    data = bytes(run)
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError:
        raise UndecodableSequence(data, encoding) from None
    if len(text) != 1:
        raise UndecodableSequence(data, encoding)
    return text


class ByteDecoder:
    """Binds a byte source to an encoding and yields characters."""

    def __init__(self, read_byte: ByteReader, encoding: str = _UTF8) -> None:
        self._read_byte = read_byte
        self.encoding = normalize_encoding(encoding)

    def read_character(self) -> str | None:
        return decode_character(self._read_byte, self.encoding)
