"""Prompt width measurement.

Prompts may carry colour escapes and wide characters, so the column the
buffer starts at is measured rather than counted. The buffer itself is
measured one column per character.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences, OSC 8 hyperlinks and APC payloads contribute no width
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"                # CSI
    r"|\x1b\]8;;[^\x07]*\x07"                # OSC 8
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"     # APC
)

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Terminal display width of a single grapheme cluster."""
    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        # VS16, ZWJ, skin tone modifiers and regional indicators mark emoji
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    if unicodedata.category(g[0]).startswith("M"):
        return 0
    return max(_wcwidth.wcswidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Visible terminal width of *text* with escape sequences removed."""
    if not text:
        return 0

    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[stripped] = total
    return total
