"""Control characters read from a raw terminal and key-id parsing.

Key ids follow the ``"ctrl+a"`` / ``"backspace"`` naming used by the
keybindings table. A key id resolves to the single character the terminal
sends for it in raw mode.
"""

from __future__ import annotations

KeyId = str

NUL = "\x00"
CTRL_A = "\x01"
CTRL_B = "\x02"
CTRL_C = "\x03"
CTRL_D = "\x04"
CTRL_E = "\x05"
CTRL_F = "\x06"
BELL = "\x07"
CTRL_H = "\x08"
TAB = "\x09"
LINE_FEED = "\x0a"
CTRL_K = "\x0b"
CTRL_L = "\x0c"
ENTER = "\x0d"
CTRL_N = "\x0e"
CTRL_P = "\x10"
CTRL_T = "\x14"
CTRL_U = "\x15"
CTRL_W = "\x17"
ESC = "\x1b"
BACKSPACE = "\x7f"

# Named keys -> the character a raw terminal delivers
NAMED_KEYS: dict[str, str] = {
    "escape": ESC,
    "esc": ESC,
    "enter": ENTER,
    "return": ENTER,
    "linefeed": LINE_FEED,
    "tab": TAB,
    "space": " ",
    "backspace": BACKSPACE,
}


def key_to_char(key: KeyId) -> str:
    """Resolve a key id such as ``"ctrl+w"`` to the character it produces.

    Raises ``ValueError`` for ids that do not map to a single character.
    """
    lowered = key.lower()
    if lowered in NAMED_KEYS:
        return NAMED_KEYS[lowered]

    if lowered.startswith("ctrl+"):
        base = lowered[len("ctrl+"):]
        if len(base) == 1 and 0x40 <= ord(base.upper()) <= 0x5F:
            return chr(ord(base.upper()) & 0x1F)
        if base == "?":
            return BACKSPACE
        raise ValueError(f"unknown control key: {key!r}")

    if len(key) == 1:
        return key

    raise ValueError(f"unknown key id: {key!r}")


def is_control_char(char: str) -> bool:
    """C0 and C1 control characters, DEL included."""
    code = ord(char)
    return code < 0x20 or code == 0x7F or 0x80 <= code <= 0x9F
