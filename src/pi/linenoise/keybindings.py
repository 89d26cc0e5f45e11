"""Line editor keybindings manager."""

from __future__ import annotations

from typing import Literal, get_args

from pi.linenoise.keys import KeyId, key_to_char

EditAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    "deleteCharForwardOrEof",
    "deleteWordBackward",
    "deleteToLineEnd",
    "deleteLine",
    "transposeChars",
    # History
    "historyPrevious",
    "historyNext",
    # Screen
    "clearScreen",
    # Line control
    "complete",
    "escapeSequence",
    "submit",
    "interrupt",
]

_ALL_ACTIONS: frozenset[str] = frozenset(get_args(EditAction))

EditKeybindingsConfig = dict[EditAction, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[EditAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorLeft": "ctrl+b",
    "cursorRight": "ctrl+f",
    "cursorLineStart": "ctrl+a",
    "cursorLineEnd": "ctrl+e",
    # Deletion
    "deleteCharBackward": ["backspace", "ctrl+h"],
    "deleteCharForwardOrEof": "ctrl+d",
    "deleteWordBackward": "ctrl+w",
    "deleteToLineEnd": "ctrl+k",
    "deleteLine": "ctrl+u",
    "transposeChars": "ctrl+t",
    # History
    "historyPrevious": "ctrl+p",
    "historyNext": "ctrl+n",
    # Screen
    "clearScreen": "ctrl+l",
    # Line control
    "complete": "tab",
    "escapeSequence": "escape",
    "submit": ["enter", "linefeed"],
    "interrupt": "ctrl+c",
}


class KeybindingsManager:
    """Maps characters read from the terminal to edit actions."""

    def __init__(self, config: EditKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[EditAction, list[KeyId]] = {}
        self._char_to_action: dict[str, EditAction] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: EditKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._char_to_action.clear()

        # Start with defaults
        for action, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            if action not in _ALL_ACTIONS:
                raise ValueError(f"unknown edit action: {action!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, keys in self._action_to_keys.items():
            for key in keys:
                self._char_to_action[key_to_char(key)] = action

    def action_for(self, char: str) -> EditAction | None:
        """Return the action bound to *char*, if any."""
        return self._char_to_action.get(char)
