"""Line history with up/down navigation and plain-text persistence.

Entries are stored oldest first. The navigation index runs from 0 (oldest)
to ``len(entries)``, the live position of the line still being typed. While
the user browses older entries the live line is kept in a temp slot so it
can be brought back.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Literal

logger = logging.getLogger(__name__)

HistoryDirection = Literal["previous", "next"]


class History:
    """Process-lifetime log of submitted lines.

    Parameters
    ----------
    max_length:
        Oldest entries are evicted once this many are stored. ``None``
        keeps everything.
    """

    def __init__(self, max_length: int | None = None) -> None:
        self._entries: list[str] = []
        self._index: int = 0
        self._temp: str | None = None
        self._max_length: int | None = None
        self.max_length = max_length

    # -- properties ---------------------------------------------------------

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def at_live_position(self) -> bool:
        return self._index == len(self._entries)

    @property
    def temp(self) -> str | None:
        return self._temp

    @property
    def max_length(self) -> int | None:
        return self._max_length

    @max_length.setter
    def max_length(self, value: int | None) -> None:
        if value is not None and value < 1:
            raise ValueError(f"history length must be at least 1, got {value}")
        self._max_length = value
        if value is not None and len(self._entries) > value:
            del self._entries[: len(self._entries) - value]
        self._index = min(self._index, len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    # -- mutation -----------------------------------------------------------

    def add(self, line: str) -> bool:
        """Append *line*, evicting the oldest entry when full.

        Line breaks are removed so the entry survives a save and load. A
        line equal to the newest entry is not stored again. Either way
        navigation returns to the live position.
        """
        line = line.replace("\r", "").replace("\n", "")
        if self._entries and self._entries[-1] == line:
            self._index = len(self._entries)
            return False

        self._entries.append(line)
        if self._max_length is not None and len(self._entries) > self._max_length:
            del self._entries[0]
        self._index = len(self._entries)
        return True

    def replace_current(self, line: str) -> bool:
        """Overwrite the entry being browsed; ``False`` at the live position."""
        if self.at_live_position:
            return False
        self._entries[self._index] = line
        return True

    def clear(self) -> None:
        self._entries.clear()
        self.reset_navigation()

    def reset_navigation(self) -> None:
        """Return to the live position and forget the temp slot."""
        self._index = len(self._entries)
        self._temp = None

    # -- navigation ---------------------------------------------------------

    def navigate(
        self,
        direction: HistoryDirection,
        current: str,
        *,
        preserve_edits: bool = False,
    ) -> str | None:
        """Step through history and return the text to show.

        *current* is the line on screen. Leaving the live position stores it
        in the temp slot; leaving a browsed entry overwrites that entry when
        *preserve_edits* is set. Stepping forward past the newest entry
        returns the temp slot. Returns ``None`` when there is nothing to move
        to (empty history, or already at the oldest entry).
        """
        if not self._entries:
            return None

        if self.at_live_position:
            self._temp = current
        elif preserve_edits:
            self._entries[self._index] = current

        if direction == "previous":
            if self._index == 0:
                return None
            self._index -= 1
            return self._entries[self._index]

        if self._index + 1 >= len(self._entries):
            self._index = len(self._entries)
            return self._temp if self._temp is not None else ""

        self._index += 1
        return self._entries[self._index]

    # -- persistence --------------------------------------------------------

    def load(self, path: str | os.PathLike[str]) -> int:
        """Append every non-empty line of *path*; returns how many were added.

        Only ``\\n`` separates entries, matching what :meth:`save` writes.
        """
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
        added = 0
        for line in text.split("\n"):
            if line and self.add(line):
                added += 1
        logger.debug("loaded %d history entries from %s", added, path)
        return added

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write entries oldest first, one per line, replacing *path* atomically."""
        target = Path(path)
        content = "".join(f"{entry}\n" for entry in self._entries)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("saved %d history entries to %s", len(self._entries), path)
