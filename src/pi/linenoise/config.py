"""Line editor options and their environment defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

WRITE_LOG_ENV = "PI_LINENOISE_WRITE_LOG"


@dataclass
class LineNoiseOptions:
    """Settings for a :class:`~pi.linenoise.editor.LineNoise` instance.

    ``term``, ``color_term`` and ``write_log_path`` left as ``None`` are
    filled from ``$TERM``, ``$COLORTERM`` and ``$PI_LINENOISE_WRITE_LOG``.
    """

    encoding: str = "utf-8"
    preserve_history_edits: bool = False
    history_max_length: int | None = None
    # Per-byte wait for the cursor position report; None blocks forever
    cursor_query_timeout: float | None = 0.5
    term: str | None = None
    color_term: str | None = None
    write_log_path: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> LineNoiseOptions:
        return cls(**overrides).resolved(environ)

    def resolved(self, environ: Mapping[str, str] | None = None) -> LineNoiseOptions:
        """Copy with unset environment-backed fields filled in."""
        env = os.environ if environ is None else environ
        return replace(
            self,
            term=self.term if self.term is not None else env.get("TERM", ""),
            color_term=self.color_term if self.color_term is not None else env.get("COLORTERM", ""),
            write_log_path=(
                self.write_log_path if self.write_log_path is not None else env.get(WRITE_LOG_ENV) or None
            ),
        )
