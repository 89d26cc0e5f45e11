"""Colour support detection and nearest-palette colour matching for hints."""

from __future__ import annotations

import os
from typing import Literal, Mapping

ColorSupport = Literal["standard", "256"]

RGB = tuple[int, int, int]

# xterm defaults for the 16 system colours
_SYSTEM_COLORS: list[RGB] = [
    (0, 0, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 0),
    (0, 0, 128),
    (128, 0, 128),
    (0, 128, 128),
    (192, 192, 192),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
]

_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)

# Grey, used when the hints callback does not ask for a colour
DEFAULT_HINT_COLOR = 8


def _build_256_palette() -> list[RGB]:
    palette = list(_SYSTEM_COLORS)
    for r in _CUBE_LEVELS:
        for g in _CUBE_LEVELS:
            for b in _CUBE_LEVELS:
                palette.append((r, g, b))
    for i in range(24):
        level = 8 + 10 * i
        palette.append((level, level, level))
    return palette


PALETTE_16: list[RGB] = list(_SYSTEM_COLORS)
PALETTE_256: list[RGB] = _build_256_palette()


def detect_color_support(
    term: str | None = None,
    color_term: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ColorSupport:
    """Guess the colour depth from ``$TERM`` and ``$COLORTERM``."""
    env = os.environ if environ is None else environ
    term = (env.get("TERM", "") if term is None else term).lower()
    color_term = (env.get("COLORTERM", "") if color_term is None else color_term).lower()

    if "256" in term or color_term in ("truecolor", "24bit"):
        return "256"
    return "standard"


def closest_color(color: RGB, support: ColorSupport) -> int:
    """Index of the palette entry nearest to *color* (Euclidean distance in RGB)."""
    palette = PALETTE_256 if support == "256" else PALETTE_16
    r, g, b = color
    best_index = 0
    best_distance = -1
    for index, (pr, pg, pb) in enumerate(palette):
        distance = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if best_distance < 0 or distance < best_distance:
            best_index = index
            best_distance = distance
            if distance == 0:
                break
    return best_index
