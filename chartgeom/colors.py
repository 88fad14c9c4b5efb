from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Sequence

from chartgeom.errors import ChartConfigError

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

DEFAULT_PALETTE: tuple[str, ...] = (
    "#3b82f6",  # blue
    "#ef4444",  # red
    "#10b981",  # emerald
    "#f59e0b",  # amber
    "#8b5cf6",  # violet
    "#06b6d4",  # cyan
    "#f97316",  # orange
    "#84cc16",  # lime
)


def validate_palette(colors: Sequence[str] | None) -> tuple[str, ...]:
    if colors is None:
        return DEFAULT_PALETTE
    if isinstance(colors, str):
        raise ChartConfigError("palette must be a sequence of colors, not a string")
    palette = tuple(colors)
    if not palette:
        raise ChartConfigError("palette must contain at least one color")
    for color in palette:
        if not isinstance(color, str) or not _HEX_COLOR.match(color):
            raise ChartConfigError(f"palette color must be a hex color (#RGB, #RRGGBB or #RRGGBBAA): {color!r}")
    return palette


@dataclass(frozen=True)
class ColorAssigner:
    """Cycles through a palette by series index; an explicit series color wins."""

    palette: tuple[str, ...] = DEFAULT_PALETTE

    @classmethod
    def from_palette(cls, colors: Sequence[str] | None) -> "ColorAssigner":
        return cls(palette=validate_palette(colors))

    def color_for(self, index: int, explicit: str | None = None) -> str:
        if explicit:
            return explicit
        return self.palette[index % len(self.palette)]
