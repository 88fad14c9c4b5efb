from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
import tomllib
from typing import Any, Mapping

from chartgeom.bars import DEFAULT_BAR_SPACING, DEFAULT_GROUP_SPACING
from chartgeom.colors import validate_palette
from chartgeom.errors import ChartConfigError
from chartgeom.grid import DEFAULT_HORIZONTAL_LINES, DEFAULT_MAX_VERTICAL_TICKS
from chartgeom.scales import DEFAULT_Y_PADDING_RATIO


@dataclass(frozen=True)
class Padding:
    top: float = 20.0
    right: float = 20.0
    bottom: float = 60.0
    left: float = 60.0


@dataclass(frozen=True)
class ChartOptions:
    """Rendering parameters shared by line and bar charts."""

    width: float = 600.0
    height: float = 400.0
    padding: Padding = Padding()
    smooth: bool = False
    stroke_width: float = 2.0
    dot_radius: float = 4.0
    hit_tolerance: float = 2.0
    bar_spacing: float = DEFAULT_BAR_SPACING
    group_spacing: float = DEFAULT_GROUP_SPACING
    horizontal_lines: int = DEFAULT_HORIZONTAL_LINES
    max_vertical_ticks: int = DEFAULT_MAX_VERTICAL_TICKS
    colors: tuple[str, ...] | None = None
    # None picks the chart type's own default (2 for lines, 1 for bars)
    value_fraction_digits: int | None = None
    y_padding_ratio: float = DEFAULT_Y_PADDING_RATIO

    @property
    def hit_radius(self) -> float:
        return self.dot_radius + self.hit_tolerance


DEFAULT_OPTIONS = ChartOptions()

_NON_NEGATIVE = (
    "width",
    "height",
    "stroke_width",
    "dot_radius",
    "hit_tolerance",
    "bar_spacing",
    "group_spacing",
    "y_padding_ratio",
)


def validate_chart_options(overrides: Mapping[str, Any] | None = None) -> ChartOptions:
    """Validate and merge option overrides against the defaults."""

    raw: dict[str, Any] = {f.name: getattr(DEFAULT_OPTIONS, f.name) for f in fields(ChartOptions)}
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ChartConfigError(f"Unknown chart option: {key}")
            raw[key] = value

    for key in _NON_NEGATIVE:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) < 0:
            raise ChartConfigError(f"Option `{key}` must be a non-negative number")

    for key in ("horizontal_lines", "max_vertical_ticks"):
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ChartConfigError(f"Option `{key}` must be an integer >= 1")

    digits = raw["value_fraction_digits"]
    if digits is not None and (isinstance(digits, bool) or not isinstance(digits, int) or not 0 <= digits <= 20):
        raise ChartConfigError("Option `value_fraction_digits` must be an integer between 0 and 20")

    if not isinstance(raw["smooth"], bool):
        raise ChartConfigError("Option `smooth` must be a boolean")

    colors = raw["colors"]
    palette = None if colors is None else validate_palette(colors)

    return ChartOptions(
        width=float(raw["width"]),
        height=float(raw["height"]),
        padding=_coerce_padding(raw["padding"]),
        smooth=raw["smooth"],
        stroke_width=float(raw["stroke_width"]),
        dot_radius=float(raw["dot_radius"]),
        hit_tolerance=float(raw["hit_tolerance"]),
        bar_spacing=float(raw["bar_spacing"]),
        group_spacing=float(raw["group_spacing"]),
        horizontal_lines=raw["horizontal_lines"],
        max_vertical_ticks=raw["max_vertical_ticks"],
        colors=palette,
        value_fraction_digits=digits,
        y_padding_ratio=float(raw["y_padding_ratio"]),
    )


def load_chart_options(path: str | Path) -> ChartOptions:
    """Load options from a TOML file, reading the ``[chart]`` table when present."""

    options_path = Path(path)
    if not options_path.exists():
        raise FileNotFoundError(f"chart options not found: {options_path}")
    with options_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("chart", raw)
    if not isinstance(table, dict):
        raise ChartConfigError("`chart` must be a table")
    return validate_chart_options(table)


def _coerce_padding(value: Any) -> Padding:
    if isinstance(value, Padding):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if value < 0:
            raise ChartConfigError("Option `padding` must be non-negative")
        side = float(value)
        return Padding(top=side, right=side, bottom=side, left=side)
    if not isinstance(value, Mapping):
        raise ChartConfigError("Option `padding` must be a number or a table of top/right/bottom/left")
    merged = asdict(Padding())
    for key, side in value.items():
        if key not in merged:
            raise ChartConfigError(f"Unknown padding side: {key}")
        if isinstance(side, bool) or not isinstance(side, (int, float)) or side < 0:
            raise ChartConfigError(f"Padding `{key}` must be a non-negative number")
        merged[key] = float(side)
    return Padding(**merged)
