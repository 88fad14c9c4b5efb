from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Callable, Literal

from chartgeom.scales import format_value, scale_linear, scale_y
from chartgeom.series import Bounds, Domain


DEFAULT_HORIZONTAL_LINES = 5
DEFAULT_MAX_VERTICAL_TICKS = 10


@dataclass(frozen=True)
class GridLine:
    orientation: Literal["horizontal", "vertical"]
    position: float
    value: float | str
    label: str


def x_position(domain: Domain, bounds: Bounds, index: int, plot_width: float) -> float:
    return scale_linear(domain.position(index), bounds.min_x, bounds.max_x, 0.0, plot_width)


def horizontal_grid_lines(
    bounds: Bounds,
    plot_height: float,
    *,
    count: int = DEFAULT_HORIZONTAL_LINES,
    formatter: Callable[[float], str] = format_value,
) -> tuple[GridLine, ...]:
    """Evenly spaced Y reference lines from ``min_y`` up to ``max_y`` inclusive."""

    if count <= 0 or plot_height <= 0:
        return ()
    if count == 1 or bounds.min_y == bounds.max_y:
        values = [bounds.min_y]
    else:
        span = bounds.max_y - bounds.min_y
        values = [bounds.min_y + span * (i / (count - 1)) for i in range(count - 1)]
        values.append(bounds.max_y)
    return tuple(
        GridLine(
            orientation="horizontal",
            position=scale_y(value, bounds.min_y, bounds.max_y, plot_height),
            value=value,
            label=formatter(value),
        )
        for value in values
    )


def vertical_grid_lines(
    domain: Domain,
    bounds: Bounds,
    plot_width: float,
    *,
    max_ticks: int = DEFAULT_MAX_VERTICAL_TICKS,
    formatter: Callable[[Any], str] | None = None,
) -> tuple[GridLine, ...]:
    """X reference lines at every ``stride``-th key; labels use ``formatter`` or the domain."""

    n = len(domain)
    fmt = formatter or domain.format_key
    if n == 0 or max_ticks <= 0 or plot_width <= 0:
        return ()
    stride = math.ceil(n / max_ticks)
    return tuple(
        GridLine(
            orientation="vertical",
            position=x_position(domain, bounds, i, plot_width),
            value=domain.keys[i],
            label=fmt(domain.keys[i]),
        )
        for i in range(0, n, stride)
    )
