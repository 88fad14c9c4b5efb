from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from chartgeom.grid import GridLine
from chartgeom.scales import format_value, scale_linear
from chartgeom.series import ChartDataPoint, NormalizedData


DEFAULT_GROUP_SPACING = 20.0
DEFAULT_BAR_SPACING = 2.0


@dataclass(frozen=True)
class BarRect:
    x: float
    y: float
    width: float
    height: float
    value: float
    label: str
    series_id: str
    color: str
    data_point: ChartDataPoint
    aria_label: str = ""

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height


@dataclass(frozen=True)
class _GroupMetrics:
    group_width: float
    bar_width: float


def _group_metrics(
    n_groups: int,
    n_series: int,
    plot_width: float,
    group_spacing: float,
    bar_spacing: float,
) -> _GroupMetrics:
    group_width = max(0.0, (plot_width - (n_groups - 1) * group_spacing) / n_groups)
    available = max(1.0, group_width - max(0.0, (n_series - 1) * bar_spacing))
    return _GroupMetrics(group_width=group_width, bar_width=available / n_series)


def layout_bars(
    data: NormalizedData,
    *,
    plot_width: float,
    plot_height: float,
    group_spacing: float = DEFAULT_GROUP_SPACING,
    bar_spacing: float = DEFAULT_BAR_SPACING,
    value_formatter: Callable[[float], str] = format_value,
    label_formatter: Callable[[Any], str] | None = None,
) -> tuple[BarRect, ...]:
    """Lay out one bar per (category, series), grouped by category left to right.

    Bars grow up from the bottom edge of the plot. Heights come straight from
    the shared Y bounds, so negative values are not measured from zero.
    ``label_formatter`` renders category keys and defaults to the domain's own
    formatting; ``value_formatter`` renders the value in each bar's aria label.
    """

    n_groups = len(data.domain)
    n_series = len(data.series)
    if n_groups == 0 or n_series == 0 or plot_width <= 0 or plot_height <= 0:
        return ()

    metrics = _group_metrics(n_groups, n_series, plot_width, group_spacing, bar_spacing)
    bounds = data.bounds
    bars: list[BarRect] = []
    for group_index, key in enumerate(data.domain.keys):
        group_x = group_index * (metrics.group_width + group_spacing)
        label = (label_formatter or data.domain.format_key)(key)
        for series_index, series in enumerate(data.series):
            point = series.points[group_index]
            height = max(0.0, scale_linear(point.y, bounds.min_y, bounds.max_y, 0.0, plot_height))
            bars.append(
                BarRect(
                    x=group_x + series_index * (metrics.bar_width + bar_spacing),
                    y=plot_height - height,
                    width=metrics.bar_width,
                    height=height,
                    value=point.y,
                    label=label,
                    series_id=series.id,
                    color=series.color,
                    data_point=point.original,
                    aria_label=f"{label}: {value_formatter(point.y)}",
                )
            )
    return tuple(bars)


def category_label_lines(
    data: NormalizedData,
    *,
    plot_width: float,
    group_spacing: float = DEFAULT_GROUP_SPACING,
    bar_spacing: float = DEFAULT_BAR_SPACING,
    label_formatter: Callable[[Any], str] | None = None,
) -> tuple[GridLine, ...]:
    """Category labels centred under each bar group."""

    n_groups = len(data.domain)
    if n_groups == 0 or not data.series or plot_width <= 0:
        return ()
    fmt = label_formatter or data.domain.format_key
    metrics = _group_metrics(n_groups, len(data.series), plot_width, group_spacing, bar_spacing)
    return tuple(
        GridLine(
            orientation="vertical",
            position=i * (metrics.group_width + group_spacing) + metrics.group_width / 2.0,
            value=key,
            label=fmt(key),
        )
        for i, key in enumerate(data.domain.keys)
    )
