from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
import logging
from typing import Any, Callable, Sequence

import numpy as np

from chartgeom.adapters.normalize import normalize_series
from chartgeom.bars import BarRect, category_label_lines, layout_bars
from chartgeom.config import DEFAULT_OPTIONS, ChartOptions
from chartgeom.grid import GridLine, horizontal_grid_lines, vertical_grid_lines
from chartgeom.hit_test import HitResult, hit_test_bars, hit_test_points
from chartgeom.paths import PathCommand, build_path
from chartgeom.scales import format_value, scale_array
from chartgeom.series import ChartSeries, NormalizedData, NormalizedSeries, PointPixel

LOGGER = logging.getLogger(__name__)

LINE_VALUE_FRACTION_DIGITS = 2
BAR_VALUE_FRACTION_DIGITS = 1

ValueFormatter = Callable[[float], str]
LabelFormatter = Callable[[Any], str]


@dataclass(frozen=True)
class PlotArea:
    """Chart rectangle minus padding; all geometry is relative to its top-left corner."""

    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_options(cls, options: ChartOptions) -> "PlotArea":
        pad = options.padding
        return cls(
            left=pad.left,
            top=pad.top,
            width=options.width - pad.left - pad.right,
            height=options.height - pad.top - pad.bottom,
        )

    @property
    def is_drawable(self) -> bool:
        return self.width > 0 and self.height > 0

    def to_plot(self, chart_x: float, chart_y: float) -> tuple[float, float]:
        return (chart_x - self.left, chart_y - self.top)


@dataclass(frozen=True)
class LegendEntry:
    series_id: str
    name: str
    color: str


@dataclass(frozen=True)
class LineSeriesGeometry:
    series_id: str
    name: str
    color: str
    commands: tuple[PathCommand, ...]
    points: tuple[PointPixel, ...]


@dataclass(frozen=True)
class LineChartGeometry:
    data: NormalizedData
    plot: PlotArea
    options: ChartOptions
    series: tuple[LineSeriesGeometry, ...]
    horizontal_grid: tuple[GridLine, ...]
    vertical_grid: tuple[GridLine, ...]
    legend: tuple[LegendEntry, ...]
    value_formatter: ValueFormatter = field(default=format_value, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.series

    def hit_test(self, x: float, y: float) -> HitResult | None:
        """Find the dot under a pointer given in plot-local coordinates."""

        return hit_test_points(
            [(s.series_id, s.points) for s in self.series],
            x,
            y,
            radius=self.options.hit_radius,
        )

    def accessible_labels(self) -> tuple[tuple[str, str], ...]:
        return tuple((p.label, self.value_formatter(p.value)) for s in self.series for p in s.points)


@dataclass(frozen=True)
class BarChartGeometry:
    data: NormalizedData
    plot: PlotArea
    options: ChartOptions
    bars: tuple[BarRect, ...]
    horizontal_grid: tuple[GridLine, ...]
    category_labels: tuple[GridLine, ...]
    legend: tuple[LegendEntry, ...]
    value_formatter: ValueFormatter = field(default=format_value, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.bars

    def hit_test(self, x: float, y: float) -> HitResult | None:
        return hit_test_bars(self.bars, x, y)

    def accessible_labels(self) -> tuple[tuple[str, str], ...]:
        return tuple((bar.label, self.value_formatter(bar.value)) for bar in self.bars)


def _value_formatter(options: ChartOptions, default_digits: int) -> ValueFormatter:
    digits = default_digits if options.value_fraction_digits is None else options.value_fraction_digits
    return partial(format_value, max_fraction_digits=digits)


def _legend(series: Sequence[NormalizedSeries]) -> tuple[LegendEntry, ...]:
    return tuple(LegendEntry(series_id=s.id, name=s.name, color=s.color) for s in series)


def _normalize(series: Sequence[ChartSeries], options: ChartOptions) -> NormalizedData:
    return normalize_series(series, palette=options.colors, padding_ratio=options.y_padding_ratio)


def _series_pixels(
    data: NormalizedData,
    series: NormalizedSeries,
    plot: PlotArea,
    value_formatter: ValueFormatter,
    label_formatter: LabelFormatter,
) -> tuple[PointPixel, ...]:
    bounds = data.bounds
    domain = data.domain
    positions = np.asarray([domain.position(i) for i in range(len(domain))], dtype=np.float64)
    values = np.asarray([p.y for p in series.points], dtype=np.float64)
    xs = scale_array(positions, bounds.min_x, bounds.max_x, 0.0, plot.width)
    ys = scale_array(values, bounds.min_y, bounds.max_y, plot.height, 0.0)
    pixels: list[PointPixel] = []
    for i, point in enumerate(series.points):
        label = point.original.label or label_formatter(point.x)
        pixels.append(
            PointPixel(
                x=float(xs[i]),
                y=float(ys[i]),
                value=point.y,
                label=label,
                data_point=point.original,
                aria_label=f"{label}: {value_formatter(point.y)}",
            )
        )
    return tuple(pixels)


def build_line_chart(
    series: Sequence[ChartSeries],
    options: ChartOptions | None = None,
    *,
    value_formatter: ValueFormatter | None = None,
    label_formatter: LabelFormatter | None = None,
) -> LineChartGeometry:
    """Compute line chart geometry.

    ``value_formatter`` renders Y values for grid labels and accessible labels;
    by default values keep up to ``LINE_VALUE_FRACTION_DIGITS`` fraction digits.
    ``label_formatter`` renders x-keys and defaults to the domain's formatting.
    """

    options = options or DEFAULT_OPTIONS
    LOGGER.debug("building line chart geometry for %d series", len(series))
    value_fmt = value_formatter or _value_formatter(options, LINE_VALUE_FRACTION_DIGITS)
    data = _normalize(series, options)
    plot = PlotArea.from_options(options)
    legend = _legend(data.series)
    if data.is_empty or not plot.is_drawable:
        return LineChartGeometry(
            data=data,
            plot=plot,
            options=options,
            series=(),
            horizontal_grid=(),
            vertical_grid=(),
            legend=legend,
            value_formatter=value_fmt,
        )

    label_fmt = label_formatter or data.domain.format_key
    geometries: list[LineSeriesGeometry] = []
    for item in data.series:
        pixels = _series_pixels(data, item, plot, value_fmt, label_fmt)
        geometries.append(
            LineSeriesGeometry(
                series_id=item.id,
                name=item.name,
                color=item.color,
                commands=build_path([(p.x, p.y) for p in pixels], smooth=options.smooth),
                points=pixels,
            )
        )

    return LineChartGeometry(
        data=data,
        plot=plot,
        options=options,
        series=tuple(geometries),
        horizontal_grid=horizontal_grid_lines(
            data.bounds,
            plot.height,
            count=options.horizontal_lines,
            formatter=value_fmt,
        ),
        vertical_grid=vertical_grid_lines(
            data.domain,
            data.bounds,
            plot.width,
            max_ticks=options.max_vertical_ticks,
            formatter=label_fmt,
        ),
        legend=legend,
        value_formatter=value_fmt,
    )


def build_bar_chart(
    series: Sequence[ChartSeries],
    options: ChartOptions | None = None,
    *,
    value_formatter: ValueFormatter | None = None,
    label_formatter: LabelFormatter | None = None,
) -> BarChartGeometry:
    """Compute bar chart geometry; values default to ``BAR_VALUE_FRACTION_DIGITS`` fraction digits."""

    options = options or DEFAULT_OPTIONS
    LOGGER.debug("building bar chart geometry for %d series", len(series))
    value_fmt = value_formatter or _value_formatter(options, BAR_VALUE_FRACTION_DIGITS)
    data = _normalize(series, options)
    plot = PlotArea.from_options(options)
    bars = layout_bars(
        data,
        plot_width=plot.width,
        plot_height=plot.height,
        group_spacing=options.group_spacing,
        bar_spacing=options.bar_spacing,
        value_formatter=value_fmt,
        label_formatter=label_formatter,
    )
    if not bars:
        return BarChartGeometry(
            data=data,
            plot=plot,
            options=options,
            bars=(),
            horizontal_grid=(),
            category_labels=(),
            legend=_legend(data.series),
            value_formatter=value_fmt,
        )
    return BarChartGeometry(
        data=data,
        plot=plot,
        options=options,
        bars=bars,
        horizontal_grid=horizontal_grid_lines(
            data.bounds,
            plot.height,
            count=options.horizontal_lines,
            formatter=value_fmt,
        ),
        category_labels=category_label_lines(
            data,
            plot_width=plot.width,
            group_spacing=options.group_spacing,
            bar_spacing=options.bar_spacing,
            label_formatter=label_formatter,
        ),
        legend=_legend(data.series),
        value_formatter=value_fmt,
    )
