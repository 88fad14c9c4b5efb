from chartgeom.adapters import normalize_series, series_from_arrays, series_from_frame
from chartgeom.bars import BarRect, layout_bars
from chartgeom.chart import (
    BarChartGeometry,
    LegendEntry,
    LineChartGeometry,
    LineSeriesGeometry,
    PlotArea,
    build_bar_chart,
    build_line_chart,
)
from chartgeom.colors import DEFAULT_PALETTE, ColorAssigner
from chartgeom.config import ChartOptions, Padding, load_chart_options, validate_chart_options
from chartgeom.errors import ChartConfigError, ChartDataError
from chartgeom.grid import GridLine, horizontal_grid_lines, vertical_grid_lines
from chartgeom.hit_test import HitResult, hit_test_bars, hit_test_points
from chartgeom.paths import PathCommand, build_path, to_svg_path_data
from chartgeom.scales import format_value, scale_linear
from chartgeom.series import (
    Bounds,
    CategoricalDomain,
    ChartDataPoint,
    ChartSeries,
    NormalizedData,
    NormalizedPoint,
    NormalizedSeries,
    NumericDomain,
    PointPixel,
)
from chartgeom.svg import render_svg

__all__ = [
    "BarChartGeometry",
    "BarRect",
    "Bounds",
    "CategoricalDomain",
    "ChartConfigError",
    "ChartDataError",
    "ChartDataPoint",
    "ChartOptions",
    "ChartSeries",
    "ColorAssigner",
    "DEFAULT_PALETTE",
    "GridLine",
    "HitResult",
    "LegendEntry",
    "LineChartGeometry",
    "LineSeriesGeometry",
    "NormalizedData",
    "NormalizedPoint",
    "NormalizedSeries",
    "NumericDomain",
    "Padding",
    "PathCommand",
    "PlotArea",
    "PointPixel",
    "build_bar_chart",
    "build_line_chart",
    "build_path",
    "format_value",
    "hit_test_bars",
    "hit_test_points",
    "horizontal_grid_lines",
    "layout_bars",
    "load_chart_options",
    "normalize_series",
    "render_svg",
    "scale_linear",
    "series_from_arrays",
    "series_from_frame",
    "to_svg_path_data",
    "validate_chart_options",
    "vertical_grid_lines",
]
