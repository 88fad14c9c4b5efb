from __future__ import annotations

from typing import Union
import xml.etree.ElementTree as ET

from chartgeom.chart import BarChartGeometry, LineChartGeometry
from chartgeom.paths import to_svg_path_data
from chartgeom.scales import format_coordinate

ChartGeometry = Union[LineChartGeometry, BarChartGeometry]

_GRID_STROKE = "#94a3b8"
_TEXT_FILL = "#475569"
_FONT_SIZE = "12"


def render_svg(geometry: ChartGeometry, *, aria_label: str | None = None) -> str:
    """Serialize computed chart geometry into a standalone SVG document."""

    options = geometry.options
    if aria_label is None:
        aria_label = "Bar chart" if isinstance(geometry, BarChartGeometry) else "Line chart"
    root = ET.Element(
        "svg",
        {
            "xmlns": "http://www.w3.org/2000/svg",
            "width": format_coordinate(options.width),
            "height": format_coordinate(options.height),
            "viewBox": f"0 0 {format_coordinate(options.width)} {format_coordinate(options.height)}",
            "role": "img",
            "aria-label": aria_label,
        },
    )

    if geometry.is_empty:
        empty = ET.SubElement(
            root,
            "text",
            {
                "x": format_coordinate(options.width / 2.0),
                "y": format_coordinate(options.height / 2.0),
                "text-anchor": "middle",
                "font-size": _FONT_SIZE,
                "fill": _TEXT_FILL,
            },
        )
        empty.text = "No data available"
        return ET.tostring(root, encoding="unicode")

    plot = geometry.plot
    grid = ET.SubElement(root, "g", {"class": "grid-lines"})
    for line in geometry.horizontal_grid:
        y = format_coordinate(plot.top + line.position)
        ET.SubElement(
            grid,
            "line",
            {
                "x1": format_coordinate(plot.left),
                "y1": y,
                "x2": format_coordinate(plot.left + plot.width),
                "y2": y,
                "stroke": _GRID_STROKE,
                "stroke-opacity": "0.2",
            },
        )
        label = ET.SubElement(
            grid,
            "text",
            {
                "x": format_coordinate(plot.left - 10.0),
                "y": format_coordinate(plot.top + line.position + 4.0),
                "text-anchor": "end",
                "font-size": _FONT_SIZE,
                "fill": _TEXT_FILL,
            },
        )
        label.text = line.label

    body = ET.SubElement(
        root,
        "g",
        {"transform": f"translate({format_coordinate(plot.left)}, {format_coordinate(plot.top)})"},
    )
    if isinstance(geometry, LineChartGeometry):
        _render_lines(grid, body, geometry)
    else:
        _render_bars(root, body, geometry)
    return ET.tostring(root, encoding="unicode")


def _render_lines(grid: ET.Element, body: ET.Element, geometry: LineChartGeometry) -> None:
    plot = geometry.plot
    options = geometry.options
    for line in geometry.vertical_grid:
        x = format_coordinate(plot.left + line.position)
        ET.SubElement(
            grid,
            "line",
            {
                "x1": x,
                "y1": format_coordinate(plot.top),
                "x2": x,
                "y2": format_coordinate(plot.top + plot.height),
                "stroke": _GRID_STROKE,
                "stroke-opacity": "0.2",
            },
        )
    for series in geometry.series:
        if series.commands:
            ET.SubElement(
                body,
                "path",
                {
                    "d": to_svg_path_data(series.commands),
                    "fill": "none",
                    "stroke": series.color,
                    "stroke-width": format_coordinate(options.stroke_width),
                },
            )
        for point in series.points:
            ET.SubElement(
                body,
                "circle",
                {
                    "cx": format_coordinate(point.x),
                    "cy": format_coordinate(point.y),
                    "r": format_coordinate(options.dot_radius),
                    "fill": series.color,
                    "aria-label": point.aria_label,
                },
            )


def _render_bars(root: ET.Element, body: ET.Element, geometry: BarChartGeometry) -> None:
    plot = geometry.plot
    for bar in geometry.bars:
        ET.SubElement(
            body,
            "rect",
            {
                "x": format_coordinate(bar.x),
                "y": format_coordinate(bar.y),
                "width": format_coordinate(bar.width),
                "height": format_coordinate(bar.height),
                "fill": bar.color,
                "aria-label": bar.aria_label,
            },
        )
    labels = ET.SubElement(root, "g", {"class": "x-axis-labels"})
    for line in geometry.category_labels:
        text = ET.SubElement(
            labels,
            "text",
            {
                "x": format_coordinate(plot.left + line.position),
                "y": format_coordinate(plot.top + plot.height + 20.0),
                "text-anchor": "middle",
                "font-size": _FONT_SIZE,
                "fill": _TEXT_FILL,
            },
        )
        text.text = line.label
