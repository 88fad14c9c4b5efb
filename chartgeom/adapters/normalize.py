from __future__ import annotations

import logging
from typing import Any, Sequence

from chartgeom.colors import ColorAssigner
from chartgeom.scales import DEFAULT_Y_PADDING_RATIO, pad_range
from chartgeom.series import (
    Bounds,
    CategoricalDomain,
    ChartDataPoint,
    ChartSeries,
    Domain,
    NormalizedData,
    NormalizedPoint,
    NormalizedSeries,
    NumericDomain,
    ZERO_BOUNDS,
    category_key,
    coerce_x,
    coerce_y,
    is_temporal,
)

LOGGER = logging.getLogger(__name__)


def resolve_domain(series: Sequence[ChartSeries]) -> Domain:
    """Collect every x-key across all series into one sorted domain.

    The domain is numeric only if every key coerces to a number; the first
    key that does not makes the whole domain categorical.
    """

    numbers: set[float] = set()
    raw_keys: list[Any] = []
    temporal = False
    categorical_from: Any = None
    for item in series:
        for point in item.points:
            raw_keys.append(point.x)
            if categorical_from is not None:
                continue
            number = coerce_x(point.x)
            if number is None:
                categorical_from = point.x
                continue
            numbers.add(number)
            temporal = temporal or is_temporal(point.x)

    if categorical_from is not None:
        LOGGER.debug("x-key %r is not numeric; using a categorical domain for all series", categorical_from)
        return CategoricalDomain(keys=tuple(sorted({category_key(raw) for raw in raw_keys})))
    return NumericDomain(keys=tuple(sorted(numbers)), temporal=temporal)


def normalize_series(
    series: Sequence[ChartSeries],
    *,
    palette: Sequence[str] | None = None,
    padding_ratio: float = DEFAULT_Y_PADDING_RATIO,
) -> NormalizedData:
    """Align every series to the shared domain, filling gaps with ``y = 0``."""

    assigner = ColorAssigner.from_palette(palette)
    if not series:
        return NormalizedData()

    domain = resolve_domain(series)
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")
    normalized: list[NormalizedSeries] = []
    for index, item in enumerate(series):
        lookup: dict[Any, ChartDataPoint] = {}
        for point in item.points:
            lookup[domain.key_for(point.x)] = point

        points: list[NormalizedPoint] = []
        for position, key in enumerate(domain.keys):
            original = lookup.get(key)
            if original is None:
                y = 0.0
                points.append(
                    NormalizedPoint(
                        x=key,
                        y=y,
                        original=ChartDataPoint(x=key, y=0.0, label=domain.format_key(key)),
                        filled=True,
                    )
                )
            else:
                y = coerce_y(original.y)
                points.append(NormalizedPoint(x=key, y=y, original=original))
            x = domain.position(position)
            min_y = min(min_y, y)
            max_y = max(max_y, y)
            min_x = min(min_x, x)
            max_x = max(max_x, x)

        normalized.append(
            NormalizedSeries(
                id=item.id,
                name=item.display_name,
                color=assigner.color_for(index, item.color),
                points=tuple(points),
            )
        )

    if len(domain) == 0:
        bounds = ZERO_BOUNDS
    else:
        low, high = pad_range(min_y, max_y, padding_ratio)
        bounds = Bounds(min_x=min_x, max_x=max_x, min_y=low, max_y=high)
    return NormalizedData(domain=domain, series=tuple(normalized), bounds=bounds)
