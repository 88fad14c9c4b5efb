from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import math

import numpy as np


DEFAULT_Y_PADDING_RATIO = 0.1
DEFAULT_VALUE_FRACTION_DIGITS = 2


def scale_linear(
    value: float,
    domain_min: float,
    domain_max: float,
    range_min: float,
    range_max: float,
) -> float:
    """Map ``value`` from ``[domain_min, domain_max]`` onto ``[range_min, range_max]``.

    Endpoints map exactly. A degenerate domain maps every input to the range
    midpoint. Pass the range reversed (``plot_height, 0``) for chart-space Y.
    """

    span = domain_max - domain_min
    if span == 0:
        return (range_min + range_max) / 2.0
    t = (value - domain_min) / span
    return range_min * (1.0 - t) + range_max * t


def scale_y(value: float, min_y: float, max_y: float, plot_height: float) -> float:
    return scale_linear(value, min_y, max_y, plot_height, 0.0)


def scale_array(
    values: np.ndarray,
    domain_min: float,
    domain_max: float,
    range_min: float,
    range_max: float,
) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    span = domain_max - domain_min
    if span == 0:
        return np.full(arr.shape, (range_min + range_max) / 2.0, dtype=np.float64)
    t = (arr - domain_min) / span
    return range_min * (1.0 - t) + range_max * t


def pad_range(vmin: float, vmax: float, ratio: float = DEFAULT_Y_PADDING_RATIO) -> tuple[float, float]:
    span = vmax - vmin
    if span <= 0:
        return vmin, vmax
    pad = span * ratio
    return vmin - pad, vmax + pad


def format_value(value: float, max_fraction_digits: int = DEFAULT_VALUE_FRACTION_DIGITS) -> str:
    """Render a value with thousands separators and at most N fraction digits."""

    if not math.isfinite(value):
        return str(value)
    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-max(0, max_fraction_digits))
    try:
        q = d.quantize(quant, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        q = d
    out = format(q, ",f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_key_number(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return str(int(value))
    return repr(float(value))


def format_timestamp_ms(value: float) -> str:
    try:
        moment = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return format_key_number(value)
    if moment.hour == 0 and moment.minute == 0 and moment.second == 0 and moment.microsecond == 0:
        return moment.date().isoformat()
    return moment.strftime("%Y-%m-%dT%H:%M:%S")


def format_coordinate(value: float) -> str:
    out = f"{value:.3f}".rstrip("0").rstrip(".")
    if out in ("-0", ""):
        out = "0"
    return out
