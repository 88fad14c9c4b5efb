from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from chartgeom.errors import ChartDataError
from chartgeom.series import ChartDataPoint, ChartSeries, coerce_y


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except ImportError:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def series_from_arrays(
    id: str,
    y: Any,
    *,
    x: Any = None,
    labels: Any = None,
    name: str | None = None,
    color: str | None = None,
) -> ChartSeries:
    """Build a series from parallel x/y arrays; x defaults to the sample index."""

    y_arr = _coerce_1d_numeric(y, label="y")
    if x is None:
        x_values: list[Any] = list(range(y_arr.size))
    else:
        x_values = _coerce_1d_values(x, label="x")
    if len(x_values) != y_arr.size:
        raise ChartDataError(f"x and y length mismatch: {len(x_values)} != {y_arr.size}")

    label_values: list[Any] | None = None
    if labels is not None:
        label_values = _coerce_1d_values(labels, label="labels")
        if len(label_values) != y_arr.size:
            raise ChartDataError(f"labels and y length mismatch: {len(label_values)} != {y_arr.size}")

    points = tuple(
        ChartDataPoint(
            x=x_values[i],
            y=float(y_arr[i]),
            label=None if label_values is None or label_values[i] is None else str(label_values[i]),
        )
        for i in range(y_arr.size)
    )
    return ChartSeries(id=id, points=points, name=name, color=color)


def series_from_frame(
    frame: Any,
    *,
    y: str | Sequence[str] | None = None,
    x: str | None = None,
    colors: dict[str, str] | None = None,
) -> tuple[ChartSeries, ...]:
    """Build one series per y column of a pandas DataFrame.

    When ``x`` is omitted the frame index supplies the x-keys. When ``y`` is
    omitted every numeric column other than ``x`` becomes a series.
    """

    if pd is None:
        raise ChartDataError("pandas is required for series_from_frame")
    if not isinstance(frame, pd.DataFrame):
        raise ChartDataError("`frame` must be a pandas DataFrame")

    if x is None:
        x_values: Any = frame.index
    else:
        if x not in frame.columns:
            raise ChartDataError(f"column not found: {x}")
        x_values = frame[x]

    if y is None:
        columns = [c for c in frame.columns if c != x and _is_numeric_dtype(frame[c])]
        if not columns:
            raise ChartDataError("data frame has no numeric columns to plot")
    elif isinstance(y, str):
        columns = [y]
    else:
        columns = list(y)

    out: list[ChartSeries] = []
    for column in columns:
        if column not in frame.columns:
            raise ChartDataError(f"column not found: {column}")
        out.append(
            series_from_arrays(
                str(column),
                frame[column],
                x=x_values,
                name=str(column),
                color=(colors or {}).get(str(column)),
            )
        )
    return tuple(out)


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    return bool(pd.api.types.is_numeric_dtype(series))


def _coerce_1d_values(value: Any, *, label: str) -> list[Any]:
    if torch is not None and isinstance(value, torch.Tensor):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return value.detach().cpu().tolist()

    if pd is not None and isinstance(value, (pd.Series, pd.Index)):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return value.to_list()

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        if value.dtype.kind == "M":
            # tolist() would turn datetime64[ns] into bare integers
            return list(value)
        return value.tolist()

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return list(value)

    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise ChartDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)
    # non-numeric entries become 0, matching normalize_series
    return np.asarray([coerce_y(raw) for raw in arr.tolist()], dtype=np.float64)
