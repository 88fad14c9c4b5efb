from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
import math
from typing import Any, ClassVar, Literal, Union

import numpy as np

from chartgeom.scales import format_key_number, format_timestamp_ms


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ChartDataPoint:
    x: Any
    y: Any
    label: str | None = None


@dataclass(frozen=True)
class ChartSeries:
    id: str
    points: tuple[ChartDataPoint, ...] = ()
    name: str | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    @property
    def display_name(self) -> str:
        return self.name or self.id


def is_temporal(raw: Any) -> bool:
    return isinstance(raw, (date, np.datetime64))


def coerce_x(raw: Any) -> float | None:
    """Coerce an x value to a number, or return None if it is categorical.

    Dates become epoch milliseconds; naive datetimes are read as UTC.
    """

    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, np.datetime64):
        if np.isnat(raw):
            return None
        value = float(raw.astype("datetime64[ms]").astype(np.int64))
    elif isinstance(raw, datetime):
        moment = raw if raw.tzinfo is not None else raw.replace(tzinfo=timezone.utc)
        value = (moment - _EPOCH).total_seconds() * 1000.0
    elif isinstance(raw, date):
        value = float((raw - _EPOCH.date()).days) * 86_400_000.0
    elif isinstance(raw, Decimal):
        if raw.is_nan():
            return None
        value = float(raw)
    elif isinstance(raw, (int, float, np.integer, np.floating)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        # float() accepts "1_000"; digit separators are not numeric keys here
        if not text or "_" in text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


def coerce_y(raw: Any) -> float:
    if raw is None:
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip()
        if "_" in raw:
            return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def category_key(raw: Any) -> str:
    number = coerce_x(raw)
    if number is not None:
        return format_key_number(number)
    return str(raw)


@dataclass(frozen=True)
class NumericDomain:
    keys: tuple[float, ...] = ()
    temporal: bool = False

    kind: ClassVar[Literal["numeric"]] = "numeric"

    def __len__(self) -> int:
        return len(self.keys)

    def key_for(self, raw: Any) -> float | None:
        return coerce_x(raw)

    def position(self, index: int) -> float:
        return self.keys[index]

    def format_key(self, key: float) -> str:
        if self.temporal:
            return format_timestamp_ms(key)
        return format_key_number(key)


@dataclass(frozen=True)
class CategoricalDomain:
    keys: tuple[str, ...] = ()

    kind: ClassVar[Literal["categorical"]] = "categorical"

    def __len__(self) -> int:
        return len(self.keys)

    def key_for(self, raw: Any) -> str:
        return category_key(raw)

    def position(self, index: int) -> float:
        return float(index)

    def format_key(self, key: str) -> str:
        return key


Domain = Union[NumericDomain, CategoricalDomain]


@dataclass(frozen=True)
class Bounds:
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0


ZERO_BOUNDS = Bounds()


@dataclass(frozen=True)
class NormalizedPoint:
    x: float | str
    y: float
    original: ChartDataPoint
    filled: bool = False


@dataclass(frozen=True)
class NormalizedSeries:
    id: str
    name: str
    color: str
    points: tuple[NormalizedPoint, ...] = ()


@dataclass(frozen=True)
class NormalizedData:
    domain: Domain = field(default_factory=NumericDomain)
    series: tuple[NormalizedSeries, ...] = ()
    bounds: Bounds = ZERO_BOUNDS

    @property
    def is_empty(self) -> bool:
        return len(self.domain) == 0 or not self.series


@dataclass(frozen=True)
class PointPixel:
    x: float
    y: float
    value: float
    label: str
    data_point: ChartDataPoint
    aria_label: str = ""
