from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when adapter input cannot be turned into chart series."""


class ChartConfigError(ValueError):
    """Raised for invalid chart options."""
