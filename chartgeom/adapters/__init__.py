from .frames import series_from_arrays, series_from_frame
from .normalize import normalize_series, resolve_domain

__all__ = ["normalize_series", "resolve_domain", "series_from_arrays", "series_from_frame"]
