"""Processing utilities: metric/date filtering and tabular conversion."""

from airquality_analysis.processing.filtering import (
    available_metrics,
    filter_measurements,
    measurements_to_frame,
    measurements_to_series,
)

__all__ = [
    "available_metrics",
    "filter_measurements",
    "measurements_to_frame",
    "measurements_to_series",
]
