"""Statistical summaries over filtered measurement series."""

from airquality_analysis.analysis.summary import (
    InsufficientDataError,
    MeasurementSummary,
    Trend,
    analyze_measurements,
    format_summary,
)

__all__ = [
    "InsufficientDataError",
    "MeasurementSummary",
    "Trend",
    "analyze_measurements",
    "format_summary",
]
