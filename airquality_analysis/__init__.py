"""Air-quality station toolkit for the GIOŚ open data API.

The package supports:

- fetching the station catalog, sensor lists, and per-sensor series
- falling back to local JSON snapshots when the remote service is unavailable
- filtering a station's measurements by metric and date range
- summary statistics (mean, extremes with dates, trend) over a filtered series
"""

from airquality_analysis.config import load_service_config

__all__ = [
    "load_service_config",
]
