"""High-level workflows tying data access, filtering, and analysis together."""

from airquality_analysis.workflows.station_report import build_station_listing, build_station_report

__all__ = ["build_station_listing", "build_station_report"]
