"""End-to-end report for one station.

Mirrors the interactive flow: load the station list, select a station, pick a metric
(the first available one when none is given), narrow to a date range, and summarize.
"""

from __future__ import annotations

from typing import Optional

from airquality_analysis.analysis import InsufficientDataError, analyze_measurements
from airquality_analysis.data_access.records import Station
from airquality_analysis.data_access.service import DataService
from airquality_analysis.processing import filter_measurements

NOT_ENOUGH_DATA = "Not enough data to analyze."


def find_station(stations: list[Station], station_id: int) -> Station:
    """Return the station with ``station_id`` from an already loaded list."""
    matches = [s for s in stations if s.id == station_id]
    if not matches:
        raise KeyError(f"Station {station_id} not found in the station list")
    return matches[0]


def build_station_listing(service: DataService) -> dict:
    """Refresh the station list on ``service``.

    When the remote list is unavailable and no station snapshot exists, the ids of
    stations that still have cached measurements are reported instead, so they can be
    analyzed offline.
    """
    outcome = service.list_stations()
    cached_ids: list[str] = []
    if outcome.used_fallback and not outcome.value:
        cached_ids = service.store.stored_station_ids()
    return {
        "stations": outcome.value,
        "used_fallback": outcome.used_fallback,
        "cached_station_ids": cached_ids,
    }


def build_station_report(
    service: DataService,
    station_id: int,
    metric: Optional[str] = None,
    start: str = "",
    end: str = "",
) -> dict:
    """Select ``station_id`` on ``service`` and analyze one metric.

    Returns a dictionary with:
    - the station (or None if it is not in the loaded list)
    - fallback flags for the station list and measurement fetches
    - the metrics available at the station and the metric analyzed
    - the filtered series and its summary (None with a message when too short)
    """
    stations_fallback = False
    if not service.stations:
        stations_fallback = service.list_stations().used_fallback
    try:
        station = find_station(service.stations, station_id)
    except KeyError:
        station = None

    outcome = service.select_station(station_id)
    chosen = metric or (service.metrics[0] if service.metrics else None)
    series = filter_measurements(service.measurements, chosen, start, end) if chosen else []

    summary = None
    message = None
    try:
        summary = analyze_measurements(series)
    except InsufficientDataError:
        message = NOT_ENOUGH_DATA

    return {
        "station": station,
        "stations_fallback": stations_fallback,
        "measurements_fallback": outcome.used_fallback,
        "metrics": list(service.metrics),
        "metric": chosen,
        "series": series,
        "summary": summary,
        "message": message,
    }
