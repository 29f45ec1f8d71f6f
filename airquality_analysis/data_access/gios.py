"""Lightweight GIOŚ REST client.

Hits the station catalog, sensor directory, and per-sensor data endpoints via
``requests`` and normalizes the payloads into ``Station``/``Measurement`` records.
Nothing here raises for network or payload problems: each call returns a typed
``Success``/``Failure`` so the caller can fall back to the local snapshot.
"""

from __future__ import annotations

import concurrent.futures as cf
import logging
from typing import Any, Optional

import requests

from airquality_analysis.config import ServiceConfig
from airquality_analysis.data_access.records import (
    Measurement,
    Station,
    measurements_from_remote,
    sensor_id_from_remote,
    station_from_remote,
)
from airquality_analysis.data_access.results import Failure, FailureKind, Result, Success

logger = logging.getLogger(__name__)


class _GiosEndpoint:
    """Shared GET + JSON decoding for the GIOŚ endpoints."""

    def __init__(self, config: Optional[ServiceConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ServiceConfig()
        self.session = session

    def _get(self, path: str) -> Result[requests.Response]:
        url = self.config.url(path)
        http = self.session or requests
        try:
            resp = http.get(url, timeout=self.config.timeout_s)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("GET %s failed: %s", url, exc)
            return Failure(FailureKind.REMOTE_UNAVAILABLE, f"{url}: {exc}")
        return Success(resp)

    def _get_json(self, path: str) -> Result[Any]:
        fetched = self._get(path)
        if not fetched.ok:
            return fetched
        try:
            return Success(fetched.value.json())
        except ValueError as exc:
            # requests' JSONDecodeError subclasses ValueError.
            logger.warning("Invalid JSON from %s: %s", self.config.url(path), exc)
            return Failure(FailureKind.MALFORMED_RESPONSE, str(exc))


class StationCatalogClient(_GiosEndpoint):
    """Fetch the full list of monitoring stations."""

    def fetch_raw(self) -> Result[str]:
        """Return the unparsed catalog body."""
        fetched = self._get(self.config.stations_path)
        if not fetched.ok:
            return fetched
        return Success(fetched.value.text)

    def fetch_all_stations(self) -> Result[list[Station]]:
        payload = self._get_json(self.config.stations_path)
        if not payload.ok:
            return payload
        docs = payload.value
        if not isinstance(docs, list):
            logger.warning("Station catalog is not a JSON array (got %s)", type(docs).__name__)
            return Failure(FailureKind.MALFORMED_RESPONSE, "station catalog is not an array")
        stations = [station_from_remote(doc) for doc in docs if isinstance(doc, dict)]
        logger.info("Fetched %d stations", len(stations))
        return Success(stations)


class SensorDirectoryClient(_GiosEndpoint):
    """Fetch the sensor identifiers installed at a station."""

    def fetch_sensor_ids(self, station_id: int) -> Result[list[int]]:
        payload = self._get_json(self.config.sensors_path.format(station_id=station_id))
        if not payload.ok:
            return payload
        docs = payload.value
        if not isinstance(docs, list):
            return Failure(FailureKind.MALFORMED_RESPONSE, "sensor list is not an array")
        sensor_ids = [sid for sid in (sensor_id_from_remote(doc) for doc in docs) if sid is not None]
        return Success(sensor_ids)

    def sensor_ids(self, station_id: int) -> list[int]:
        """Sensor ids for ``station_id``, or an empty list if they cannot be retrieved."""
        result = self.fetch_sensor_ids(station_id)
        return result.value if result.ok else []


class MeasurementFetcher(_GiosEndpoint):
    """Fetch and normalize measurement series per sensor (and per station)."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        session: Optional[requests.Session] = None,
        sensors: Optional[SensorDirectoryClient] = None,
    ):
        super().__init__(config, session)
        self.sensors = sensors or SensorDirectoryClient(self.config, session)

    def fetch_measurements(self, sensor_id: int) -> Result[list[Measurement]]:
        payload = self._get_json(self.config.measurements_path.format(sensor_id=sensor_id))
        if not payload.ok:
            return payload
        doc = payload.value
        if not isinstance(doc, dict):
            return Failure(FailureKind.MALFORMED_RESPONSE, "series payload is not an object")
        try:
            measurements = measurements_from_remote(doc)
        except (TypeError, ValueError) as exc:
            logger.warning("Malformed series for sensor %s: %s", sensor_id, exc)
            return Failure(FailureKind.MALFORMED_RESPONSE, str(exc))
        return Success(measurements)

    def measurements(self, sensor_id: int) -> list[Measurement]:
        """Measurements for one sensor, or an empty list on any failure."""
        result = self.fetch_measurements(sensor_id)
        return result.value if result.ok else []

    def fetch_station(self, station_id: int) -> Result[list[Measurement]]:
        """Concatenate every sensor's series for a station, in sensor-directory order.

        A failing sensor contributes nothing; the others are still fetched. The result is
        a ``Failure`` only when the sensor list itself, or every sensor, could not be
        fetched. A station that answers with no data is ``Success([])``.

        With ``max_workers > 1`` the sensors are fetched from a thread pool that shares
        ``self.session``; only pass a session that is safe to use from several threads
        (or leave it ``None`` to use module-level ``requests`` calls).
        """
        listed = self.sensors.fetch_sensor_ids(station_id)
        if not listed.ok:
            return listed
        sensor_ids = listed.value
        if not sensor_ids:
            return Success([])

        workers = max(1, self.config.max_workers)
        if workers == 1:
            per_sensor = [self.fetch_measurements(sid) for sid in sensor_ids]
        else:
            # map() yields in submission order, so output stays deterministic.
            with cf.ThreadPoolExecutor(max_workers=workers) as pool:
                per_sensor = list(pool.map(self.fetch_measurements, sensor_ids))

        fetched = [result for result in per_sensor if result.ok]
        if not fetched:
            return per_sensor[0]

        results: list[Measurement] = []
        for series in fetched:
            results.extend(series.value)
        logger.info(
            "Fetched %d measurements from %d/%d sensors for station %s",
            len(results),
            len(fetched),
            len(sensor_ids),
            station_id,
        )
        return Success(results)

    def fetch_all_for_station(self, station_id: int) -> list[Measurement]:
        """Measurements for every sensor of a station, or an empty list on failure."""
        result = self.fetch_station(station_id)
        return result.value if result.ok else []
