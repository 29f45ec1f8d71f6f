"""Fetch-then-fallback-then-persist orchestration for stations and measurements.

``DataService`` also carries the current selection (station list, chosen station,
its measurements and metrics) so a shell can hold one instance instead of globals.

Known limitation: a remote call that succeeds with zero items is treated the same as
a failed call and triggers the snapshot fallback. A station with no sensors is
therefore indistinguishable from an outage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

import requests

from airquality_analysis.config import ServiceConfig, load_service_config
from airquality_analysis.data_access.gios import MeasurementFetcher, StationCatalogClient
from airquality_analysis.data_access.records import Measurement, Station
from airquality_analysis.data_access.results import Failure, FailureKind, Result
from airquality_analysis.data_access.snapshot import LocalSnapshotStore
from airquality_analysis.processing.filtering import available_metrics

logger = logging.getLogger(__name__)

OFFLINE_NOTICE = "offline mode, using cached data"

T = TypeVar("T")


def _fallback_reason(result: Result, empty_detail: str) -> Failure:
    """The remote failure, or a MALFORMED_RESPONSE standing in for an empty success."""
    if not result.ok:
        return result
    return Failure(FailureKind.MALFORMED_RESPONSE, empty_detail)


@dataclass
class FetchOutcome(Generic[T]):
    """Data served to the caller plus whether it came from the local snapshot."""

    value: T
    used_fallback: bool = False
    failure: Optional[Failure] = None


@dataclass
class DataService:
    catalog: StationCatalogClient
    fetcher: MeasurementFetcher
    store: LocalSnapshotStore
    stations: list[Station] = field(default_factory=list)
    station_id: Optional[int] = None
    measurements: list[Measurement] = field(default_factory=list)
    metrics: list[str] = field(default_factory=list)

    @classmethod
    def from_config(
        cls,
        config: Optional[ServiceConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> "DataService":
        cfg = config or load_service_config()
        return cls(
            catalog=StationCatalogClient(cfg, session),
            fetcher=MeasurementFetcher(cfg, session),
            store=LocalSnapshotStore.from_config(cfg),
        )

    def get_stations(self) -> FetchOutcome[list[Station]]:
        result = self.catalog.fetch_all_stations()
        if result.ok and result.value:
            saved = self.store.save_stations(result.value)
            if not saved.ok:
                logger.warning("Could not persist station snapshot: %s", saved.detail)
            return FetchOutcome(result.value)

        failure = _fallback_reason(result, "empty station list")
        stations = self.store.load_stations()
        logger.warning("%s: %d stations from %s", OFFLINE_NOTICE, len(stations), self.store.stations_path)
        return FetchOutcome(stations, used_fallback=True, failure=failure)

    def get_measurements_for_station(self, station_id: int) -> FetchOutcome[list[Measurement]]:
        result = self.fetcher.fetch_station(station_id)
        if result.ok and result.value:
            saved = self.store.save_measurements(station_id, result.value)
            if not saved.ok:
                logger.warning("Could not persist measurements for %s: %s", station_id, saved.detail)
            return FetchOutcome(result.value)

        failure = _fallback_reason(result, f"no measurements for station {station_id}")
        cached = self.store.load_measurements(station_id)
        logger.warning(
            "%s: %d measurements for station %s from %s",
            OFFLINE_NOTICE,
            len(cached),
            station_id,
            self.store.measurements_path,
        )
        return FetchOutcome(cached, used_fallback=True, failure=failure)

    def list_stations(self) -> FetchOutcome[list[Station]]:
        """Refresh the session's station list."""
        outcome = self.get_stations()
        self.stations = outcome.value
        return outcome

    def select_station(self, station_id: int) -> FetchOutcome[list[Measurement]]:
        """Make ``station_id`` current, replacing the previous measurement set wholesale."""
        outcome = self.get_measurements_for_station(station_id)
        self.station_id = station_id
        self.measurements = outcome.value
        self.metrics = available_metrics(outcome.value)
        return outcome
