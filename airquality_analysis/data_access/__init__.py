"""Data access layer: GIOŚ clients, local snapshots, and typed results.

``DataService`` lives in ``airquality_analysis.data_access.service``.
"""

from airquality_analysis.data_access.gios import (
    MeasurementFetcher,
    SensorDirectoryClient,
    StationCatalogClient,
)
from airquality_analysis.data_access.records import Measurement, Station
from airquality_analysis.data_access.results import Failure, FailureKind, Success
from airquality_analysis.data_access.snapshot import LocalSnapshotStore

__all__ = [
    "StationCatalogClient",
    "SensorDirectoryClient",
    "MeasurementFetcher",
    "LocalSnapshotStore",
    "Station",
    "Measurement",
    "Success",
    "Failure",
    "FailureKind",
]
