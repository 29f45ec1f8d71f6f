"""Local JSON snapshots of the last successful remote fetch.

Two files: a stations list (JSON array) and a measurement store keyed by station id.
Loads never raise; a missing or corrupt file reads as "no cached data". Saves rewrite
the whole file through a sibling temp file so readers see either the old or the new
content.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional

from airquality_analysis.config import ServiceConfig
from airquality_analysis.data_access.records import (
    Measurement,
    Station,
    measurement_from_snapshot,
    station_from_snapshot,
)
from airquality_analysis.data_access.results import Failure, FailureKind, Result, Success

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Result[Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return Success(json.load(handle))
    except FileNotFoundError:
        return Failure(FailureKind.LOCAL_STORE_UNAVAILABLE, f"{path} does not exist")
    except OSError as exc:
        logger.warning("Cannot read snapshot %s: %s", path, exc)
        return Failure(FailureKind.LOCAL_STORE_UNAVAILABLE, str(exc))
    except ValueError as exc:
        logger.warning("Corrupt snapshot %s: %s", path, exc)
        return Failure(FailureKind.MALFORMED_RESPONSE, str(exc))


def _write_json(path: Path, payload: Any) -> Result[Path]:
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=4, ensure_ascii=False, allow_nan=False)
        os.replace(tmp_name, path)
    except (OSError, ValueError) as exc:
        # ValueError: NaN/inf in the payload, which strict JSON cannot carry.
        logger.warning("Cannot write snapshot %s: %s", path, exc)
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        return Failure(FailureKind.LOCAL_STORE_UNAVAILABLE, str(exc))
    return Success(path)


class LocalSnapshotStore:
    """Persist and retrieve station lists and per-station measurement sets."""

    def __init__(self, stations_path: str | Path, measurements_path: str | Path):
        self.stations_path = Path(stations_path)
        self.measurements_path = Path(measurements_path)

    @classmethod
    def from_config(cls, config: Optional[ServiceConfig] = None) -> "LocalSnapshotStore":
        cfg = config or ServiceConfig()
        return cls(cfg.stations_file, cfg.measurements_file)

    # Stations

    def save_stations(self, stations: Iterable[Station]) -> Result[Path]:
        payload = [station.to_dict() for station in stations]
        result = _write_json(self.stations_path, payload)
        if result.ok:
            logger.debug("Saved %d stations to %s", len(payload), self.stations_path)
        return result

    def load_stations_result(self) -> Result[list[Station]]:
        raw = _read_json(self.stations_path)
        if not raw.ok:
            return raw
        if not isinstance(raw.value, list):
            return Failure(FailureKind.MALFORMED_RESPONSE, "stations snapshot is not an array")
        try:
            stations = [station_from_snapshot(doc) for doc in raw.value if isinstance(doc, dict)]
        except (TypeError, ValueError) as exc:
            return Failure(FailureKind.MALFORMED_RESPONSE, str(exc))
        return Success(stations)

    def load_stations(self) -> list[Station]:
        result = self.load_stations_result()
        return result.value if result.ok else []

    # Measurements

    def _load_store(self) -> dict:
        raw = _read_json(self.measurements_path)
        if raw.ok and isinstance(raw.value, dict):
            return raw.value
        return {}

    def save_measurements(self, station_id: int | str, measurements: Iterable[Measurement]) -> Result[Path]:
        """Replace one station's entry, keeping every other station already stored."""
        store = self._load_store()
        store[str(station_id)] = [m.to_dict() for m in measurements]
        result = _write_json(self.measurements_path, store)
        if result.ok:
            logger.debug(
                "Saved %d measurements for station %s to %s",
                len(store[str(station_id)]),
                station_id,
                self.measurements_path,
            )
        return result

    def load_measurements_result(self, station_id: int | str) -> Result[list[Measurement]]:
        raw = _read_json(self.measurements_path)
        if not raw.ok:
            return raw
        if not isinstance(raw.value, dict):
            return Failure(FailureKind.MALFORMED_RESPONSE, "measurement snapshot is not an object")
        entries = raw.value.get(str(station_id))
        if entries is None:
            return Success([])
        if not isinstance(entries, list):
            return Failure(FailureKind.MALFORMED_RESPONSE, f"entry {station_id} is not an array")
        try:
            decoded = [measurement_from_snapshot(doc) for doc in entries if isinstance(doc, dict)]
        except (TypeError, ValueError) as exc:
            return Failure(FailureKind.MALFORMED_RESPONSE, str(exc))
        return Success([m for m in decoded if m is not None])

    def load_measurements(self, station_id: int | str) -> list[Measurement]:
        result = self.load_measurements_result(station_id)
        return result.value if result.ok else []

    def stored_station_ids(self) -> list[str]:
        return list(self._load_store().keys())
