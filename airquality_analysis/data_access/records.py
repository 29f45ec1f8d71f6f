"""Station and measurement records plus the field-default tables used to decode them.

Remote payloads and snapshot files are decoded field by field; anything missing falls
back to the named defaults below rather than failing the whole payload.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

UNKNOWN_STATION_ID = -1
UNKNOWN_NAME = "unknown name"
UNKNOWN_PROVINCE = "unknown province"
UNKNOWN_METRIC = "unknown metric"

# GIOŚ field -> default. ``province`` sits at city.commune.provinceName.
REMOTE_STATION_DEFAULTS = {
    "id": UNKNOWN_STATION_ID,
    "stationName": UNKNOWN_NAME,
    "provinceName": UNKNOWN_PROVINCE,
}
REMOTE_SERIES_DEFAULTS = {
    "key": UNKNOWN_METRIC,
}
SNAPSHOT_STATION_DEFAULTS = {
    "id": UNKNOWN_STATION_ID,
    "name": UNKNOWN_NAME,
    "province": UNKNOWN_PROVINCE,
}
SNAPSHOT_MEASUREMENT_DEFAULTS = {
    "name": UNKNOWN_METRIC,
}


@dataclass(frozen=True)
class Station:
    """A fixed-location air-quality monitoring site."""

    id: int
    name: str
    province: str

    @property
    def label(self) -> str:
        return f"{self.name} ({self.province})"

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "province": self.province}


@dataclass(frozen=True)
class Measurement:
    """One timestamped value for one metric.

    ``timestamp`` is kept as the fixed-width "YYYY-MM-DD HH:MM[:SS]" text the source
    returns; string order is chronological order.
    """

    metric: str
    timestamp: str
    value: float

    def to_dict(self) -> dict:
        return {"name": self.metric, "date": self.timestamp, "value": self.value}


def _as_int(raw: Any, default: int) -> int:
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return default


def _as_str(raw: Any, default: str) -> str:
    return raw if isinstance(raw, str) else default


def _as_value(raw: Any) -> Optional[float]:
    """A finite float, or None for null, non-numeric, or NaN/inf readings."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _nested(obj: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def station_from_remote(doc: dict) -> Station:
    """Decode one element of the GIOŚ ``station/findAll`` array."""
    return Station(
        id=_as_int(doc.get("id"), REMOTE_STATION_DEFAULTS["id"]),
        name=_as_str(doc.get("stationName"), REMOTE_STATION_DEFAULTS["stationName"]),
        province=_as_str(
            _nested(doc, "city", "commune", "provinceName"),
            REMOTE_STATION_DEFAULTS["provinceName"],
        ),
    )


def sensor_id_from_remote(doc: Any) -> Optional[int]:
    if not isinstance(doc, dict):
        return None
    raw = doc.get("id")
    if isinstance(raw, bool) or not isinstance(raw, int):
        return None
    return raw


def measurements_from_remote(doc: dict) -> list[Measurement]:
    """Decode a ``data/getData`` payload, skipping unusable values and undated entries."""
    metric = _as_str(doc.get("key"), REMOTE_SERIES_DEFAULTS["key"])
    values = doc.get("values")
    if not isinstance(values, list):
        raise ValueError("series payload has no 'values' array")

    out: list[Measurement] = []
    for entry in values:
        if not isinstance(entry, dict):
            continue
        value = _as_value(entry.get("value"))
        timestamp = entry.get("date")
        if value is None or not isinstance(timestamp, str):
            continue
        out.append(Measurement(metric=metric, timestamp=timestamp, value=value))
    return out


def station_from_snapshot(doc: dict) -> Station:
    return Station(
        id=_as_int(doc.get("id"), SNAPSHOT_STATION_DEFAULTS["id"]),
        name=_as_str(doc.get("name"), SNAPSHOT_STATION_DEFAULTS["name"]),
        province=_as_str(doc.get("province"), SNAPSHOT_STATION_DEFAULTS["province"]),
    )


def measurement_from_snapshot(doc: dict) -> Optional[Measurement]:
    timestamp = doc.get("date")
    value = _as_value(doc.get("value"))
    if not isinstance(timestamp, str) or value is None:
        return None
    return Measurement(
        metric=_as_str(doc.get("name"), SNAPSHOT_MEASUREMENT_DEFAULTS["name"]),
        timestamp=timestamp,
        value=value,
    )
