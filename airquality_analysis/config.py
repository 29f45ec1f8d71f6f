"""Configuration helpers for loading the YAML-driven service settings.

The config file lives under the repository's ``config/`` directory by default. Relative
snapshot paths are resolved against the repository root so the CLI and tests agree on
where cached data lands.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml


REPO_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_DIR = REPO_ROOT / "config"

DEFAULT_BASE_URL = "http://api.gios.gov.pl"
DEFAULT_ENDPOINTS = {
    "stations": "/pjp-api/rest/station/findAll",
    "sensors": "/pjp-api/rest/station/sensors/{station_id}",
    "measurements": "/pjp-api/rest/data/getData/{sensor_id}",
}
DEFAULT_TIMEOUT_S = 10.0
DEFAULT_STATIONS_FILE = "data/stations.json"
DEFAULT_MEASUREMENTS_FILE = "data/measurements.json"


@dataclass
class ServiceConfig:
    """Remote endpoints plus local snapshot locations."""

    base_url: str = DEFAULT_BASE_URL
    stations_path: str = DEFAULT_ENDPOINTS["stations"]
    sensors_path: str = DEFAULT_ENDPOINTS["sensors"]
    measurements_path: str = DEFAULT_ENDPOINTS["measurements"]
    timeout_s: float = DEFAULT_TIMEOUT_S
    max_workers: int = 1
    stations_file: Path = REPO_ROOT / DEFAULT_STATIONS_FILE
    measurements_file: Path = REPO_ROOT / DEFAULT_MEASUREMENTS_FILE

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def _load_yaml(path: Path) -> Any:
    """Load a YAML file and return its contents."""
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def _resolve(path_str: str, root: Path) -> Path:
    path = Path(path_str)
    return path if path.is_absolute() else root / path


def load_service_config(config_path: Optional[Path] = None, root: Optional[Path] = None) -> ServiceConfig:
    """Load remote/snapshot settings from YAML into a ``ServiceConfig``."""
    path = Path(config_path) if config_path else DEFAULT_CONFIG_DIR / "service.yaml"
    data = _load_yaml(path)
    if not isinstance(data, dict) or not isinstance(data.get("service"), dict):
        raise ValueError(f"service config missing expected structure: {path}")

    raw = data["service"]
    endpoints = {**DEFAULT_ENDPOINTS, **(raw.get("endpoints") or {})}
    snapshot = raw.get("snapshot") or {}
    base = root or REPO_ROOT
    max_workers = int(raw.get("max_workers", 1))
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}: {path}")

    return ServiceConfig(
        base_url=raw.get("base_url", DEFAULT_BASE_URL),
        stations_path=endpoints["stations"],
        sensors_path=endpoints["sensors"],
        measurements_path=endpoints["measurements"],
        timeout_s=float(raw.get("timeout_s", DEFAULT_TIMEOUT_S)),
        max_workers=max_workers,
        stations_file=_resolve(snapshot.get("stations_file", DEFAULT_STATIONS_FILE), base),
        measurements_file=_resolve(
            snapshot.get("measurements_file", DEFAULT_MEASUREMENTS_FILE), base
        ),
    )
