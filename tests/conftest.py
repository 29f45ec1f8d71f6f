"""Shared fixtures: a throwaway service config and a URL-routed fake HTTP session."""

import json
from unittest.mock import Mock

import pytest
import requests

from airquality_analysis.config import ServiceConfig

BASE_URL = "http://test-api.example.com"


@pytest.fixture
def service_config(tmp_path):
    return ServiceConfig(
        base_url=BASE_URL,
        timeout_s=5.0,
        stations_file=tmp_path / "stations.json",
        measurements_file=tmp_path / "measurements.json",
    )


@pytest.fixture
def make_response():
    def _make(payload=None, status=200, text=None):
        resp = Mock()
        resp.status_code = status
        if status >= 400:
            resp.raise_for_status = Mock(side_effect=requests.HTTPError(f"{status} Error"))
        else:
            resp.raise_for_status = Mock()
        if text is not None:
            resp.text = text
            resp.json = Mock(side_effect=ValueError("Expecting value"))
        else:
            resp.text = json.dumps(payload)
            resp.json = Mock(return_value=payload)
        return resp

    return _make


@pytest.fixture
def routed_session(make_response):
    """Build a fake session whose ``get`` answers by URL path.

    Route values may be a payload, a ready-made response, or an exception instance to raise.
    Unknown paths answer 404.
    """

    def _build(routes):
        session = Mock()

        def _get(url, timeout=None, **kwargs):
            assert timeout is not None, "requests must carry an explicit timeout"
            path = url[len(BASE_URL):]
            if path not in routes:
                return make_response(status=404)
            target = routes[path]
            if isinstance(target, Exception):
                raise target
            if isinstance(target, Mock):
                return target
            return make_response(target)

        session.get = Mock(side_effect=_get)
        return session

    return _build


STATIONS_PAYLOAD = [
    {
        "id": 114,
        "stationName": "Wrocław - Bartnicza",
        "city": {"commune": {"provinceName": "DOLNOŚLĄSKIE"}},
    },
    {
        "id": 117,
        "stationName": "Wrocław - Korzeniowskiego",
        "city": {"commune": {"provinceName": "DOLNOŚLĄSKIE"}},
    },
]

SENSORS_PAYLOAD = [{"id": 642, "stationId": 114}, {"id": 644, "stationId": 114}]

PM10_PAYLOAD = {
    "key": "PM10",
    "values": [
        {"date": "2024-05-02 02:00:00", "value": 21.5},
        {"date": "2024-05-02 01:00:00", "value": None},
        {"date": "2024-05-02 00:00:00", "value": 18.0},
    ],
}

NO2_PAYLOAD = {
    "key": "NO2",
    "values": [
        {"date": "2024-05-02 01:00:00", "value": 12.25},
        {"date": "2024-05-02 00:00:00", "value": 14.0},
    ],
}


@pytest.fixture
def gios_routes():
    return {
        "/pjp-api/rest/station/findAll": STATIONS_PAYLOAD,
        "/pjp-api/rest/station/sensors/114": SENSORS_PAYLOAD,
        "/pjp-api/rest/data/getData/642": PM10_PAYLOAD,
        "/pjp-api/rest/data/getData/644": NO2_PAYLOAD,
    }
