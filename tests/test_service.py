"""Test the fetch-then-fallback-then-persist policy of DataService."""

import json
from unittest.mock import Mock

import requests

from airquality_analysis.data_access.records import Measurement, Station
from airquality_analysis.data_access.results import FailureKind, Success
from airquality_analysis.data_access.service import DataService

SEEDED_STATIONS = [{"id": 1, "name": "Cached Station", "province": "MAZOWIECKIE"}]


def _service(service_config, session):
    return DataService.from_config(service_config, session=session)


def test_get_stations_remote_success_overwrites_snapshot(service_config, routed_session, gios_routes):
    service_config.stations_file.write_text(json.dumps(SEEDED_STATIONS), encoding="utf-8")
    service = _service(service_config, routed_session(gios_routes))

    outcome = service.get_stations()

    assert not outcome.used_fallback
    assert [s.id for s in outcome.value] == [114, 117]
    saved = json.loads(service_config.stations_file.read_text(encoding="utf-8"))
    assert saved == [s.to_dict() for s in outcome.value]


def test_get_stations_remote_failure_serves_snapshot(service_config, routed_session):
    service_config.stations_file.write_text(json.dumps(SEEDED_STATIONS), encoding="utf-8")
    session = routed_session({"/pjp-api/rest/station/findAll": requests.ConnectionError("down")})
    service = _service(service_config, session)

    outcome = service.get_stations()

    assert outcome.used_fallback
    assert outcome.value == [Station(1, "Cached Station", "MAZOWIECKIE")]
    assert outcome.failure.kind is FailureKind.REMOTE_UNAVAILABLE
    # Fallback leaves the snapshot untouched.
    assert json.loads(service_config.stations_file.read_text(encoding="utf-8")) == SEEDED_STATIONS


def test_get_stations_empty_remote_list_falls_back(service_config, routed_session):
    service_config.stations_file.write_text(json.dumps(SEEDED_STATIONS), encoding="utf-8")
    service = _service(service_config, routed_session({"/pjp-api/rest/station/findAll": []}))

    outcome = service.get_stations()

    assert outcome.used_fallback
    assert [s.id for s in outcome.value] == [1]


def test_get_stations_offline_without_snapshot(service_config, routed_session):
    service = _service(service_config, routed_session({}))
    outcome = service.get_stations()
    assert outcome.used_fallback
    assert outcome.value == []


def test_get_measurements_persists_remote_result(service_config, routed_session, gios_routes):
    service = _service(service_config, routed_session(gios_routes))

    outcome = service.get_measurements_for_station(114)

    assert not outcome.used_fallback
    assert len(outcome.value) == 4
    assert service.store.load_measurements(114) == outcome.value


def test_get_measurements_falls_back_per_station(service_config, routed_session):
    cached = [Measurement("PM10", "2024-05-01 00:00", 30.0)]
    other = [Measurement("O3", "2024-05-01 00:00", 50.0)]
    service = _service(service_config, routed_session({}))
    service.store.save_measurements(114, cached)
    service.store.save_measurements(117, other)

    outcome = service.get_measurements_for_station(114)

    assert outcome.used_fallback
    assert outcome.value == cached
    assert outcome.failure is not None


def test_get_measurements_keeps_other_stations_in_store(service_config, routed_session, gios_routes):
    service = _service(service_config, routed_session(gios_routes))
    other = [Measurement("O3", "2024-05-01 00:00", 50.0)]
    service.store.save_measurements(117, other)

    service.get_measurements_for_station(114)

    assert service.store.load_measurements(117) == other


def test_save_failure_does_not_hide_remote_data(service_config):
    catalog = Mock()
    catalog.fetch_all_stations.return_value = Success([Station(1, "A", "B")])
    store = Mock()
    store.save_stations.return_value = Mock(ok=False, detail="disk full")
    service = DataService(catalog=catalog, fetcher=Mock(), store=store)

    outcome = service.get_stations()

    assert not outcome.used_fallback
    assert outcome.value == [Station(1, "A", "B")]
    store.load_stations.assert_not_called()


def test_session_state_follows_selection(service_config, routed_session, gios_routes):
    service = _service(service_config, routed_session(gios_routes))

    service.list_stations()
    assert [s.id for s in service.stations] == [114, 117]

    service.select_station(114)
    assert service.station_id == 114
    assert service.metrics == ["NO2", "PM10"]
    assert len(service.measurements) == 4

    service.select_station(117)
    assert service.station_id == 117
    assert service.measurements == []
    assert service.metrics == []


def test_measurement_fallback_reason_for_empty_remote_data(service_config, routed_session, gios_routes):
    gios_routes["/pjp-api/rest/station/sensors/114"] = []
    service = _service(service_config, routed_session(gios_routes))

    outcome = service.get_measurements_for_station(114)

    assert outcome.used_fallback
    assert outcome.failure.kind is FailureKind.MALFORMED_RESPONSE


def test_measurement_fallback_reason_for_outage(service_config, routed_session, gios_routes):
    gios_routes["/pjp-api/rest/station/sensors/114"] = requests.ConnectionError("down")
    service = _service(service_config, routed_session(gios_routes))

    outcome = service.get_measurements_for_station(114)

    assert outcome.used_fallback
    assert outcome.failure.kind is FailureKind.REMOTE_UNAVAILABLE


def test_station_fallback_reason_for_empty_list(service_config, routed_session):
    service = _service(service_config, routed_session({"/pjp-api/rest/station/findAll": []}))
    assert service.get_stations().failure.kind is FailureKind.MALFORMED_RESPONSE
