import json
from unittest.mock import MagicMock, patch

import requests

from reservation_calendar import store

RECORD = {"id": "A", "apartmentId": "apt_1", "checkIn": "2026-01-20", "checkOut": "2026-01-22", "status": "booked"}


def test_parse_reservations_list():
    reservations = store.parse_reservations([RECORD])
    assert len(reservations) == 1
    assert reservations[0].apartment_id == "apt_1"
    assert reservations[0].check_in == "2026-01-20"


def test_parse_reservations_wrapped_object():
    reservations = store.parse_reservations({"reservations": [RECORD]})
    assert [r.id for r in reservations] == ["A"]


def test_parse_reservations_skips_invalid_records():
    missing_status = {k: v for k, v in RECORD.items() if k != "status"}
    bad_date = {**RECORD, "id": "B", "checkOut": "2026-02-30"}
    reservations = store.parse_reservations([RECORD, missing_status, bad_date, "junk"])
    assert [r.id for r in reservations] == ["A"]


def test_parse_reservations_coerces_numeric_ids():
    reservations = store.parse_reservations([{**RECORD, "id": 42}])
    assert reservations[0].id == "42"


def test_parse_reservations_unexpected_format():
    assert store.parse_reservations("nope") == []


def test_load_reservations_from_file(tmp_path):
    path = tmp_path / "reservations.json"
    path.write_text(json.dumps([RECORD]))
    assert [r.id for r in store.load_reservations_from_file(str(path))] == ["A"]


def test_load_reservations_from_missing_file(tmp_path):
    assert store.load_reservations_from_file(str(tmp_path / "missing.json")) == []


def test_load_reservations_from_corrupt_file(tmp_path):
    path = tmp_path / "reservations.json"
    path.write_text("{not json")
    assert store.load_reservations_from_file(str(path)) == []


def test_load_reservations_from_non_utf8_file(tmp_path):
    path = tmp_path / "reservations.json"
    path.write_bytes(b'[{"id": "\xff\xfe"}]')
    assert store.load_reservations_from_file(str(path)) == []


@patch("reservation_calendar.store.requests.get")
def test_fetch_reservations_success(mock_get):
    mock_response = MagicMock()
    mock_response.raise_for_status.return_value = None
    mock_response.json.return_value = [RECORD]
    mock_get.return_value = mock_response

    reservations = store.fetch_reservations("http://fake.url")
    assert [r.id for r in reservations] == ["A"]
    mock_get.assert_called_once()


@patch("reservation_calendar.store.requests.get")
def test_fetch_reservations_failure(mock_get):
    mock_get.side_effect = requests.exceptions.RequestException("Network error")
    assert store.fetch_reservations("http://fake.url") == []


@patch("reservation_calendar.store.fetch_reservations")
@patch("reservation_calendar.store.config")
def test_load_reservations_prefers_url(mock_config, mock_fetch):
    mock_config.RESERVATIONS_URL = "http://fake.url"
    mock_fetch.return_value = []
    store.load_reservations()
    mock_fetch.assert_called_once_with("http://fake.url")


@patch("reservation_calendar.store.load_reservations_from_file")
@patch("reservation_calendar.store.config")
def test_load_reservations_falls_back_to_file(mock_config, mock_load_file):
    mock_config.RESERVATIONS_URL = None
    mock_config.RESERVATIONS_FILE = "reservations.json"
    mock_load_file.return_value = []
    store.load_reservations()
    mock_load_file.assert_called_once_with("reservations.json")
