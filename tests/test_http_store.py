from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from buc_events.errors import LoadFailure, NotFoundError, ValidationError
from buc_events.stores.http import create_http_backend

EVENT_JSON = {
    "id": "evt_1",
    "title": "City Night Ride",
    "description": None,
    "event_date": "2026-04-01",
    "event_time": "08:00 PM",
    "location": "Mumbai",
    "meeting_point": None,
    "banner_url": None,
    "is_active": True,
    "created_at": "2026-03-01T10:00:00+00:00",
}


def response(status_code=200, body=None):
    mock = MagicMock(spec=requests.Response)
    mock.status_code = status_code
    mock.json.return_value = body
    mock.text = ""
    if status_code >= 400:
        mock.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status_code}")
    return mock


@pytest.fixture
def backend():
    backend = create_http_backend("https://api.example.com/", timeout=3, api_key="secret")
    backend.events.client.session = MagicMock()
    return backend


@pytest.fixture
def session(backend):
    return backend.events.client.session


def test_list_events_parses_response(backend, session):
    session.request.return_value = response(body=[EVENT_JSON])

    events = backend.events.list()

    assert events[0].id == "evt_1"
    assert events[0].event_date == date(2026, 4, 1)
    session.request.assert_called_once_with("GET", "https://api.example.com/api/events", timeout=3)


def test_create_sends_dates_as_iso_strings(backend, session):
    session.request.return_value = response(201, EVENT_JSON)

    backend.events.create({"title": "City Night Ride", "event_date": date(2026, 4, 1)})

    _, kwargs = session.request.call_args
    assert kwargs["json"]["event_date"] == "2026-04-01"
    assert kwargs["timeout"] == 3


def test_missing_event_raises_not_found(backend, session):
    session.request.return_value = response(404, {"detail": "Event 'evt_9' not found"})

    with pytest.raises(NotFoundError):
        backend.events.update("evt_9", {"title": "X"})


def test_rejected_input_raises_validation_error(backend, session):
    session.request.return_value = response(422, {"detail": "Event title must be a non-empty string"})

    with pytest.raises(ValidationError, match="title"):
        backend.events.create({"title": "", "event_date": "2026-04-01"})


def test_timeout_raises_load_failure(backend, session):
    session.request.side_effect = requests.Timeout("read timed out")

    with pytest.raises(LoadFailure):
        backend.events.list()


def test_server_error_raises_load_failure(backend, session):
    session.request.return_value = response(500, {"detail": "boom"})

    with pytest.raises(LoadFailure):
        backend.registrations.list()


def test_delete_of_missing_registration_is_not_an_error(backend, session):
    session.request.return_value = response(404, {"detail": "gone"})

    assert backend.registrations.delete("reg_1") is False


def test_list_by_event_sends_normalized_id(backend, session):
    session.request.return_value = response(body=[{
        "id": "reg_1",
        "event_id": "evt_1",
        "name": "Asha",
        "details": {},
        "registered_at": "2026-03-02T09:00:00Z",
    }])

    registrations = backend.registrations.list_by_event({"_id": "evt_1"})

    assert [r.id for r in registrations] == ["reg_1"]
    _, kwargs = session.request.call_args
    assert kwargs["params"] == {"event_id": "evt_1"}
