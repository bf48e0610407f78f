import threading
from datetime import date

import pytest

from buc_events.errors import NotFoundError, ValidationError


# --- Event store ---

def test_create_then_list_contains_the_event(backend, event_fields):
    fields = event_fields(5)

    created = backend.events.create(fields)

    listed = {event.id: event for event in backend.events.list()}
    assert created.id in listed
    stored = listed[created.id]
    assert stored.title == fields["title"]
    assert stored.description == fields["description"]
    assert stored.event_date == date.fromisoformat(fields["event_date"])
    assert stored.event_time == fields["event_time"]
    assert stored.location == fields["location"]
    assert stored.meeting_point == fields["meeting_point"]
    assert stored.is_active is True
    assert stored.created_at is not None


def test_created_ids_are_unique(backend, event_fields):
    created = [backend.events.create(event_fields(i)) for i in range(20)]

    assert len({event.id for event in created}) == 20


def test_update_changes_only_given_fields(backend, event_fields):
    created = backend.events.create(event_fields(5))

    backend.events.update(created.id, {"title": "X"})

    stored = backend.events.get(created.id)
    assert stored.title == "X"
    assert stored.description == created.description
    assert stored.event_date == created.event_date
    assert stored.location == created.location
    assert stored.meeting_point == created.meeting_point
    assert stored.is_active == created.is_active
    assert stored.created_at == created.created_at


def test_update_ignores_id_and_created_at(backend, event_fields):
    created = backend.events.create(event_fields(5))

    updated = backend.events.update(
        created.id, {"id": "hijack", "created_at": "2000-01-01T00:00:00Z", "is_active": False}
    )

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.is_active is False


def test_update_missing_event_raises_not_found(backend):
    with pytest.raises(NotFoundError):
        backend.events.update("evt_missing", {"title": "X"})


def test_get_missing_event_raises_not_found(backend):
    with pytest.raises(NotFoundError):
        backend.events.get("evt_missing")


def test_delete_event_is_idempotent(backend, event_fields):
    created = backend.events.create(event_fields(5))

    assert backend.events.delete(created.id) is True
    assert backend.events.delete(created.id) is False
    assert backend.events.list() == []


def test_event_date_accepts_iso_datetime(backend, event_fields):
    created = backend.events.create(event_fields(event_date="2026-04-01T18:30:00Z"))

    assert created.event_date == date(2026, 4, 1)


@pytest.mark.parametrize("overrides", [
    {"title": "   "},
    {"event_date": "not-a-date"},
    {"event_date": None},
    {"colour": "red"},
    {"is_active": "yes"},
])
def test_create_rejects_bad_fields(backend, event_fields, overrides):
    with pytest.raises(ValidationError):
        backend.events.create(event_fields(1, **overrides))

    assert backend.events.list() == []


def test_update_rejects_blank_title(backend, event_fields):
    created = backend.events.create(event_fields(1))

    with pytest.raises(ValidationError):
        backend.events.update(created.id, {"title": ""})

    assert backend.events.get(created.id).title == created.title


# --- Registration store ---

def test_registration_create_assigns_id_and_timestamp(backend):
    registration = backend.registrations.create({
        "event_id": "evt_1",
        "name": "Asha",
        "email": "asha@example.com",
        "bike": "Himalayan 450",
    })

    assert registration.id.startswith("reg_")
    assert registration.registered_at is not None
    assert registration.event_id == "evt_1"
    assert registration.details == {"bike": "Himalayan 450"}
    assert [r.id for r in backend.registrations.list()] == [registration.id]


@pytest.mark.parametrize("reference", [
    "evt_1",
    {"id": "evt_1", "title": "Populated"},
    {"_id": "evt_1"},
])
def test_registration_event_reference_is_normalized(backend, reference):
    backend.registrations.create({"event_id": reference, "name": "Ravi"})
    backend.registrations.create({"event_id": "evt_2", "name": "Meera"})

    matches = backend.registrations.list_by_event("evt_1")

    assert [r.name for r in matches] == ["Ravi"]
    assert matches[0].event_id == "evt_1"


def test_list_by_event_accepts_an_embedded_event(backend):
    backend.registrations.create({"event_id": "evt_1", "name": "Ravi"})

    assert len(backend.registrations.list_by_event({"_id": "evt_1"})) == 1
    assert backend.registrations.list_by_event(None) == []


def test_registration_requires_event_and_name(backend):
    with pytest.raises(ValidationError):
        backend.registrations.create({"name": "Nobody"})
    with pytest.raises(ValidationError):
        backend.registrations.create({"event_id": "evt_1", "name": " "})


def test_registration_delete_twice_does_not_raise(backend):
    registration = backend.registrations.create({"event_id": "evt_1", "name": "Ravi"})

    assert backend.registrations.delete(registration.id) is True
    assert backend.registrations.delete(registration.id) is False
    assert backend.registrations.list() == []


def test_deleting_event_keeps_its_registrations(backend, event_fields):
    event = backend.events.create(event_fields(3))
    backend.registrations.create({"event_id": event.id, "name": "Ravi"})

    backend.events.delete(event.id)

    orphans = backend.registrations.list_by_event(event.id)
    assert [r.name for r in orphans] == ["Ravi"]


def test_returned_records_are_copies(memory_backend, event_fields):
    created = memory_backend.events.create(event_fields(3))

    created.title = "Changed outside the store"

    assert memory_backend.events.get(created.id).title == "Sunday Breakfast Ride"


def test_memory_stores_tolerate_concurrent_writes_and_reads(memory_backend, event_fields):
    events = memory_backend.events
    registrations = memory_backend.registrations
    event = events.create(event_fields(3))
    errors = []

    def write():
        try:
            for i in range(200):
                registrations.create({"event_id": event.id, "name": f"Rider {i}"})
                events.create(event_fields(i % 30))
        except Exception as e:
            errors.append(e)

    def read():
        try:
            for _ in range(200):
                registrations.list()
                events.list()
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=write) for _ in range(2)]
    threads += [threading.Thread(target=read) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(registrations.list_by_event(event.id)) == 400
    assert len(events.list()) == 401
