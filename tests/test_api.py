import csv
import io
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from buc_events.api.app import create_application
from buc_events.errors import LoadFailure
from buc_events.stores import StoreBackend
from buc_events.stores.memory import MemoryEventStore, MemoryRegistrationStore

from .conftest import TODAY


def event_body(offset_days, title="Sunday Breakfast Ride", **extra):
    body = {
        "title": title,
        "event_date": (TODAY + timedelta(days=offset_days)).isoformat(),
        "event_time": "06:00 AM",
        "location": "Lonavala",
    }
    body.update(extra)
    return body


def test_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["store"] == "memory"


def test_event_crud(client, admin_headers):
    created = client.post("/api/events", json=event_body(3), headers=admin_headers)
    assert created.status_code == 201
    event_id = created.json()["id"]

    updated = client.put(f"/api/events/{event_id}", json={"title": "X"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["title"] == "X"
    assert updated.json()["location"] == "Lonavala"

    fetched = client.get(f"/api/events/{event_id}")
    assert fetched.json()["title"] == "X"

    deleted = client.delete(f"/api/events/{event_id}", headers=admin_headers)
    assert deleted.json() == {"deleted": True}
    again = client.delete(f"/api/events/{event_id}", headers=admin_headers)
    assert again.status_code == 200
    assert again.json() == {"deleted": False}

    assert client.get(f"/api/events/{event_id}").status_code == 404


def test_write_endpoints_require_admin_key(client):
    assert client.post("/api/events", json=event_body(3)).status_code == 401
    assert client.post(
        "/api/events", json=event_body(3), headers={"Authorization": "Bearer wrong"}
    ).status_code == 401
    assert client.get("/api/registrations").status_code == 401
    assert client.get("/api/dashboard").status_code == 401


def test_auth_check(client, admin_headers):
    assert client.get("/api/auth/check", headers=admin_headers).json() == {"authenticated": True}


def test_invalid_event_is_rejected(client, admin_headers):
    response = client.post(
        "/api/events", json=event_body(3, event_date="31/12/2026"), headers=admin_headers
    )

    assert response.status_code == 422


def test_update_missing_event_is_404(client, admin_headers):
    response = client.put("/api/events/evt_missing", json={"title": "X"}, headers=admin_headers)

    assert response.status_code == 404


def test_active_events_listing(client, admin_headers):
    for offset, title in [(10, "Later"), (-2, "Past"), (1, "Soon")]:
        client.post("/api/events", json=event_body(offset, title), headers=admin_headers)
    client.post("/api/events", json=event_body(2, "Hidden", is_active=False), headers=admin_headers)

    all_titles = [e["title"] for e in client.get("/api/events").json()]
    active_titles = [e["title"] for e in client.get("/api/events?active=true").json()]

    assert all_titles == ["Past", "Soon", "Hidden", "Later"]
    assert active_titles == ["Soon", "Later"]


def test_public_registration_and_listing(client, admin_headers):
    event_id = client.post("/api/events", json=event_body(3), headers=admin_headers).json()["id"]

    created = client.post("/api/registrations", json={
        "event_id": {"_id": event_id, "title": "Sunday Breakfast Ride"},
        "name": "Asha",
        "phone": "+91 98200 00000",
        "bike": "Classic 350",
    })
    assert created.status_code == 201
    assert created.json()["event_id"] == event_id
    assert created.json()["details"] == {"bike": "Classic 350"}

    listed = client.get(f"/api/registrations?event_id={event_id}", headers=admin_headers)
    assert [r["name"] for r in listed.json()] == ["Asha"]

    registration_id = created.json()["id"]
    assert client.delete(f"/api/registrations/{registration_id}", headers=admin_headers).json() == {"deleted": True}
    assert client.delete(f"/api/registrations/{registration_id}", headers=admin_headers).json() == {"deleted": False}


def test_registration_without_name_is_rejected(client):
    response = client.post("/api/registrations", json={"event_id": "evt_1", "name": ""})

    assert response.status_code == 422


def test_dashboard_tracks_and_pins(client, admin_headers):
    soon = client.post("/api/events", json=event_body(1, "Soon"), headers=admin_headers).json()
    later = client.post("/api/events", json=event_body(8, "Later"), headers=admin_headers).json()
    for name in ("Asha", "Ravi"):
        client.post("/api/registrations", json={"event_id": soon["id"], "name": name})
    client.post("/api/registrations", json={"event_id": later["id"], "name": "Kabir"})

    current = client.get("/api/dashboard", headers=admin_headers).json()
    pinned = client.get(f"/api/dashboard?selection={later['id']}", headers=admin_headers).json()
    unknown = client.get("/api/dashboard?selection=evt_gone", headers=admin_headers).json()

    assert current["ok"] is True
    assert current["view"]["active_event"]["id"] == soon["id"]
    assert current["view"]["registered_count"] == 2
    assert [e["title"] for e in current["view"]["upcoming_active_events"]] == ["Soon", "Later"]
    assert pinned["view"]["active_event"]["id"] == later["id"]
    assert pinned["view"]["registered_count"] == 1
    assert unknown["view"]["active_event"]["id"] == soon["id"]


def test_export_registrations_csv(client, admin_headers):
    event = client.post("/api/events", json=event_body(3, "Export Ride"), headers=admin_headers).json()
    client.post("/api/registrations", json={"event_id": event["id"], "name": "Asha", "bike": "Scram 411"})
    client.post("/api/registrations", json={"event_id": "evt_deleted", "name": "Orphan"})

    response = client.get("/api/registrations/export", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.DictReader(io.StringIO(response.text)))
    by_name = {row["name"]: row for row in rows}
    assert by_name["Asha"]["event_title"] == "Export Ride"
    assert by_name["Asha"]["bike"] == "Scram 411"
    assert by_name["Orphan"]["event_title"] == ""


def test_export_quotes_formula_like_cells(client, admin_headers):
    event = client.post("/api/events", json=event_body(3, "Export Ride"), headers=admin_headers).json()
    client.post("/api/registrations", json={
        "event_id": event["id"],
        "name": '=HYPERLINK("http://x","y")',
        "phone": "+919800000000",
        "note": "@SUM(A1:A2)",
    })

    response = client.get("/api/registrations/export", headers=admin_headers)

    row = next(csv.DictReader(io.StringIO(response.text)))
    assert row["name"] == '\'=HYPERLINK("http://x","y")'
    assert row["phone"] == "'+919800000000"
    assert row["note"] == "'@SUM(A1:A2)"
    assert row["event_title"] == "Export Ride"


class BrokenEventStore(MemoryEventStore):
    def list(self):
        raise LoadFailure("database is down")

    def create(self, fields):
        raise LoadFailure("database is down")


def test_store_failures_are_reported(admin_headers):
    app = create_application(StoreBackend(BrokenEventStore(), MemoryRegistrationStore(), name="broken"))
    client = TestClient(app)

    listed = client.get("/api/events")
    created = client.post("/api/events", json=event_body(2), headers=admin_headers)
    dashboard = client.get("/api/dashboard", headers=admin_headers)

    assert listed.status_code == 503
    assert created.status_code == 503
    assert "not saved" in created.json()["detail"]
    assert dashboard.status_code == 503
    assert dashboard.json()["ok"] is False
    assert dashboard.json()["view"] is None


def test_unknown_timezone_fails_startup(monkeypatch):
    monkeypatch.setenv("TIMEZONE", "Not/AZone")
    app = create_application(StoreBackend(MemoryEventStore(), MemoryRegistrationStore()))

    with pytest.raises(ValueError):
        with TestClient(app):
            pass
