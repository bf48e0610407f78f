# tests/conftest.py

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from buc_events.api.app import create_application
from buc_events.core.dashboard import DashboardAggregator
from buc_events.stores import create_memory_backend
from buc_events.stores.sql import create_sql_backend

ADMIN_KEY = "test-admin-key"
TODAY = date(2026, 3, 10)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def memory_backend():
    return create_memory_backend()


@pytest.fixture
def sql_backend():
    """A fresh in-memory SQLite database per test."""
    backend = create_sql_backend("sqlite://")
    yield backend
    backend.close()


@pytest.fixture(params=["memory", "sql"])
def backend(request):
    """Runs a test once against each local backend."""
    return request.getfixturevalue(f"{request.param}_backend")


@pytest.fixture
def event_fields():
    def build(offset_days=0, **overrides):
        fields = {
            "title": "Sunday Breakfast Ride",
            "description": "Ride out, eat, ride back.",
            "event_date": (TODAY + timedelta(days=offset_days)).isoformat(),
            "event_time": "06:00 AM",
            "location": "Lonavala",
            "meeting_point": "Chandni Chowk",
            "is_active": True,
        }
        fields.update(overrides)
        return fields
    return build


@pytest.fixture
def admin_headers(monkeypatch):
    monkeypatch.setenv("ADMIN_API_KEY", ADMIN_KEY)
    return {"Authorization": f"Bearer {ADMIN_KEY}"}


@pytest.fixture
def client(memory_backend, admin_headers, monkeypatch):
    """
    Provides a TestClient over the in-memory backend with "today" pinned.
    """
    monkeypatch.setattr("buc_events.api.routes.events.today", lambda: TODAY)
    app = create_application(memory_backend)
    app.state.dashboard = DashboardAggregator(
        memory_backend.events, memory_backend.registrations, timeout=5, clock=lambda: TODAY
    )
    with TestClient(app) as test_client:
        yield test_client
