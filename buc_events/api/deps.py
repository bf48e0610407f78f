"""Shared route dependencies."""

from typing import Optional

from fastapi import Header, HTTPException, Request

from ..config.settings import AdminConfig, DEFAULT_STORE_TIMEOUT
from ..core.dashboard import DashboardAggregator
from ..stores.base import EventStore, RegistrationStore, StoreBackend

def get_backend(request: Request) -> StoreBackend:
    backend = getattr(request.app.state, 'backend', None)
    if backend is None:
        raise HTTPException(status_code=503, detail="Store backend not initialized")
    return backend

def get_event_store(request: Request) -> EventStore:
    return get_backend(request).events

def get_registration_store(request: Request) -> RegistrationStore:
    return get_backend(request).registrations

def get_dashboard(request: Request) -> DashboardAggregator:
    """One aggregator per app, so the last good view survives between requests."""
    state = request.app.state
    if getattr(state, 'dashboard', None) is None:
        backend = get_backend(request)
        state.dashboard = DashboardAggregator(
            backend.events,
            backend.registrations,
            timeout=getattr(state, 'store_timeout', DEFAULT_STORE_TIMEOUT),
        )
    return state.dashboard

def require_admin(authorization: Optional[str] = Header(None)) -> None:
    """Reject requests without the admin key in the Authorization header."""
    admin_config = AdminConfig()
    try:
        admin_config.validate()
    except ValueError:
        raise HTTPException(status_code=503, detail="Admin access is not configured")

    if not admin_config.verify_auth(authorization):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization"
        )
