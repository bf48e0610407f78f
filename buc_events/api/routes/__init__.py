"""Routes package initialization."""

from . import (
    auth,
    dashboard,
    events,
    health,
    registrations
)

__all__ = [
    'auth',
    'dashboard',
    'events',
    'health',
    'registrations'
]
