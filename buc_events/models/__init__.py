"""Models package initialization."""

from .event import Event, clean_event_fields
from .registration import Registration, clean_registration_fields, normalize_event_ref

__all__ = [
    'Event',
    'Registration',
    'clean_event_fields',
    'clean_registration_fields',
    'normalize_event_ref',
]
