"""In-memory store backend, used for tests and local demos."""

import logging
import threading
from dataclasses import replace
from typing import Any, Dict, List

from ..errors import NotFoundError
from ..models.event import Event, clean_event_fields
from ..models.registration import Registration, clean_registration_fields
from ..utils.dates import now_utc
from ..utils.ids import new_id
from .base import EventStore, RegistrationStore, StoreBackend

logger = logging.getLogger(__name__)

class MemoryEventStore(EventStore):
    """Events kept in a dict keyed by id. Safe to share between threads."""

    def __init__(self):
        self._events: Dict[str, Event] = {}
        self._lock = threading.Lock()

    def list(self) -> List[Event]:
        with self._lock:
            return [replace(event) for event in self._events.values()]

    def get(self, event_id: str) -> Event:
        with self._lock:
            event = self._events.get(event_id)
        if event is None:
            raise NotFoundError('Event', event_id)
        return replace(event)

    def create(self, fields: Dict[str, Any]) -> Event:
        cleaned = clean_event_fields(fields)
        event = Event(id=new_id('evt'), created_at=now_utc(), **cleaned)
        with self._lock:
            self._events[event.id] = event
        logger.info(f"Created event {event.id} ({event.title})")
        return replace(event)

    def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        cleaned = clean_event_fields(fields, partial=True)
        with self._lock:
            if event_id not in self._events:
                raise NotFoundError('Event', event_id)
            event = replace(self._events[event_id], **cleaned)
            self._events[event_id] = event
        return replace(event)

    def delete(self, event_id: str) -> bool:
        with self._lock:
            removed = self._events.pop(event_id, None) is not None
        if removed:
            logger.info(f"Deleted event {event_id}")
        return removed

class MemoryRegistrationStore(RegistrationStore):
    """Registrations kept in a dict keyed by id. Safe to share between threads."""

    def __init__(self):
        self._registrations: Dict[str, Registration] = {}
        self._lock = threading.Lock()

    def list(self) -> List[Registration]:
        with self._lock:
            return [self._copy(r) for r in self._registrations.values()]

    def create(self, fields: Dict[str, Any]) -> Registration:
        cleaned = clean_registration_fields(fields)
        registration = Registration(id=new_id('reg'), registered_at=now_utc(), **cleaned)
        with self._lock:
            self._registrations[registration.id] = registration
        logger.info(f"Created registration {registration.id} for event {registration.event_id}")
        return self._copy(registration)

    def delete(self, registration_id: str) -> bool:
        with self._lock:
            removed = self._registrations.pop(registration_id, None) is not None
        if removed:
            logger.info(f"Deleted registration {registration_id}")
        return removed

    @staticmethod
    def _copy(registration: Registration) -> Registration:
        return replace(registration, details=dict(registration.details))

def create_memory_backend() -> StoreBackend:
    return StoreBackend(
        events=MemoryEventStore(),
        registrations=MemoryRegistrationStore(),
        name='memory',
    )
