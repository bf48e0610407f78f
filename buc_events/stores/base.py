"""Store interfaces (repository pattern).

Every backend implements the same two interfaces and returns domain models,
so callers never care whether records live in memory, in a SQL database or
behind a remote API.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List

from ..models.event import Event
from ..models.registration import Registration, normalize_event_ref

class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list(self) -> List[Event]:
        """Return all events. Order carries no meaning."""
        ...

    @abstractmethod
    def get(self, event_id: str) -> Event:
        """
        Return an event by id.

        Raises:
            NotFoundError: If no event has that id
        """
        ...

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> Event:
        """
        Store a new event with a fresh id and created_at.

        Raises:
            ValidationError: If the fields are malformed
        """
        ...

    @abstractmethod
    def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        """
        Shallow-overwrite the given fields of an existing event.

        Raises:
            NotFoundError: If no event has that id
            ValidationError: If the fields are malformed
        """
        ...

    @abstractmethod
    def delete(self, event_id: str) -> bool:
        """
        Remove an event. Registrations pointing at it are left alone.

        Returns True if a record was removed, False if there was none.
        """
        ...

class RegistrationStore(ABC):
    """Interface for registration persistence operations."""

    @abstractmethod
    def list(self) -> List[Registration]:
        """Return all registrations."""
        ...

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> Registration:
        """
        Store a new registration with a fresh id and registered_at.

        Raises:
            ValidationError: If the fields are malformed
        """
        ...

    @abstractmethod
    def delete(self, registration_id: str) -> bool:
        """Remove a registration. Returns True if a record was removed."""
        ...

    def list_by_event(self, event_id: Any) -> List[Registration]:
        """Return registrations whose event reference matches the given event."""
        target = normalize_event_ref(event_id)
        if target is None:
            return []
        return [r for r in self.list() if normalize_event_ref(r.event_id) == target]

@dataclass
class StoreBackend:
    """The pair of stores an application runs against."""

    events: EventStore
    registrations: RegistrationStore
    name: str = ''

    def close(self) -> None:
        """Release backend resources, if any."""
        for store in (self.events, self.registrations):
            close = getattr(store, 'close', None)
            if close:
                close()
