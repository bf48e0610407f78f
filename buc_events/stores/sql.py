"""SQL store backend (SQLite in development, PostgreSQL in production)."""

import logging
from typing import Any, Dict, List, Optional

from ..db import Database, DatabaseConfig, DatabaseError, EventRow, RegistrationRow, with_retry
from ..errors import LoadFailure, NotFoundError
from ..models.event import Event, clean_event_fields
from ..models.registration import Registration, clean_registration_fields, normalize_event_ref
from ..utils.dates import now_utc
from ..utils.ids import new_id
from .base import EventStore, RegistrationStore, StoreBackend

logger = logging.getLogger(__name__)

class SqlEventStore(EventStore):
    """Events stored in the 'events' table."""

    def __init__(self, database: Database):
        self.database = database

    def close(self) -> None:
        self.database.dispose()

    @with_retry()
    def _list(self) -> List[Event]:
        with self.database.session() as session:
            return [row.to_model() for row in session.query(EventRow).all()]

    def list(self) -> List[Event]:
        try:
            return self._list()
        except DatabaseError as e:
            logger.error(f"Failed to list events: {e}")
            raise LoadFailure(f"Could not load events: {e}") from e

    def get(self, event_id: str) -> Event:
        try:
            with self.database.session() as session:
                row = session.get(EventRow, event_id)
                event = row.to_model() if row else None
        except DatabaseError as e:
            raise LoadFailure(f"Could not load event {event_id}: {e}") from e
        if event is None:
            raise NotFoundError('Event', event_id)
        return event

    def create(self, fields: Dict[str, Any]) -> Event:
        cleaned = clean_event_fields(fields)
        row = EventRow(id=new_id('evt'), created_at=now_utc(), **cleaned)
        try:
            with self.database.session() as session:
                session.add(row)
                session.flush()
                event = row.to_model()
        except DatabaseError as e:
            logger.error(f"Failed to create event: {e}")
            raise LoadFailure(f"Could not save event: {e}") from e
        logger.info(f"Created event {event.id} ({event.title})")
        return event

    def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        cleaned = clean_event_fields(fields, partial=True)
        event: Optional[Event] = None
        try:
            with self.database.session() as session:
                row = session.get(EventRow, event_id)
                if row is not None:
                    row.apply(cleaned)
                    session.flush()
                    event = row.to_model()
        except DatabaseError as e:
            logger.error(f"Failed to update event {event_id}: {e}")
            raise LoadFailure(f"Could not update event {event_id}: {e}") from e
        if event is None:
            raise NotFoundError('Event', event_id)
        return event

    def delete(self, event_id: str) -> bool:
        try:
            with self.database.session() as session:
                count = session.query(EventRow).filter(EventRow.id == event_id).delete()
        except DatabaseError as e:
            logger.error(f"Failed to delete event {event_id}: {e}")
            raise LoadFailure(f"Could not delete event {event_id}: {e}") from e
        if count:
            logger.info(f"Deleted event {event_id}")
        return bool(count)

class SqlRegistrationStore(RegistrationStore):
    """Registrations stored in the 'registrations' table."""

    def __init__(self, database: Database):
        self.database = database

    def close(self) -> None:
        self.database.dispose()

    @with_retry()
    def _query(self, event_id: Optional[str] = None) -> List[Registration]:
        with self.database.session() as session:
            query = session.query(RegistrationRow)
            if event_id is not None:
                query = query.filter(RegistrationRow.event_id == event_id)
            return [row.to_model() for row in query.order_by(RegistrationRow.registered_at).all()]

    def list(self) -> List[Registration]:
        try:
            return self._query()
        except DatabaseError as e:
            logger.error(f"Failed to list registrations: {e}")
            raise LoadFailure(f"Could not load registrations: {e}") from e

    def list_by_event(self, event_id: Any) -> List[Registration]:
        target = normalize_event_ref(event_id)
        if target is None:
            return []
        try:
            return self._query(target)
        except DatabaseError as e:
            logger.error(f"Failed to list registrations for event {target}: {e}")
            raise LoadFailure(f"Could not load registrations: {e}") from e

    def create(self, fields: Dict[str, Any]) -> Registration:
        cleaned = clean_registration_fields(fields)
        row = RegistrationRow(id=new_id('reg'), registered_at=now_utc(), **cleaned)
        try:
            with self.database.session() as session:
                session.add(row)
                session.flush()
                registration = row.to_model()
        except DatabaseError as e:
            logger.error(f"Failed to create registration: {e}")
            raise LoadFailure(f"Could not save registration: {e}") from e
        logger.info(f"Created registration {registration.id} for event {registration.event_id}")
        return registration

    def delete(self, registration_id: str) -> bool:
        try:
            with self.database.session() as session:
                count = session.query(RegistrationRow).filter(
                    RegistrationRow.id == registration_id
                ).delete()
        except DatabaseError as e:
            logger.error(f"Failed to delete registration {registration_id}: {e}")
            raise LoadFailure(f"Could not delete registration {registration_id}: {e}") from e
        if count:
            logger.info(f"Deleted registration {registration_id}")
        return bool(count)

def create_sql_backend(database_url: Optional[str] = None) -> StoreBackend:
    """Create a SQL backend and make sure its tables exist."""
    database = Database(DatabaseConfig(url=database_url))
    database.ensure_tables_exist()
    return StoreBackend(
        events=SqlEventStore(database),
        registrations=SqlRegistrationStore(database),
        name='sql',
    )
