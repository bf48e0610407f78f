"""ORM tables for the SQL store backend."""

from typing import Dict, Any

from sqlalchemy import Column, String, Text, Date, DateTime, Boolean, JSON
from sqlalchemy.orm import declarative_base

from ..models.event import Event
from ..models.registration import Registration
from ..utils.dates import as_datetime

Base = declarative_base()

class EventRow(Base):
    """
    Stored event.

    Mirrors the Event model field for field; see models/event.py.
    """
    __tablename__ = 'events'

    id = Column(String(64), primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    event_date = Column(Date, nullable=False, index=True)
    event_time = Column(String)
    location = Column(String)
    meeting_point = Column(String)
    banner_url = Column(String)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    def apply(self, fields: Dict[str, Any]) -> None:
        """Shallow-overwrite the given columns."""
        for key, value in fields.items():
            setattr(self, key, value)

    def to_model(self) -> Event:
        return Event(
            id=self.id,
            title=self.title,
            event_date=self.event_date,
            description=self.description,
            event_time=self.event_time,
            location=self.location,
            meeting_point=self.meeting_point,
            banner_url=self.banner_url,
            is_active=bool(self.is_active),
            created_at=as_datetime(self.created_at),
        )

    def __str__(self) -> str:
        return f"EventRow(id={self.id}, title={self.title}, event_date={self.event_date})"

class RegistrationRow(Base):
    """
    Stored registration.

    event_id is deliberately not a foreign key: registrations outlive the
    events they point at.
    """
    __tablename__ = 'registrations'

    id = Column(String(64), primary_key=True)
    event_id = Column(String(64), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String)
    phone = Column(String)
    details = Column(JSON, nullable=False, default=dict)
    registered_at = Column(DateTime(timezone=True), nullable=False)

    def to_model(self) -> Registration:
        return Registration(
            id=self.id,
            event_id=self.event_id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            details=dict(self.details or {}),
            registered_at=as_datetime(self.registered_at),
        )
