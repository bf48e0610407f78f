"""Registration model definition."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, Mapping

from ..errors import ValidationError
from ..utils.dates import as_datetime
from .event import Event

@dataclass
class Registration:
    """
    A rider's registration for an event.

    Fields:
        id: Unique identifier, assigned by the store
        event_id: Id of the event registered for. May point at a deleted event.
        name: Registrant name
        email: Contact email (optional)
        phone: Contact phone (optional)
        details: Any other answers from the registration form
        registered_at: When the registration was made, set once
    """
    id: str
    event_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    registered_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            'id': self.id,
            'event_id': self.event_id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'details': dict(self.details),
            'registered_at': self.registered_at.isoformat() if self.registered_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Registration':
        """Build a Registration from a dictionary such as an API response."""
        missing_fields = [name for name in ('id', 'event_id', 'name') if not data.get(name)]
        if missing_fields:
            raise ValueError(f"Missing required fields: {', '.join(missing_fields)}")

        return cls(
            id=str(data['id']),
            event_id=normalize_event_ref(data['event_id']),
            name=data['name'],
            email=data.get('email'),
            phone=data.get('phone'),
            details=dict(data.get('details') or {}),
            registered_at=as_datetime(data.get('registered_at')),
        )

def normalize_event_ref(value: Any) -> Optional[str]:
    """
    Reduce an event reference to its id.

    A reference may arrive as a raw id, an Event, or an embedded event
    object carrying 'id' or '_id'. Returns None when no id can be found.
    """
    if value is None:
        return None
    if isinstance(value, Event):
        return value.id
    if isinstance(value, Mapping):
        return normalize_event_ref(value.get('id', value.get('_id')))
    text = str(value).strip()
    return text or None

def clean_registration_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and normalize registration input.

    Keys other than the known registrant fields are folded into 'details'.

    Raises:
        ValidationError: If the event reference or name is missing
    """
    data = {key: value for key, value in fields.items() if key not in ('id', 'registered_at')}

    event_id = normalize_event_ref(data.pop('event_id', None))
    if not event_id:
        raise ValidationError("Registration must reference an event")

    name = data.pop('name', None)
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Registrant name must be a non-empty string")

    details = data.pop('details', None) or {}
    if not isinstance(details, Mapping):
        raise ValidationError("details must be an object")
    details = dict(details)

    cleaned = {'event_id': event_id, 'name': name.strip()}
    for key in ('email', 'phone'):
        value = data.pop(key, None)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{key} must be a string")
        cleaned[key] = value.strip() if value else None

    # Whatever is left came from the registration form
    details.update(data)
    cleaned['details'] = details
    return cleaned
