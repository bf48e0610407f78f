"""Event model definition."""

from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Optional, Dict, Any

from ..errors import ValidationError
from ..utils.dates import as_date, as_datetime

# Fields a caller may set on create or update
EDITABLE_FIELDS = (
    'title',
    'description',
    'event_date',
    'event_time',
    'location',
    'meeting_point',
    'banner_url',
    'is_active',
)

# Assigned by the store, never overwritten by an update
IMMUTABLE_FIELDS = ('id', 'created_at')

@dataclass
class Event:
    """
    Event model representing a club ride or meetup.

    Fields:
        id: Unique identifier, assigned by the store
        title: Event title
        event_date: Calendar day the event takes place
        description: Event description (optional)
        event_time: Display string such as '06:00 AM', never compared (optional)
        location: Where the event takes place (optional)
        meeting_point: Where riders gather before leaving (optional)
        banner_url: URL of the uploaded banner image (optional)
        is_active: Inactive events are hidden from active listings but kept
        created_at: When the event was created, set once
    """
    id: str
    title: str
    event_date: date
    description: Optional[str] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    meeting_point: Optional[str] = None
    banner_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data['event_date'] = self.event_date.isoformat()
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Event':
        """
        Build an Event from a dictionary such as an API response.

        Raises:
            ValueError: If required fields are missing or invalid
        """
        required_fields = ['id', 'title', 'event_date']
        missing_fields = [name for name in required_fields if not data.get(name)]
        if missing_fields:
            raise ValueError(f"Missing required fields: {', '.join(missing_fields)}")

        return cls(
            id=str(data['id']),
            title=data['title'],
            event_date=as_date(data['event_date']),
            description=data.get('description'),
            event_time=data.get('event_time'),
            location=data.get('location'),
            meeting_point=data.get('meeting_point'),
            banner_url=data.get('banner_url'),
            is_active=bool(data.get('is_active', True)),
            created_at=as_datetime(data.get('created_at')),
        )

    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, title={self.title}, event_date={self.event_date})"

def clean_event_fields(fields: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate and normalize event input.

    With partial=True only the supplied fields are checked (used for updates).
    Store-assigned fields ('id', 'created_at') are dropped silently.

    Raises:
        ValidationError: On unknown fields, a blank title or an invalid date
    """
    cleaned = {key: value for key, value in fields.items() if key not in IMMUTABLE_FIELDS}

    unknown = sorted(set(cleaned) - set(EDITABLE_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown event fields: {', '.join(unknown)}")

    if not partial:
        missing = [name for name in ('title', 'event_date') if cleaned.get(name) in (None, '')]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        cleaned.setdefault('is_active', True)

    if 'title' in cleaned:
        title = cleaned['title']
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Event title must be a non-empty string")
        cleaned['title'] = title.strip()

    if 'event_date' in cleaned:
        try:
            cleaned['event_date'] = as_date(cleaned['event_date'])
        except ValueError as e:
            raise ValidationError(str(e)) from e

    if 'is_active' in cleaned:
        if not isinstance(cleaned['is_active'], bool):
            raise ValidationError("is_active must be a boolean")

    for name in ('description', 'event_time', 'location', 'meeting_point', 'banner_url'):
        if name in cleaned and cleaned[name] is not None and not isinstance(cleaned[name], str):
            raise ValidationError(f"{name} must be a string")

    return cleaned
