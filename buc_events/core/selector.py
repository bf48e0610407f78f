"""Active event selection.

An event is active when it is flagged active and falls on today or later.
The current event is the earliest of those. The dashboard either tracks the
current event or is pinned to one the admin picked; a pinned id that is no
longer upcoming falls back to the current event.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple, Union

from ..models.event import Event
from ..utils.dates import as_date

CURRENT = 'current'

@dataclass(frozen=True)
class EventSelection:
    """Either tracking the current event (event_id is None) or pinned to an id."""

    event_id: Optional[str] = None

    @classmethod
    def current(cls) -> 'EventSelection':
        return cls()

    @classmethod
    def pinned(cls, event_id: str) -> 'EventSelection':
        if not event_id:
            raise ValueError("A pinned selection needs an event id")
        return cls(event_id)

    @classmethod
    def parse(cls, value: Optional[str]) -> 'EventSelection':
        """Read a selection from a query string: 'current' or empty tracks, anything else pins."""
        if value is None or not value.strip() or value.strip() == CURRENT:
            return cls.current()
        return cls.pinned(value.strip())

    @property
    def is_current(self) -> bool:
        return self.event_id is None

    def __str__(self) -> str:
        return CURRENT if self.is_current else self.event_id

def upcoming_active_events(events: Iterable[Event], today: Union[date, datetime]) -> List[Event]:
    """Active events dated today or later, earliest first. Ties keep their input order."""
    today = as_date(today)
    upcoming = [
        event for event in events
        if event.is_active and as_date(event.event_date) >= today
    ]
    # sorted() is stable
    return sorted(upcoming, key=lambda event: as_date(event.event_date))

def resolve_target(upcoming: List[Event], selection: EventSelection) -> Optional[Event]:
    """Pick the event to display from an already filtered and sorted list."""
    current = upcoming[0] if upcoming else None
    if selection.is_current:
        return current
    for event in upcoming:
        if event.id == selection.event_id:
            return event
    return current

def select_active_event(
    events: Iterable[Event],
    today: Union[date, datetime],
    selection: Optional[EventSelection] = None,
) -> Tuple[List[Event], Optional[Event]]:
    """
    Work out the upcoming active events and the one to display.

    Args:
        events: All events, in any order
        today: Reference day; a datetime is truncated to its date
        selection: Current-tracking (default) or pinned selection

    Returns:
        (upcoming active events earliest first, target event or None)
    """
    upcoming = upcoming_active_events(events, today)
    return upcoming, resolve_target(upcoming, selection or EventSelection.current())
