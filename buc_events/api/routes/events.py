"""Events router module."""

from typing import Dict, List

from fastapi import APIRouter, Depends

from ..deps import get_event_store, require_admin
from ..schemas import EventCreate, EventUpdate
from ...core.selector import upcoming_active_events
from ...stores.base import EventStore
from ...utils.dates import today

router = APIRouter(prefix="/events", tags=["events"])

@router.get("", response_model=List[Dict])
def list_events(active: bool = False, store: EventStore = Depends(get_event_store)):
    """
    Get events.

    With ?active=true only upcoming active events are returned, earliest
    first; otherwise all events, oldest date first.
    """
    events = store.list()
    if active:
        events = upcoming_active_events(events, today())
    else:
        events = sorted(events, key=lambda event: event.event_date)
    return [event.to_dict() for event in events]

@router.get("/{event_id}", response_model=Dict)
def get_event(event_id: str, store: EventStore = Depends(get_event_store)):
    """Get a single event by ID."""
    return store.get(event_id).to_dict()

@router.post("", response_model=Dict, status_code=201, dependencies=[Depends(require_admin)])
def create_event(body: EventCreate, store: EventStore = Depends(get_event_store)):
    """Create an event."""
    return store.create(body.model_dump()).to_dict()

@router.put("/{event_id}", response_model=Dict, dependencies=[Depends(require_admin)])
def update_event(event_id: str, body: EventUpdate, store: EventStore = Depends(get_event_store)):
    """Update the fields sent in the body, leaving the rest untouched."""
    return store.update(event_id, body.model_dump(exclude_unset=True)).to_dict()

@router.delete("/{event_id}", dependencies=[Depends(require_admin)])
def delete_event(event_id: str, store: EventStore = Depends(get_event_store)):
    """
    Delete an event.

    Deleting an event that is already gone still succeeds. Registrations for
    the event are kept.
    """
    return {"deleted": store.delete(event_id)}
