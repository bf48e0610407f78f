"""Registrations router module."""

import csv
import io
import json
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Response

from ..deps import get_event_store, get_registration_store, require_admin
from ..schemas import RegistrationCreate
from ...models.registration import Registration
from ...stores.base import EventStore, RegistrationStore

router = APIRouter(prefix="/registrations", tags=["registrations"])

EXPORT_COLUMNS = ['id', 'event_id', 'event_title', 'name', 'email', 'phone', 'registered_at']
FORMULA_PREFIXES = ('=', '+', '-', '@', '\t', '\r')

def _cell(value):
    """Quote text a spreadsheet would otherwise run as a formula."""
    if isinstance(value, (dict, list)):
        value = json.dumps(value)
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value

def _select(store: RegistrationStore, event_id: Optional[str]) -> List[Registration]:
    return store.list_by_event(event_id) if event_id else store.list()

@router.get("", response_model=List[Dict], dependencies=[Depends(require_admin)])
def list_registrations(
    event_id: Optional[str] = None,
    store: RegistrationStore = Depends(get_registration_store),
):
    """Get all registrations, or only those for ?event_id=."""
    return [registration.to_dict() for registration in _select(store, event_id)]

@router.post("", response_model=Dict, status_code=201)
def create_registration(
    body: RegistrationCreate,
    store: RegistrationStore = Depends(get_registration_store),
):
    """
    Register a rider for an event.

    This endpoint is public: the club site posts the registration form here.
    """
    return store.create(body.model_dump()).to_dict()

@router.get("/export", dependencies=[Depends(require_admin)])
def export_registrations(
    event_id: Optional[str] = None,
    registrations: RegistrationStore = Depends(get_registration_store),
    events: EventStore = Depends(get_event_store),
):
    """Download registrations as CSV. Extra form answers get a column each."""
    rows = _select(registrations, event_id)
    titles = {event.id: event.title for event in events.list()}

    detail_columns = sorted({key for r in rows for key in r.details})
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS + detail_columns)
    for r in rows:
        record = r.to_dict()
        # Orphaned registrations export with an empty title
        record['event_title'] = titles.get(r.event_id, '')
        values = [record[column] or '' for column in EXPORT_COLUMNS]
        values += [r.details.get(column, '') for column in detail_columns]
        writer.writerow([_cell(value) for value in values])

    filename = f"registrations-{event_id}.csv" if event_id else "registrations.csv"
    return Response(
        content=buffer.getvalue(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@router.delete("/{registration_id}", dependencies=[Depends(require_admin)])
def delete_registration(
    registration_id: str,
    store: RegistrationStore = Depends(get_registration_store),
):
    """Delete a registration. Deleting one that is already gone still succeeds."""
    return {"deleted": store.delete(registration_id)}
