"""Sample rides for a fresh store.

Dates are relative to today, so a new database always has a mix of upcoming
rides for the dashboard and past ones for history.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from .stores.base import EventStore
from .utils.dates import today

logger = logging.getLogger(__name__)

# (days from today, fields)
SAMPLE_EVENTS = [
    (7, {
        "title": "Mountain Ride Adventure",
        "description": "Join us for an exciting ride through scenic mountain trails. "
                       "Perfect for all skill levels.",
        "event_time": "06:00 AM",
        "location": "Mountain View Point, Pune",
        "meeting_point": "BUC India Office, Koregaon Park",
    }),
    (30, {
        "title": "City Night Ride",
        "description": "Cruise through the city streets at night and end with a group dinner.",
        "event_time": "08:00 PM",
        "location": "City Center, Mumbai",
        "meeting_point": "Marine Drive, Gateway of India",
    }),
    (14, {
        "title": "Weekend Highway Cruise",
        "description": "A relaxing weekend ride on the highway with refreshments and rest stops.",
        "event_time": "07:00 AM",
        "location": "Mumbai-Pune Expressway",
        "meeting_point": "Toll Plaza, Mumbai End",
    }),
    (-30, {
        "title": "Monsoon Trail Ride",
        "description": "A scenic ride through lush green trails during the monsoon season.",
        "event_time": "06:30 AM",
        "location": "Lonavala Ghats",
        "meeting_point": "Chandni Chowk, Pune",
    }),
    (60, {
        "title": "Republic Day Parade Ride",
        "description": "Annual Republic Day ride. A grand procession through the city.",
        "event_time": "07:30 AM",
        "location": "MG Road, Bangalore",
        "meeting_point": "Cubbon Park",
    }),
    (-90, {
        "title": "Coastal Highway Run",
        "description": "Ride along the Konkan coast and enjoy the sea breeze.",
        "event_time": "05:30 AM",
        "location": "Ratnagiri Coast",
        "meeting_point": "Panvel Plaza",
    }),
    (-120, {
        "title": "Desert Safari Ride",
        "description": "Explore the golden sands of Rajasthan on two wheels.",
        "event_time": "04:00 PM",
        "location": "Jaisalmer Desert",
        "meeting_point": "Sam Sand Dunes",
    }),
    (-150, {
        "title": "Heritage City Tour",
        "description": "A guided motorcycle tour of the palaces and forts of Jaipur.",
        "event_time": "09:00 AM",
        "location": "Jaipur Pink City",
        "meeting_point": "Hawa Mahal",
    }),
    (-180, {
        "title": "Winter Highlands Ride",
        "description": "A chilly ride through the northern highlands.",
        "event_time": "08:00 AM",
        "location": "Shimla Hills",
        "meeting_point": "The Ridge",
    }),
    (-210, {
        "title": "Coffee Estate Trail",
        "description": "Ride through the coffee plantations of Coorg.",
        "event_time": "07:00 AM",
        "location": "Madikeri, Coorg",
        "meeting_point": "Raja's Seat",
    }),
]

def sample_events(base: Optional[date] = None) -> List[Dict[str, Any]]:
    """Sample event fields with dates resolved against today."""
    base = base or today()
    return [
        {**fields, "event_date": base + timedelta(days=offset), "is_active": True}
        for offset, fields in SAMPLE_EVENTS
    ]

def clear_events(store: EventStore) -> int:
    """Delete every event. Returns how many were removed."""
    return sum(1 for event in store.list() if store.delete(event.id))

def seed_events(
    store: EventStore,
    clear: bool = False,
    if_empty: bool = False,
    base: Optional[date] = None,
) -> int:
    """Add the sample events. Returns how many were created."""
    if clear:
        logger.info(f"Cleared {clear_events(store)} events")
    elif if_empty and store.list():
        logger.info("Store already has events, skipping seed")
        return 0

    created = 0
    for fields in sample_events(base):
        event = store.create(fields)
        logger.info(f"Created {event}")
        created += 1
    return created

