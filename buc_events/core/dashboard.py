"""Dashboard aggregation.

Fetches events and registrations side by side, waits for both, then builds
the view the admin dashboard shows: the upcoming active events, the event
on display and how many riders registered for it.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from ..errors import LoadFailure
from ..models.event import Event
from ..models.registration import normalize_event_ref
from ..stores.base import EventStore, RegistrationStore
from ..utils.dates import today as club_today
from .selector import EventSelection, select_active_event

logger = logging.getLogger(__name__)

@dataclass
class DashboardView:
    """What the dashboard renders."""

    upcoming_active_events: List[Event] = field(default_factory=list)
    active_event: Optional[Event] = None
    registered_count: int = 0
    selection: EventSelection = field(default_factory=EventSelection.current)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'upcoming_active_events': [event.to_dict() for event in self.upcoming_active_events],
            'active_event': self.active_event.to_dict() if self.active_event else None,
            'registered_count': self.registered_count,
            'selection': str(self.selection),
        }

@dataclass
class DashboardResult:
    """
    Outcome of a dashboard load.

    On failure, view is the last view that loaded successfully (None if
    there never was one) and error says what went wrong.
    """

    ok: bool
    view: Optional[DashboardView] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ok': self.ok,
            'view': self.view.to_dict() if self.view else None,
            'error': self.error,
        }

class DashboardAggregator:
    """Builds dashboard views from the event and registration stores."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        timeout: float = 10.0,
        clock: Callable[[], date] = club_today,
    ):
        self.events = events
        self.registrations = registrations
        self.timeout = timeout
        self.clock = clock
        self._last_view: Optional[DashboardView] = None

    @property
    def last_view(self) -> Optional[DashboardView]:
        return self._last_view

    async def compute_dashboard_view(self, selection: Optional[EventSelection] = None) -> DashboardResult:
        """
        Load both stores and build a fresh view.

        Never raises: a failed or timed-out load is reported in the result and
        the last good view is kept as is.
        """
        selection = selection or EventSelection.current()
        try:
            events, registrations = await self._fetch_all()
            upcoming, target = select_active_event(events, self.clock(), selection)
        except Exception as e:
            logger.error(f"Failed to load dashboard data: {e}")
            return DashboardResult(ok=False, view=self._last_view, error=str(e) or type(e).__name__)

        registered_count = 0
        if target is not None:
            # Registrations for deleted events never match and are simply skipped
            registered_count = sum(
                1 for r in registrations if normalize_event_ref(r.event_id) == target.id
            )

        view = DashboardView(
            upcoming_active_events=upcoming,
            active_event=target,
            registered_count=registered_count,
            selection=selection,
        )
        self._last_view = view
        return DashboardResult(ok=True, view=view)

    async def _fetch_all(self):
        """Run both list calls concurrently and wait for both."""
        try:
            return await asyncio.wait_for(
                asyncio.gather(
                    asyncio.to_thread(self.events.list),
                    asyncio.to_thread(self.registrations.list),
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise LoadFailure(f"Store did not respond within {self.timeout}s") from None
