"""Event selection and dashboard aggregation."""

from .selector import EventSelection, select_active_event, upcoming_active_events
from .dashboard import DashboardAggregator, DashboardResult, DashboardView

__all__ = [
    'EventSelection',
    'select_active_event',
    'upcoming_active_events',
    'DashboardAggregator',
    'DashboardResult',
    'DashboardView',
]
