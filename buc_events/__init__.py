"""BUC events: event and registration management for the club admin dashboard."""

__version__ = "1.0.0"
