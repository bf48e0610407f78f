"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    DatabaseError,
    DatabaseConnectionError,
    SessionError,
)
from .operations import with_retry
from .tables import Base, EventRow, RegistrationRow

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',

    # Exceptions
    'DatabaseError',
    'DatabaseConnectionError',
    'SessionError',

    # Tables
    'Base',
    'EventRow',
    'RegistrationRow',

    # Utilities
    'with_retry',
]
