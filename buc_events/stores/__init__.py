"""Store package initialization.

Pick a backend with create_backend(); everything above this package only
sees the EventStore and RegistrationStore interfaces.
"""

import logging
from typing import Optional

from ..config.settings import StoreConfig
from .base import EventStore, RegistrationStore, StoreBackend
from .memory import MemoryEventStore, MemoryRegistrationStore, create_memory_backend

logger = logging.getLogger(__name__)

def create_backend(config: Optional[StoreConfig] = None) -> StoreBackend:
    """
    Create the store backend described by the configuration.

    Raises:
        ValueError: If the configuration is invalid
    """
    config = config or StoreConfig()
    config.validate()

    if config.backend == 'memory':
        backend = create_memory_backend()
    elif config.backend == 'http':
        from .http import create_http_backend
        backend = create_http_backend(config.api_url, timeout=config.timeout, api_key=config.api_key)
    else:
        from .sql import create_sql_backend
        backend = create_sql_backend(config.database_url)

    logger.info(f"Using '{backend.name}' store backend")
    return backend

__all__ = [
    'EventStore',
    'RegistrationStore',
    'StoreBackend',
    'MemoryEventStore',
    'MemoryRegistrationStore',
    'create_backend',
    'create_memory_backend',
]
