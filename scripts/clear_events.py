#!/usr/bin/env python3

import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from buc_events.seed import clear_events
from buc_events.stores import create_backend

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def clear_all_events():
    """Clear all events from the configured store. Registrations are left in place."""
    backend = create_backend()
    try:
        count = clear_events(backend.events)
        logger.info(f"Cleared {count} events from the '{backend.name}' store")
    finally:
        backend.close()

if __name__ == "__main__":
    clear_all_events()
