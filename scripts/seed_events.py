#!/usr/bin/env python3

"""
Seed the configured event store with sample rides.

Common use cases:
    # Add sample events to the configured store
    python scripts/seed_events.py

    # Wipe existing events first (registrations are kept)
    python scripts/seed_events.py --clear

    # Only seed when the store has no events yet
    python scripts/seed_events.py --if-empty
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from buc_events.seed import seed_events
from buc_events.stores import create_backend
from buc_events.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the event store with sample rides")
    parser.add_argument('--clear', action='store_true', help="Delete existing events first")
    parser.add_argument('--if-empty', action='store_true', help="Only seed when there are no events")
    args = parser.parse_args()

    setup_logging()
    backend = create_backend()
    try:
        count = seed_events(backend.events, clear=args.clear, if_empty=args.if_empty)
        logger.info(f"Seeded {count} events into the '{backend.name}' store")
    finally:
        backend.close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
