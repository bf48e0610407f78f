"""Identifier generation."""

import uuid

def new_id(prefix: str) -> str:
    """Random, collision-resistant identifier such as 'evt_3f2a...'."""
    return f"{prefix}_{uuid.uuid4().hex}"
