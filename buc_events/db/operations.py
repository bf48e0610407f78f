"""Retry for store reads that hit a dropped or busy database connection."""

import logging
import time
from functools import wraps
from typing import Callable

from sqlalchemy.exc import OperationalError

from .db_core import DatabaseConnectionError

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (OperationalError, DatabaseConnectionError)

def with_retry(attempts: int = 3, delay: float = 0.1) -> Callable:
    """
    Retry a read on connection-level errors, doubling the pause each time.

    The last attempt is made outside the loop so its error reaches the caller
    untouched. Writes are never wrapped: a retried insert could land twice.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            pause = delay
            for attempt in range(1, attempts):
                try:
                    return func(*args, **kwargs)
                except RETRYABLE_ERRORS as e:
                    logger.warning(f"{func.__name__} failed ({e}), retry {attempt}/{attempts - 1} in {pause}s")
                    time.sleep(pause)
                    pause *= 2
            return func(*args, **kwargs)
        return wrapper
    return decorator
