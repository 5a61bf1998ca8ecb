"""Retry decorator for database operations."""

import logging
import time
import functools
from sqlalchemy.exc import OperationalError, InterfaceError

logger = logging.getLogger(__name__)


def retry(tries: int = 3, delay: float = 2.0):
    """Decorator to retry on database errors."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            for attempt in range(1, tries + 1):
                try:
                    return fn(*args, **kwargs)
                except (OperationalError, InterfaceError) as e:
                    if attempt == tries:
                        raise
                    logger.warning('%s retry %d/%d - %s', fn.__name__, attempt, tries, e)
                    time.sleep(delay)
        return wrapper
    return decorator
