"""Reusable decorators for loading and tokenizer utilities."""

import time
import functools
import logging
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(func: Callable) -> Callable:
    """Log execution time for the wrapped callable."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        """Call ``func`` and always log elapsed time."""
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        # log even if the decorated function throws
        finally:
            elapsed = time.perf_counter() - start
            log.info(f"{func.__qualname__} finished in {elapsed:.3f} s")

    return wrapper
