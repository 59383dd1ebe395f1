"""Timing for worker message and task handlers."""
import functools
import logging
import time
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def log_execution_time(func: F) -> F:
    """Log how long each call to ``func`` takes, and whether it raised.

    Durations are logged at INFO under the handler's qualified name so the
    worker log shows which message type or scheduled task was slow. Failures
    are logged at ERROR with the exception type and re-raised unchanged.
    """
    handler_name = func.__qualname__

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error("%s raised %s after %.1f ms: %s", handler_name, type(e).__name__, elapsed_ms, e)
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s finished in %.1f ms", handler_name, elapsed_ms)
        return result

    return cast(F, wrapper)
