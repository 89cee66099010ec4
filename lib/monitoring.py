# =============================================================================
# lib/monitoring.py - Timing and Error Logging for Actions
# =============================================================================
# Wraps a callable so every call logs its duration on success and the error
# on failure. Errors are always re-raised.
#
# Usage:
#   @with_monitoring("createInvoice")
#   def create_invoice(...): ...
# =============================================================================

import functools
import logging
import time
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def with_monitoring(function_name: str, sink: logging.Logger | None = None) -> Callable[[F], F]:
    """
    Decorator that logs success timing and failures of the wrapped callable.

    Args:
        function_name: Label used in log lines
        sink: Logger to write to (defaults to this module's logger)
    """
    log = sink or logger

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                log.error(f"[{function_name}] Error: {e}")
                raise
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            log.info(f"[{function_name}] Success in {elapsed_ms:.0f}ms")
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
