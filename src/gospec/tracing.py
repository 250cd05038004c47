"""
Timing decorator for the pipeline stages (discovery, scraping, resolution, serialization).
"""

import time
import functools
from typing import Callable, Any
from gospec.logging_config import logger


def trace(func: Callable) -> Callable:
    """
    Decorator that logs stage entry, exit, and execution time.

    Usage:
        @trace
        def discover_packages(root):
            ...

    Failures are logged with their duration and re-raised unchanged.
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        stage = func.__qualname__
        log = logger.bind(stage=stage)
        log.debug(f"TRACE_ENTER: {stage}")

        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            duration = time.perf_counter() - start_time
            log.bind(status="error", duration_seconds=duration).debug(
                f"TRACE_EXIT: {stage} failed after {duration:.4f}s with {type(e).__name__}: {e}"
            )
            raise

        duration = time.perf_counter() - start_time
        log.bind(status="success", duration_seconds=duration).debug(
            f"TRACE_EXIT: {stage} completed in {duration:.4f}s"
        )
        return result

    return wrapper
