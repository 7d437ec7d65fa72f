"""
Stage timing for the color analysis pipeline.

A trimmed-down performance monitor: it measures and logs, it does not collect.
"""

import time
from contextlib import contextmanager
from typing import Any, Iterator

from loguru import logger


@contextmanager
def performance_monitor(operation_name: str, **context: Any) -> Iterator[None]:
    """
    Context manager logging the wall-clock duration of a pipeline stage.

    Args:
        operation_name: Stage name used in the log line
        **context: Extra fields bound to the log record (pixel counts, sizes)
    """
    start_time = time.perf_counter()
    try:
        yield
    except Exception as e:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.bind(**context).error(f"{operation_name} failed after {duration_ms:.2f}ms: {e}")
        raise
    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.bind(**context).debug(f"{operation_name} completed in {duration_ms:.2f}ms")
