"""Shared logging helpers for timed operations.

USAGE:
    from playdeck.infrastructure.observability.logger_template import log_operation

    async with log_operation(logger, "playlist_read", size=12):
        await read_playlist()
"""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any


# Yo, this wraps any awaited work with start/end logs and a duration_ms field. On failure
# it logs "<operation>.failed" with the error type and RE-RAISES - it never swallows.
@asynccontextmanager
async def log_operation(
    logger: logging.Logger,
    operation: str,
    **context: Any,
) -> AsyncIterator[None]:
    """Context manager for logging operation start/end with automatic timing.

    Logs:
    - {operation}.started with context fields (DEBUG)
    - {operation}.completed with context + duration_ms (INFO)
    - {operation}.failed with context + duration_ms + error details (ERROR)

    Args:
        logger: Module logger
        operation: Operation name (e.g., "playlist_read", "bulk_add")
        **context: Additional fields to include in logs (e.g., track_count=12)
    """
    start = time.time()
    logger.debug(f"{operation}.started", extra=context)

    try:
        yield
    except Exception as e:
        duration_ms = int((time.time() - start) * 1000)
        logger.error(
            f"{operation}.failed",
            extra={
                **context,
                "duration_ms": duration_ms,
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )
        raise

    duration_ms = int((time.time() - start) * 1000)
    logger.info(
        f"{operation}.completed",
        extra={**context, "duration_ms": duration_ms},
    )


def log_slow_operation(
    logger: logging.Logger,
    operation: str,
    duration_ms: int,
    threshold_ms: int = 1000,
    **context: Any,
) -> None:
    """Log a warning if an operation exceeded its threshold.

    Args:
        logger: Module logger
        operation: Operation name
        duration_ms: Actual operation duration
        threshold_ms: Threshold for "slow" (default: 1000ms)
        **context: Additional fields (e.g., listing="artists")
    """
    if duration_ms > threshold_ms:
        logger.warning(
            "operation.slow",
            extra={
                **context,
                "operation": operation,
                "duration_ms": duration_ms,
                "threshold_ms": threshold_ms,
            },
        )
