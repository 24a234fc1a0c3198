"""Timing helpers for pipeline stages.

Wraps expensive steps (parsing a transcript, rendering a conversation) and
logs a warning when one of them takes longer than the slow-operation
threshold.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager

from claudist.config.defaults import SLOW_OPERATION_THRESHOLD_MS
from claudist.logging_config import get_logger

__all__ = ["measure"]

logger = get_logger(__name__)


@contextmanager
def measure(
    label: str, threshold_ms: float = SLOW_OPERATION_THRESHOLD_MS
) -> Iterator[None]:
    """Time the enclosed block and log it when it is slow.

    Nothing is logged when the block raises; the exception propagates.

    Args:
        label: Name of the operation for the log record.
        threshold_ms: Duration above which the operation is reported.

    Example:
        with measure("parse_conversation_file"):
            events = parse_conversation_file(path)

    """
    start = time.perf_counter()
    yield
    duration_ms = (time.perf_counter() - start) * 1000
    if duration_ms > threshold_ms:
        logger.warning(
            "slow_operation",
            label=label,
            duration_ms=round(duration_ms, 2),
        )
