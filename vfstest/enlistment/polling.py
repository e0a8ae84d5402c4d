"""
Bounded polling of the product's status text.

The product reports asynchronous work and lock ownership only through its
human-readable status output, so convergence is detected by substring
matching on fresh status snapshots. No parsing is attempted.
"""

import logging
import time
from typing import Callable, Optional

from vfstest.constants import (
    LOCK_HELD_BY,
    STATUS_POLL_QUANTUM_MS,
    ZERO_BACKGROUND_OPERATIONS,
)

logger = logging.getLogger(__name__)


def background_operations_target() -> str:
    return ZERO_BACKGROUND_OPERATIONS


def lock_held_target(process_name: str) -> str:
    return LOCK_HELD_BY.format(process_name)


def wait_for_status(
    fetch_status: Callable[[], Optional[str]],
    max_wait_ms: int,
    target: str,
    sleep: Optional[Callable[[float], None]] = None,
    quantum_ms: int = STATUS_POLL_QUANTUM_MS,
) -> bool:
    """
    Wait until the product status contains ``target``.

    Each attempt sleeps one quantum, fetches a fresh status and adds the
    quantum to the elapsed time. At least one status is always fetched, even
    when ``max_wait_ms`` is zero or negative. A match found on the attempt
    that also crosses the deadline counts as a success.

    Args:
        fetch_status: Returns the current status text
        max_wait_ms: Budget in milliseconds; advisory, nothing is interrupted
        target: Substring the status must contain
        sleep: Sleep function taking seconds; defaults to time.sleep
        quantum_ms: Wait between attempts in milliseconds

    Returns:
        True if the status contained ``target`` before the budget ran out

    Raises:
        ValueError: If ``quantum_ms`` is not positive
    """
    if quantum_ms <= 0:
        raise ValueError(f"Poll quantum must be positive, got {quantum_ms}ms")
    sleep = sleep or time.sleep
    elapsed_ms = 0
    attempts = 0
    while True:
        sleep(quantum_ms / 1000)
        status = fetch_status()
        elapsed_ms += quantum_ms
        attempts += 1

        if status is not None and target in status:
            logger.debug(
                f"Status contained {target!r} after {elapsed_ms}ms ({attempts} attempts)"
            )
            return True

        if elapsed_ms > max_wait_ms:
            logger.warning(
                f"Status did not contain {target!r} within {max_wait_ms}ms "
                f"({attempts} attempts). Last status:\n{status}"
            )
            return False
