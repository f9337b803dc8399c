"""
Store-level retry for transactions aborted by lock contention.

Only deadlocks and lock-wait timeouts are retried; every other error,
including unique-constraint violations, propagates on the first attempt.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# MySQL error codes
MYSQL_DEADLOCK_ERROR = 1213
MYSQL_LOCK_WAIT_TIMEOUT = 1205
SQLITE_LOCKED_MESSAGE = "database is locked"


def is_deadlock_error(error: Exception) -> bool:
    """
    Check if an exception is a lock contention error worth retrying.

    Args:
        error: The exception to check

    Returns:
        True for MySQL deadlocks/lock-wait timeouts and SQLite busy locks
    """
    if not isinstance(error, (OperationalError, DBAPIError)):
        return False

    # Only the driver error is inspected; str(error) also carries bound parameters
    driver_args = getattr(error.orig, "args", ())
    if not driver_args:
        return False
    code = driver_args[0]
    if isinstance(code, int):
        return code in (MYSQL_DEADLOCK_ERROR, MYSQL_LOCK_WAIT_TIMEOUT)
    return isinstance(code, str) and SQLITE_LOCKED_MESSAGE in code


async def retry_on_deadlock(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Retry a transaction if it fails due to lock contention.

    Uses exponential backoff: base_delay * (2 ** attempt)

    Raises:
        The original exception if max attempts are exceeded or the error is
        not a deadlock.
    """
    for attempt in range(max_attempts):
        try:
            return await func()
        except Exception as e:
            if not is_deadlock_error(e):
                raise

            if attempt == max_attempts - 1:
                logger.error(
                    "Database lock contention persists after max retries",
                    extra={"attempts": max_attempts, "error": str(e)},
                )
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Database lock contention detected, retrying",
                extra={
                    "attempt": attempt + 1,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_on_deadlock called with max_attempts < 1")
