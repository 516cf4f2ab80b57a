"""Operation Deadlines — caller-supplied timeout for every manager operation.

Invariants:
    - Every decorated operation accepts timeout= (seconds); None falls back to
      the manager's default_timeout, and a None default means no deadline
    - Expiry cancels the outstanding store call and raises OperationTimeoutError
    - Task cancellation from outside propagates unchanged
    - Managers commit as their last step, so an expired or cancelled operation
      never commits; the session owner rolls back on close

Design Decisions:
    - asyncio.timeout over wait_for: no extra task, cancellation stays in-task
"""

import asyncio
import functools
import logging

from media_platform.core.errors import OperationTimeoutError

logger = logging.getLogger(__name__)


def with_deadline(operation: str):
    """Decorate an async manager method with a per-call deadline."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, timeout: float | None = None, **kwargs):
            seconds = timeout if timeout is not None else self.default_timeout
            try:
                async with asyncio.timeout(seconds):
                    return await func(self, *args, **kwargs)
            except TimeoutError:
                logger.warning(
                    f"Operation {operation} exceeded {seconds}s deadline",
                    extra={"operation": operation, "error_code": "OPERATION_TIMEOUT"},
                )
                raise OperationTimeoutError(operation, seconds) from None

        return wrapper

    return decorator
