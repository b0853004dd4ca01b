"""
Bounded retry with jittered backoff for remote operations.
"""
import asyncio
import random
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ..models.sync_config import DEFAULT_RETRY_ATTEMPTS
from ..utils.logger import get_logger
from ..utils.validation import parse_positive_int

log = get_logger(__name__)

T = TypeVar('T')


def resolve_max_attempts(value: Any) -> int:
    """
    Map a configured ``retry`` value to an attempt count.

    Non-positive and non-integer values fall back to the default of 5.

    Example:
        >>> resolve_max_attempts("3")
        3
        >>> resolve_max_attempts(0)
        5
    """
    return parse_positive_int(value, DEFAULT_RETRY_ATTEMPTS)


class RetryPolicy:
    """
    Retries an async operation a bounded number of times.

    Error classes are not distinguished: every failure is retried until
    the attempt budget is spent, then the last error is re-raised as is.

    Args:
        max_attempts: Attempt budget; invalid values fall back to 5
        base_delay: Upper bound in seconds of the first backoff
        max_delay: Cap of the backoff upper bound
        sleep: Coroutine function used to wait between attempts
    """

    def __init__(
        self,
        max_attempts: Any = DEFAULT_RETRY_ATTEMPTS,
        base_delay: float = 0.5,
        max_delay: float = 5.0,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.max_attempts = resolve_max_attempts(max_attempts)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._sleep = sleep or asyncio.sleep

    def backoff(self, attempt: int) -> float:
        """Randomized delay to wait after failed *attempt* (1-based)."""
        upper = min(self.max_delay, self.base_delay * (2 ** (attempt - 1)))
        return random.uniform(0, upper)

    async def run(self, operation: Callable[[], Awaitable[T]], description: str = "operation") -> T:
        """
        Await ``operation()`` until it succeeds or the budget is spent.

        Args:
            operation: Zero-argument callable returning an awaitable
            description: Label used in retry warnings

        Returns:
            Result of the first successful attempt
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except Exception as e:
                if attempt >= self.max_attempts:
                    raise
                log.warning(
                    "Retrying %s (attempt %d/%d failed): %s",
                    description, attempt, self.max_attempts, e,
                )
                await self._sleep(self.backoff(attempt))
            attempt += 1


async def with_retry(operation: Callable[[], Awaitable[T]], max_attempts: Any = DEFAULT_RETRY_ATTEMPTS) -> T:
    """Functional shortcut for ``RetryPolicy(max_attempts).run(operation)``."""
    return await RetryPolicy(max_attempts).run(operation)
