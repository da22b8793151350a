"""Retry policy for management API requests using linear jitter backoff."""

import random
from dataclasses import dataclass
from typing import Optional

import httpx

from common.config.config import (
    RETRY_MAX,
    RETRY_WAIT_MAX_SECONDS,
    RETRY_WAIT_MIN_SECONDS,
)


def linear_jitter_backoff(wait_min: float, wait_max: float, attempt: int) -> float:
    """Compute the wait before the next attempt.

    The wait grows linearly with the attempt number and is spread by a random
    jitter between ``wait_min`` and ``wait_max``.

    Args:
        wait_min: Minimum wait in seconds
        wait_max: Maximum wait in seconds
        attempt: Zero-based number of the attempt that just failed

    Returns:
        Seconds to sleep
    """
    multiplier = attempt + 1
    if wait_max <= wait_min:
        return wait_min * multiplier
    jitter = random.uniform(0, wait_max - wait_min)
    return (wait_min + jitter) * multiplier


@dataclass
class RetryPolicy:
    max_retries: int = RETRY_MAX
    wait_min: float = RETRY_WAIT_MIN_SECONDS
    wait_max: float = RETRY_WAIT_MAX_SECONDS

    @property
    def max_attempts(self) -> int:
        return max(self.max_retries, 0) + 1

    def should_retry(
        self,
        response: Optional[httpx.Response] = None,
        error: Optional[Exception] = None,
    ) -> bool:
        """Decide whether a request outcome is worth another attempt."""
        if error is not None:
            return isinstance(error, httpx.TransportError)
        if response is None:
            return False
        status = response.status_code
        if status == 429:
            return True
        return status >= 500 and status != 501

    def backoff(self, attempt: int) -> float:
        return linear_jitter_backoff(self.wait_min, self.wait_max, attempt)


NO_RETRY = RetryPolicy(max_retries=0)
