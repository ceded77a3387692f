"""Retry policy for API calls.

Implements bounded exponential backoff for transient failures: network
errors, rate limiting (429) and temporary server issues (5xx). Any other
response, including API-level errors, is handed back to the caller untouched.
"""

import logging
import time
from typing import Callable, Optional

import httpx

from cfprovider.domain.events.api_events import DomainEvent, RetryScheduled

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429})
RETRYABLE_EXCEPTIONS = (httpx.TransportError,)


# --- Custom Exceptions ---
class MaxRetryError(Exception):
    """Exception raised when max retries are exceeded."""
    def __init__(self, original_exception: Exception, attempts: int):
        self.original_exception = original_exception
        self.attempts = attempts
        super().__init__(f"Max retries ({attempts}) exceeded. Last error: {original_exception}")


def is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES or status_code >= 500


class RetryPolicy:
    """Retries a call up to `max_retries` times with capped exponential backoff.

    The delay before retry `n` (1-based) is `min_backoff * 2 ** (n - 1)`
    seconds, never more than `max_backoff`. The policy holds no per-call
    state, so one instance can be shared by concurrent callers.
    """

    def __init__(
        self,
        max_retries: int,
        min_backoff: float,
        max_backoff: float,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initializes the RetryPolicy.

        Args:
            max_retries: Maximum number of retry attempts after the first call.
            min_backoff: Delay in seconds before the first retry.
            max_backoff: Upper bound in seconds for any delay.
            sleep: Sleep function, injectable for tests.
        """
        self.max_retries = max_retries
        self.min_backoff = min_backoff
        self.max_backoff = max_backoff
        self._sleep = sleep
        logger.info(
            f"RetryPolicy initialized: max_retries={max_retries}, "
            f"min_backoff={min_backoff}s, max_backoff={max_backoff}s"
        )

    def backoff_for(self, attempt: int) -> float:
        """Returns the delay in seconds before retry number `attempt` (1-based)."""
        delay = self.min_backoff * (2 ** (attempt - 1))
        return min(delay, self.max_backoff)

    def execute(
        self,
        send: Callable[[], httpx.Response],
        description: str = "request",
        on_event: Optional[Callable[[DomainEvent], None]] = None,
    ) -> httpx.Response:
        """Executes `send`, retrying transient failures.

        Args:
            send: Performs one attempt and returns its response.
            description: Label for logs and events, e.g. 'GET /zones'.
            on_event: Optional callback receiving RetryScheduled events.

        Returns:
            The first non-retryable response, or the last response once
            retries are exhausted.

        Raises:
            MaxRetryError: If every attempt failed with a transport error.
        """
        method, _, path = description.partition(" ")
        for attempt in range(self.max_retries + 1):
            try:
                response = send()
            except RETRYABLE_EXCEPTIONS as e:
                if attempt >= self.max_retries:
                    logger.error(f"Max retries ({self.max_retries}) reached for {description}. Last error: {e}")
                    raise MaxRetryError(e, self.max_retries) from e
                reason = type(e).__name__
            else:
                if not is_retryable_status(response.status_code) or attempt >= self.max_retries:
                    return response
                reason = f"HTTP {response.status_code}"
                response.close()

            delay = self.backoff_for(attempt + 1)
            logger.warning(
                f"Retryable error for {description} on attempt {attempt + 1}/{self.max_retries + 1}: {reason}. "
                f"Waiting {delay:.2f}s..."
            )
            if on_event:
                on_event(RetryScheduled(method=method, path=path, attempt_number=attempt + 1, delay_seconds=delay, reason=reason))
            self._sleep(delay)

        # Unreachable: the last attempt either returns or raises.
        raise RuntimeError("retry loop exited without a result")
