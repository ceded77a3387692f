"""Implementation of a rate limiter.

Controls the frequency of outgoing API requests so that every caller sharing
one client handle stays under a single global requests-per-second cap.
Uses a sliding window algorithm.
"""

import collections
import logging
import time
from threading import Lock
from typing import Callable, Deque, Optional

from cfprovider.domain.events.api_events import ApiCallDeferred

logger = logging.getLogger(__name__)

DEFAULT_TIME_WINDOW_SECONDS = 1.0


class RateLimiter:
    """Thread-safe sliding window rate limiter.

    A `max_requests` of 0 disables limiting.
    """

    def __init__(
        self,
        max_requests: int,
        time_window: float = DEFAULT_TIME_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        on_event: Optional[Callable[[ApiCallDeferred], None]] = None,
    ):
        """Initializes the rate limiter.

        Args:
            max_requests: Maximum number of requests allowed in the time window.
            time_window: The time window in seconds.
            clock: Monotonic clock, injectable for tests.
            sleep: Sleep function, injectable for tests.
            on_event: Optional callback receiving ApiCallDeferred events.
        """
        if max_requests < 0:
            raise ValueError("max_requests must be non-negative.")
        if time_window <= 0:
            raise ValueError("time_window must be positive.")

        self.max_requests = max_requests
        self.time_window = time_window
        self.timestamps: Deque[float] = collections.deque()
        self._clock = clock
        self._sleep = sleep
        self._on_event = on_event
        self._lock = Lock()
        logger.info(f"RateLimiter initialized: {max_requests} requests / {time_window} seconds")

    @property
    def enabled(self) -> bool:
        return self.max_requests > 0

    def _cleanup_timestamps(self, now: float) -> None:
        """Removes timestamps older than the time window."""
        while self.timestamps and now - self.timestamps[0] >= self.time_window:
            self.timestamps.popleft()

    def try_acquire(self) -> float:
        """Records a request if one is permitted right now.

        Returns:
            0.0 if the request was recorded, otherwise the seconds to wait
            before trying again.
        """
        if not self.enabled:
            return 0.0
        with self._lock:
            now = self._clock()
            self._cleanup_timestamps(now)
            if len(self.timestamps) < self.max_requests:
                self.timestamps.append(now)
                return 0.0
            return max(0.0, self.timestamps[0] + self.time_window - now)

    def wait_for_permission(self) -> None:
        """Blocks until a request is permitted according to the rate limit.

        Sleeping happens outside the lock so other callers can proceed.
        """
        while True:
            wait_time = self.try_acquire()
            if wait_time <= 0:
                logger.debug("Rate limit permission granted.")
                return
            logger.debug(f"Rate limit reached. Waiting for {wait_time:.3f} seconds.")
            if self._on_event:
                self._on_event(ApiCallDeferred(wait_time_seconds=wait_time))
            self._sleep(wait_time)

    def get_wait_time(self) -> float:
        """Estimates the time needed before the next request can be made."""
        if not self.enabled:
            return 0.0
        with self._lock:
            now = self._clock()
            self._cleanup_timestamps(now)
            if len(self.timestamps) < self.max_requests:
                return 0.0
            return max(0.0, self.timestamps[0] + self.time_window - now)
