"""
Rate limiting - rolling-window attempt counting per client key.

Limiter state lives in the process; each worker keeps its own counts.
"""

import math
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from exclusive_drop.api import messages


class RateLimited(Exception):
    """Client exceeded its attempts for the current window."""

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(message)
        self.message = message
        self.retry_after = retry_after


@dataclass(frozen=True)
class RateLimitState:
    """Counters reported back to the client after an accepted attempt."""

    limit: int
    remaining: int
    reset_after: int


class SlidingWindowRateLimiter:
    """
    Allow at most `max_attempts` per key within any `window_seconds` span.

    Rejected attempts are not recorded, so a client that backs off regains
    capacity as its oldest accepted attempts age out of the window.
    """

    def __init__(
        self,
        max_attempts: int,
        window_seconds: float,
        message: str = messages.API_RATE_LIMITED,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitState:
        """
        Record one attempt for `key`.

        Returns:
            Counters after recording the attempt

        Raises:
            RateLimited: If the key already used all attempts in the window
        """
        now = self._clock()
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= now - self.window_seconds:
                hits.popleft()

            if len(hits) >= self.max_attempts:
                retry_after = max(1, math.ceil(hits[0] + self.window_seconds - now))
                raise RateLimited(self.message, retry_after)

            hits.append(now)
            return RateLimitState(
                limit=self.max_attempts,
                remaining=self.max_attempts - len(hits),
                reset_after=max(0, math.ceil(hits[0] + self.window_seconds - now)),
            )

    def reset(self) -> None:
        """Forget every recorded attempt."""
        with self._lock:
            self._hits.clear()
