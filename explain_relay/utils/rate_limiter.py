"""
Rate limiter utility for API rate limiting.
"""
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass
class RateLimitResult:
    """Outcome of a single hit against the limiter."""
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """
    Fixed-window rate limiter keyed by client.

    Each key gets ``max_requests`` hits per window; the window starts on the
    key's first hit and is replaced once it has elapsed.

    Example:
        limiter = FixedWindowRateLimiter(max_requests=100, window_seconds=900)
        result = limiter.hit("203.0.113.7")
        if not result.allowed:
            ...  # reject with 429
    """

    # Expired windows are purged once this many keys are tracked
    PURGE_THRESHOLD = 10_000

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize rate limiter.

        Args:
            max_requests: Hits allowed per key within one window
            window_seconds: Window length in seconds
            clock: Monotonic time source, injectable for tests
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        # key -> (window start, hits in window)
        self._windows: Dict[str, tuple] = {}

    def hit(self, key: str) -> RateLimitResult:
        """Record a hit for ``key`` and report whether it is within the limit."""
        now = self.clock()
        if len(self._windows) >= self.PURGE_THRESHOLD:
            self._purge(now)

        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        count += 1
        self._windows[key] = (started, count)

        return RateLimitResult(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(self.max_requests - count, 0),
            reset_after=max(self.window_seconds - (now - started), 0.0),
        )

    def _purge(self, now: float) -> None:
        expired = [
            key
            for key, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]

    def reset(self):
        """Reset the rate limiter (forget all windows)."""
        self._windows.clear()


def seconds_header(value: float) -> str:
    """Render a delay as whole seconds for Retry-After style headers."""
    return str(math.ceil(value))
