"""In-memory sliding-window rate limiter — implements RateLimiter.

Best effort only: counts live in process memory and reset on restart.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable

from jira_triage.application.ports.rate_limiter import RateLimiter

DEFAULT_PRUNE_ABOVE = 1024


class SlidingWindowRateLimiter(RateLimiter):
    """At most *max_requests* per key within the last *window_seconds*.

    Stale keys are swept only once more than *prune_above* keys are tracked.
    After a sweep the threshold becomes twice the surviving key count, so a
    sweep is paid for by the inserts that preceded it and ``allow`` stays
    O(1) amortized.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        prune_above: int = DEFAULT_PRUNE_ABOVE,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if prune_above <= 0:
            raise ValueError("prune_above must be positive")
        self._max = max_requests
        self._window = window_seconds
        self._clock = clock
        self._prune_above = prune_above
        self._next_prune = prune_above
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        now = self._clock()
        cutoff = now - self._window
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if len(hits) >= self._max:
                return False
            hits.append(now)
            if len(self._hits) > self._next_prune:
                self._prune(cutoff)
            return True

    def _prune(self, cutoff: float) -> None:
        """Drop keys with no hits inside the window so the map stays bounded."""
        stale = [k for k, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for k in stale:
            del self._hits[k]
        self._next_prune = max(self._prune_above, 2 * len(self._hits))
