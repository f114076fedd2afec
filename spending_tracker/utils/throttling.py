"""In-memory fixed-window request limiter keyed by client address."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple


@dataclass(frozen=True)
class ThrottleDecision:
    allowed: bool
    remaining: int
    retry_after: int


class FixedWindowThrottle:
    """Count hits per key inside a window of ``ttl_seconds``.

    Windows start at the first hit for a key. Expired windows are pruned on
    access so the table only holds keys seen during the current window.
    """

    def __init__(self, limit: int, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> ThrottleDecision:
        now = self._clock()
        with self._lock:
            self._prune(now)
            started, count = self._windows.get(key, (now, 0))
            if count >= self.limit:
                retry_after = max(1, int(round(started + self.ttl_seconds - now)))
                return ThrottleDecision(allowed=False, remaining=0, retry_after=retry_after)
            count += 1
            self._windows[key] = (started, count)
            return ThrottleDecision(allowed=True, remaining=self.limit - count, retry_after=0)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _prune(self, now: float) -> None:
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.ttl_seconds]
        for k in expired:
            del self._windows[k]
