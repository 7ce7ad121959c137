"""Per-client request throttling for the HTTP entrypoints."""

from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict

from src.settings import Settings


@dataclass
class RateLimitConfig:
    requests_per_minute: int = 120
    window_seconds: float = 60.0


class RateLimiter:
    """Sliding-window limiter keyed by client address."""

    def __init__(self, config: RateLimitConfig | None = None, clock: Callable[[], float] = time.monotonic):
        self.config = config or RateLimitConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)

    def _trim(self, window: Deque[float], now: float) -> None:
        cutoff = now - self.config.window_seconds
        while window and window[0] <= cutoff:
            window.popleft()

    def is_allowed(self, client_id: str) -> bool:
        now = self._clock()
        with self._lock:
            window = self._hits[client_id]
            self._trim(window, now)
            if len(window) >= self.config.requests_per_minute:
                return False
            window.append(now)
            return True

    def remaining(self, client_id: str) -> int:
        now = self._clock()
        with self._lock:
            window = self._hits.get(client_id)
            if not window:
                return self.config.requests_per_minute
            self._trim(window, now)
            return max(0, self.config.requests_per_minute - len(window))

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimiter":
        return cls(RateLimitConfig(requests_per_minute=settings.rate_limit_per_minute))
