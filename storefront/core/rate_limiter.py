from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict

from fastapi import Request

from storefront.core.errors import RateLimitError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sliding-window limiter: at most ``limit`` hits per key within ``window_seconds``."""

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _trim(self, hits: Deque[float], now: float) -> None:
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        # Drop keys whose every hit has left the window.
        for key in list(self._hits):
            hits = self._hits[key]
            self._trim(hits, now)
            if not hits:
                del self._hits[key]
        self._last_sweep = now

    def check(self, key: str) -> None:
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            hits = self._hits.get(key)
            if hits is not None:
                self._trim(hits, now)
            if hits and len(hits) >= self.limit:
                logger.warning("rate limit exceeded for %s", key)
                raise RateLimitError()
            if not hits:
                hits = self._hits[key] = deque()
            hits.append(now)

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._hits.clear()
            else:
                self._hits.pop(key, None)

    def __len__(self) -> int:
        return len(self._hits)


def client_ip(request: Request, trust_proxy_headers: bool = False) -> str:
    """Socket peer address; the first X-Forwarded-For hop only behind a trusted proxy."""
    if trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_ip(request: Request, scope: str, limiter: RateLimiter, *, trust_proxy_headers: bool = False) -> None:
    limiter.check(f"{scope}:{client_ip(request, trust_proxy_headers)}")
