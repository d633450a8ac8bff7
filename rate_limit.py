"""Per-client sliding window rate limiting held in process memory."""

import logging
import threading
import time
from collections import deque
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from utils.route_helpers import get_client_ip

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """
    Allow at most ``max_requests`` hits per key inside any ``window_seconds`` span.

    Rejected hits are not recorded, so a client that keeps hammering is let back in
    as soon as its oldest accepted request leaves the window. Keys whose hits have all
    expired are dropped at most one window after their last request.
    """

    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, cutoff: float) -> None:
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]

    def hit(self, key: str) -> tuple[bool, int, float]:
        """
        Record a request for ``key``.

        Returns:
            (allowed, remaining, retry_after_seconds)
        """
        now = self._clock()
        cutoff = now - self.window_seconds
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(cutoff)
                self._last_sweep = now
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if len(hits) >= self.max_requests:
                return False, 0, hits[0] + self.window_seconds - now
            hits.append(now)
            return True, self.max_requests - len(hits), 0.0

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests with 429 once a client address exceeds its window budget."""

    def __init__(self, app, *, limiter: SlidingWindowRateLimiter, trust_proxy: bool = False):
        super().__init__(app)
        self.limiter = limiter
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next: Callable):
        client_ip = get_client_ip(request, self.trust_proxy)
        allowed, remaining, retry_after = self.limiter.hit(client_ip)
        if not allowed:
            logger.warning("Rate limit exceeded for %s on %s", client_ip, request.url.path)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests, please try again later."},
                headers={
                    "Retry-After": str(max(1, int(retry_after + 0.999))),
                    "X-RateLimit-Limit": str(self.limiter.max_requests),
                    "X-RateLimit-Remaining": "0",
                },
            )
        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
