"""Fixed-window request counting keyed by client address."""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"
DEFAULT_MESSAGE = "Too many requests, please try again later."


@dataclass(slots=True)
class WindowEntry:
    count: int
    reset_at: float


@dataclass(slots=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int = 0


class FixedWindowRateLimiter:
    """Counts requests per key in fixed windows of ``window_seconds``.

    The first request of a key (or the first after its window has elapsed)
    opens a new window with a count of 1. Requests beyond ``max_requests``
    inside the window are rejected until the window rolls over.

    Expired entries are dropped lazily, at most once per ``sweep_interval``
    seconds, so the table only holds keys seen during the current window.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        message: str = DEFAULT_MESSAGE,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: Optional[float] = None,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1.")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive.")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._sweep_interval = sweep_interval if sweep_interval is not None else window_seconds
        self._entries: Dict[str, WindowEntry] = {}
        self._lock = threading.Lock()
        self._next_sweep = clock() + self._sweep_interval

    def hit(self, key: str) -> RateLimitDecision:
        """Record one request for ``key`` and decide whether it may proceed."""
        now = self._clock()
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            entry = self._entries.get(key)
            if entry is None or now >= entry.reset_at:
                self._entries[key] = WindowEntry(count=1, reset_at=now + self.window_seconds)
                return RateLimitDecision(allowed=True, remaining=self.max_requests - 1)
            entry.count += 1
            if entry.count > self.max_requests:
                retry_after = max(1, math.ceil(entry.reset_at - now))
                return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)
            return RateLimitDecision(allowed=True, remaining=self.max_requests - entry.count)

    def count_for(self, key: str) -> int:
        with self._lock:
            entry = self._entries.get(key)
            return entry.count if entry else 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.reset_at <= now]
        for key in expired:
            del self._entries[key]
        self._next_sweep = now + self._sweep_interval
        if expired:
            logger.debug("Evicted %d expired rate-limit entries", len(expired))


def client_key(request: Request) -> str:
    """Identify the caller by peer address, then X-Forwarded-For, then a shared bucket."""
    if request.client and request.client.host:
        return request.client.host
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    return first or UNKNOWN_CLIENT


def _too_many_requests(limiter: FixedWindowRateLimiter, decision: RateLimitDecision) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=limiter.message,
        headers={"Retry-After": str(decision.retry_after)},
    )


def enforce(limiter: FixedWindowRateLimiter, request: Request) -> None:
    """Raise a 429 ``HTTPException`` when ``request`` exceeds ``limiter``."""
    key = client_key(request)
    decision = limiter.hit(key)
    if not decision.allowed:
        logger.warning("Rate limit exceeded for %s on %s", key, request.url.path)
        raise _too_many_requests(limiter, decision)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Applies one limiter to every request reaching the application."""

    def __init__(self, app, limiter: FixedWindowRateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request, call_next):
        key = client_key(request)
        decision = self.limiter.hit(key)
        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s on %s", key, request.url.path)
            return PlainTextResponse(
                self.limiter.message,
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": str(decision.retry_after)},
            )
        return await call_next(request)
