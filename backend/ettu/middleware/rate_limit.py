"""
ETTU Backend — Rate Limiting Middleware
=========================================

What:  Per-IP sliding window rate limiter.
Why:   Keeps a single client from monopolising the API.
When:  Installed only when the RATE_LIMITING feature flag is on.

Algorithm: Sliding Window Log
    1. Each IP keeps the timestamps of its requests inside the window
    2. On each request, drop timestamps older than the window
    3. If the remaining count has reached the limit, answer 429
    4. Otherwise record the current timestamp and let the request through

Limits:
    State is in process memory. With several workers each one enforces its
    own window, so the effective limit is multiplied by the worker count.
    REDIS_URL is reserved for a shared implementation.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from ettu.exceptions import RateLimitExceededError
from ettu.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

# Health probes, metrics scrapes and API docs are never limited
EXCLUDED_PATHS = {"/health", "/metrics", "/docs", "/openapi.json", "/redoc"}

# Sweep IPs with no recent requests every N recorded requests
CLEANUP_EVERY = 1000


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Args:
        max_requests: Requests allowed per window per client IP
        window_seconds: Window length
        clock: Time source, replaceable in tests
    """

    def __init__(
        self,
        app: ASGIApp,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        try:
            self.check(client_ip)
        except RateLimitExceededError as e:
            # Exceptions raised in BaseHTTPMiddleware bypass the app's
            # exception handlers, so the 429 body is built here
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": e.message,
                    "details": e.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(e.retry_after)},
            )
        return await call_next(request)

    def check(self, client_ip: str) -> None:
        """Record one request for client_ip or raise RateLimitExceededError."""
        now = self._clock()
        window_start = now - self.window_seconds
        timestamps = self._requests[client_ip]

        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        if len(timestamps) >= self.max_requests:
            # Seconds until the oldest request leaves the window
            retry_after = int(timestamps[0] + self.window_seconds - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(timestamps),
                self.window_seconds,
            )
            raise RateLimitExceededError(retry_after=retry_after)

        timestamps.append(now)
        self._recorded += 1
        if self._recorded % CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]
        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
