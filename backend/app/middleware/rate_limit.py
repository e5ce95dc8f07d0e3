"""
WoofPoint Backend — Credential Endpoint Rate Limiting
=======================================================

What:  Per-IP sliding window limiter on POST /api/auth/login and /api/auth/signup.
Why:   Slows down password guessing and bulk account creation. Everything
       else is authenticated by token and left unlimited.
How:   Keeps recent request timestamps per client IP in memory.

Algorithm: Sliding Window Log
    1. Each IP gets a list of request timestamps
    2. On each limited request, drop timestamps older than the window
    3. If remaining count >= limit, reject with 429 + Retry-After
    4. Otherwise, record the timestamp and let the request through

    Defaults: 20 requests per 900 seconds (settings.rate_limit_requests /
    settings.rate_limit_window).

Limits:
    State lives in one process. With several workers each keeps its own
    counters, so the effective limit is multiplied by the worker count.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, FrozenSet, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window limiter for the credential endpoints.

    The 429 body uses the same shape as the exception handlers in main.py;
    middleware runs outside FastAPI's exception handling, so the response is
    built here from a RateLimitExceededError.
    """

    LIMITED_PATHS: FrozenSet[str] = frozenset({"/api/auth/login", "/api/auth/signup"})

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "POST" or request.url.path not in self.LIMITED_PATHS:
            return await call_next(request)

        # Behind a proxy this is the proxy's address
        client_ip = request.client.host if request.client else "unknown"

        now = time.time()
        window_start = now - settings.rate_limit_window

        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        if len(timestamps) >= settings.rate_limit_requests:
            retry_after = int(timestamps[0] + settings.rate_limit_window - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s on %s: %d requests in %ds window",
                client_ip,
                request.url.path,
                len(timestamps),
                settings.rate_limit_window,
            )
            exc = RateLimitExceededError(retry_after=retry_after)
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "error": exc.error_code,
                    "message": exc.message,
                    "details": exc.context,
                },
                headers={"Retry-After": str(retry_after)},
            )

        timestamps.append(now)

        # Occasional sweep so one-off IPs do not accumulate forever
        if len(self._requests) > 1000:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
