"""
Writing Submissions Backend — Rate Limiting Middleware
=======================================================

What:  Per-IP sliding window rate limiter.
How:   Keeps the request timestamps of each client IP in memory, drops those
       older than the window, and answers 429 once the limit is reached.
When:  Outermost middleware; rejected requests never reach auth or the database.

Algorithm: Sliding Window Log
    1. Each IP gets a list of request timestamps
    2. On each request, remove timestamps older than the window
    3. If remaining count >= limit, reject with 429 and Retry-After
    4. Otherwise, record the current timestamp and continue

Scope:
    State lives in the process. Each uvicorn worker enforces its own limit.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Configuration (from settings):
        rate_limit_requests: Max requests per window (default: 100)
        rate_limit_window: Window duration in seconds (default: 3600)
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    # Inactive IPs are pruned every CLEANUP_INTERVAL admitted requests
    CLEANUP_INTERVAL = 1000

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._admitted = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"

        now = time.time()
        window_start = now - settings.rate_limit_window

        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        if len(timestamps) >= settings.rate_limit_requests:
            retry_after = int(timestamps[0] + settings.rate_limit_window - now) + 1
            exc = RateLimitExceededError(
                retry_after=retry_after,
                context={"client_ip": client_ip, "count": len(timestamps)},
            )
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(timestamps),
                settings.rate_limit_window,
            )
            # Middleware runs outside the app's exception handlers, so the
            # response is rendered here in the same {"error": ...} shape
            return JSONResponse(
                status_code=429,
                content={"error": exc.message},
                headers={"Retry-After": str(exc.retry_after)},
            )

        timestamps.append(now)

        self._admitted += 1
        if self._admitted % self.CLEANUP_INTERVAL == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Remove IPs that have no requests within the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
