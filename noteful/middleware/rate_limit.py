"""
Noteful API: Credential Rate Limiting Middleware
=================================================

What:  Per-IP sliding-window limit on the endpoints that accept passwords
       (POST /api/login and POST /api/users).
Why:   Slows down password guessing and signup spam. Note routes are behind
       a bearer token and are not limited here.
How:   Each client IP keeps a list of request timestamps. Timestamps older
       than the window are dropped on every request; when the remaining count
       reaches the limit the request is answered with 429 and Retry-After.

State lives in process memory, so with several workers each worker counts
separately.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from noteful.config import settings
from noteful.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

RATE_LIMITED_PATHS = {"/api/login", "/api/users"}


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, max_requests: int | None = None, window_seconds: int | None = None):
        super().__init__(app)
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window_seconds = window_seconds or settings.rate_limit_window
        self._requests: Dict[str, List[float]] = defaultdict(list)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "POST" or request.url.path not in RATE_LIMITED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window_start = now - self.window_seconds

        recent = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = recent

        if len(recent) >= self.max_requests:
            retry_after = int(recent[0] + self.window_seconds - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s on %s: %d requests in %ds",
                client_ip,
                request.url.path,
                len(recent),
                self.window_seconds,
            )
            exc = RateLimitExceededError(retry_after=retry_after)
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                },
                headers={"Retry-After": str(exc.retry_after)},
            )

        recent.append(now)
        self._forget_idle_clients(window_start)
        return await call_next(request)

    def _forget_idle_clients(self, window_start: float) -> None:
        idle = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in idle:
            del self._requests[ip]
