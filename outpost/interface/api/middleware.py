"""HTTP middleware: security headers and per-IP rate limiting."""

import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses.

    No Content-Security-Policy is set: the API serves JSON and redirects only.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["X-DNS-Prefetch-Control"] = "off"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=15552000; includeSubDomains"
            )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request limit per client IP.

    Counters live in process memory, so each worker enforces its own limit.
    Only paths under ``path_prefix`` are counted.
    """

    def __init__(
        self,
        app,
        max_requests: int = 100,
        window_seconds: int = 15 * 60,
        path_prefix: str = "/api/",
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.clock = clock
        self._window = -1
        self._counts: dict[str, int] = {}

    async def dispatch(self, request: Request, call_next) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        now = self.clock()
        window = int(now // self.window_seconds)
        if window != self._window:
            # New window: every counter starts over
            self._window = window
            self._counts.clear()

        client_ip = request.client.host if request.client else "unknown"
        count = self._counts.get(client_ip, 0) + 1
        self._counts[client_ip] = count

        reset_in = int((window + 1) * self.window_seconds - now) or 1

        if count > self.max_requests:
            return JSONResponse(
                status_code=429,
                content={"error": RATE_LIMIT_MESSAGE},
                headers={"Retry-After": str(reset_in)},
            )

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(self.max_requests)
        response.headers["RateLimit-Remaining"] = str(
            max(0, self.max_requests - count)
        )
        response.headers["RateLimit-Reset"] = str(reset_in)
        return response
