"""
Per-client request rate limiting for the API routes.
"""
import math
import time
import logging
from typing import Callable, Dict, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.core.errors import ErrorType, STATUS_CODES

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window limiter keyed by client address.

    Counters live in process memory and are only touched from the event
    loop, so no locking is needed.
    """

    def __init__(self, app, max_requests: int, window_seconds: int,
                 path_prefix: str = "/api/", clock: Callable[[], float] = time.monotonic):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.clock = clock
        # client -> (window start, hits)
        self.windows: Dict[str, Tuple[float, int]] = {}

    def _client_key(self, request: Request) -> str:
        return request.client.host if request.client else "unknown"

    def hit(self, key: str) -> Tuple[bool, float]:
        """Record a request; return whether it is allowed and seconds until the window resets."""
        now = self.clock()
        started, hits = self.windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, hits = now, 0
        hits += 1
        self.windows[key] = (started, hits)
        self._evict(now)
        return hits <= self.max_requests, started + self.window_seconds - now

    def _evict(self, now: float):
        expired = [k for k, (started, _) in self.windows.items() if now - started >= self.window_seconds]
        for k in expired:
            del self.windows[k]

    async def dispatch(self, request: Request, call_next) -> Response:
        if not request.url.path.startswith(self.path_prefix) or request.method == "OPTIONS":
            return await call_next(request)

        key = self._client_key(request)
        allowed, reset_in = self.hit(key)
        if not allowed:
            logger.warning("Rate limit exceeded", extra={"client": key, "path": request.url.path})
            return JSONResponse(
                status_code=STATUS_CODES[ErrorType.RATE_LIMIT_EXCEEDED],
                content={"error": RATE_LIMIT_MESSAGE, "type": ErrorType.RATE_LIMIT_EXCEEDED.value},
                headers={"Retry-After": str(max(1, math.ceil(reset_in)))},
            )
        return await call_next(request)
