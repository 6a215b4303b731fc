"""
security/rate_limiter.py
-------------------------
Rate limiting to prevent API abuse.
Limits the number of requests a client address can send within a time window.
"""

import time
from collections import defaultdict

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from config import RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Sliding-window counter per client key.

    In-memory storage: {client: [timestamp1, timestamp2, ...]}; one process only.
    """

    def __init__(self, max_requests: int = RATE_LIMIT_REQUESTS, window_seconds: int = RATE_LIMIT_WINDOW_SECONDS):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._timestamps: dict[str, list[float]] = defaultdict(list)

    def _cleanup(self, client: str, now: float) -> None:
        """Remove expired timestamps for a client."""
        cutoff = now - self.window_seconds
        self._timestamps[client] = [t for t in self._timestamps[client] if t > cutoff]

    def allow(self, client: str) -> bool:
        """Record a request and return False once the client is over budget."""
        now = time.time()
        self._cleanup(client, now)
        if len(self._timestamps[client]) >= self.max_requests:
            return False
        self._timestamps[client].append(now)
        return True


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests with 429 once a client address exceeds its budget.

    Configuration (via .env):
        RATE_LIMIT_REQUESTS: Max requests per window (default: 100).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 900).
    """

    def __init__(self, app, limiter: RateLimiter | None = None):
        super().__init__(app)
        self.limiter = limiter or RateLimiter()

    async def dispatch(self, request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        if not self.limiter.allow(client):
            logger.warning(f"⚠️ Rate limit hit for {client}")
            return JSONResponse(
                status_code=429,
                content={"success": False, "message": "Too many requests, please try again later."},
            )
        return await call_next(request)
