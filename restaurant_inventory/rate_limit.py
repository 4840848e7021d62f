"""Per-client, per-route request limits backed by the ``limits`` fixed-window strategy."""

from __future__ import annotations

import logging
import math
import time
from typing import Callable, Dict, NamedTuple, Optional

from fastapi import Request, Response
from limits import RateLimitItemPerSecond
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

from restaurant_inventory.errors import RateLimitExceeded

logger = logging.getLogger(__name__)

KEY_NAMESPACE = "rate-limit"


class RateLimitResult(NamedTuple):
    success: bool
    limit: int
    remaining: int
    reset: int


class RateLimiter:
    """Window counters shared by every request; one instance lives on ``app.state.rate_limiter``."""

    def __init__(self, storage_uri: str = "memory://") -> None:
        self.storage = storage_from_string(storage_uri)
        self.strategy = FixedWindowRateLimiter(self.storage)

    def hit(self, identifier: str, route: str, limit: int, window: int) -> RateLimitResult:
        item = RateLimitItemPerSecond(limit, window)
        success = self.strategy.hit(item, KEY_NAMESPACE, identifier, route)
        stats = self.strategy.get_window_stats(item, KEY_NAMESPACE, identifier, route)
        return RateLimitResult(
            success=success,
            limit=limit,
            remaining=max(0, stats.remaining),
            reset=int(math.ceil(stats.reset_time)),
        )

    def reset(self) -> None:
        self.storage.reset()


def client_identifier(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "127.0.0.1"


def rate_limit_headers(result: RateLimitResult) -> Dict[str, str]:
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset),
    }


def rate_limited(limit: int, window: int = 60, identifier: Optional[Callable[[Request], str]] = None):
    """Dependency enforcing ``limit`` requests per ``window`` seconds on a route."""

    def _dependency(request: Request, response: Response) -> None:
        settings = request.app.state.settings
        if not settings["rate_limit_enabled"]:
            return
        limiter: RateLimiter = request.app.state.rate_limiter
        client = (identifier or client_identifier)(request)
        result = limiter.hit(client, request.url.path, limit, window)
        headers = rate_limit_headers(result)
        if not result.success:
            logger.warning("Rate limit exceeded client=%s path=%s", client, request.url.path)
            headers["Retry-After"] = str(max(0, result.reset - int(time.time())))
            raise RateLimitExceeded(headers=headers)
        for name, value in headers.items():
            response.headers[name] = value

    return _dependency
