# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from flask import Flask, Response, g, request

from blog_backend.shared.errors import RateLimitedError
from blog_backend.shared.logging import logger
from blog_backend.utils.http import client_ip

# Expired windows are swept once the table grows past this many keys.
_PRUNE_THRESHOLD = 10_000


@dataclass(slots=True)
class Window:
    started_at: float
    count: int = 0


@dataclass(slots=True, frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """Counts hits per key in fixed windows that start with the key's first hit."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, Window] = {}

    @property
    def limit(self) -> int:
        return self._limit

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now - window.started_at >= self._window:
                if len(self._windows) >= _PRUNE_THRESHOLD:
                    self._prune(now)
                window = Window(started_at=now)
                self._windows[key] = window
            window.count += 1
            count = window.count
            reset_after = window.started_at + self._window - now

        return RateLimitDecision(
            allowed=count <= self._limit,
            limit=self._limit,
            remaining=max(0, self._limit - count),
            reset_after=max(0.0, reset_after),
        )

    def _prune(self, now: float) -> None:
        expired = [
            key
            for key, window in self._windows.items()
            if now - window.started_at >= self._window
        ]
        for key in expired:
            del self._windows[key]


def configure_rate_limiting(
    app: Flask,
    limiter: FixedWindowRateLimiter,
    *,
    trust_proxy: bool = False,
) -> None:
    @app.before_request
    def _enforce_rate_limit() -> None:
        key = client_ip(request, trust_proxy=trust_proxy)
        decision = limiter.hit(key)
        g.rate_limit = decision
        if not decision.allowed:
            logger.warning(
                f"rate_limit: rejected {request.method} {request.path} from {key} "
                f"(limit={decision.limit}, reset_in={decision.reset_after:.0f}s)"
            )
            raise RateLimitedError(retry_after=decision.reset_after)

    @app.after_request
    def _add_rate_limit_headers(resp: Response) -> Response:
        decision: RateLimitDecision | None = g.get("rate_limit")
        if decision is not None:
            resp.headers["X-RateLimit-Limit"] = str(decision.limit)
            resp.headers["X-RateLimit-Remaining"] = str(decision.remaining)
            resp.headers["X-RateLimit-Reset"] = str(math.ceil(time.time() + decision.reset_after))
        return resp


__all__ = [
    "FixedWindowRateLimiter",
    "RateLimitDecision",
    "configure_rate_limiting",
]
