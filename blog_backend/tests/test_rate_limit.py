from __future__ import annotations

import threading

from flask import Flask

from blog_backend.app import create_app
from blog_backend.container import Container
from blog_backend.shared.config import AppConfig, SecurityConfig
from blog_backend.shared.middleware.rate_limit import FixedWindowRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_fifty_first_request_in_window_is_rejected() -> None:
    limiter = FixedWindowRateLimiter(50, 15 * 60, clock=FakeClock())

    decisions = [limiter.hit("10.0.0.1") for _ in range(51)]

    assert all(decision.allowed for decision in decisions[:50])
    assert decisions[49].remaining == 0
    assert not decisions[50].allowed


def test_window_resets_at_boundary() -> None:
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(2, 60, clock=clock)
    assert limiter.hit("k").allowed
    assert limiter.hit("k").allowed
    assert not limiter.hit("k").allowed

    clock.now += 59
    assert not limiter.hit("k").allowed

    clock.now += 1
    decision = limiter.hit("k")
    assert decision.allowed
    assert decision.remaining == 1
    assert decision.reset_after == 60


def test_keys_are_counted_independently() -> None:
    limiter = FixedWindowRateLimiter(1, 60, clock=FakeClock())

    assert limiter.hit("a").allowed
    assert limiter.hit("b").allowed
    assert not limiter.hit("a").allowed


def test_concurrent_hits_are_not_undercounted() -> None:
    limiter = FixedWindowRateLimiter(10_000, 60)
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        for _ in range(500):
            limiter.hit("burst")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert limiter.hit("burst").remaining == 10_000 - 8 * 500 - 1


def _app_with_limit(config: AppConfig, limit: int) -> Flask:
    limited = config.model_copy(
        update={"security": SecurityConfig(RATE_LIMIT_MAX_REQUESTS=limit)}
    )
    container = Container(limited)
    container.database.init_schema()
    return create_app(container=container)


def test_gate_rejects_requests_over_the_limit(config: AppConfig) -> None:
    app = _app_with_limit(config, 3)

    with app.test_client() as client:
        statuses = [client.get("/").status_code for _ in range(4)]
        rejected = client.get("/api/V1/blog-posts")

    assert statuses == [200, 200, 200, 429]
    assert rejected.status_code == 429
    assert rejected.get_json()["message"] == "Too many requests, please try again later."
    assert int(rejected.headers["Retry-After"]) >= 1
    assert rejected.headers["X-RateLimit-Remaining"] == "0"


def test_gate_reports_remaining_quota(config: AppConfig) -> None:
    app = _app_with_limit(config, 5)

    with app.test_client() as client:
        response = client.get("/")

    assert response.headers["X-RateLimit-Limit"] == "5"
    assert response.headers["X-RateLimit-Remaining"] == "4"
