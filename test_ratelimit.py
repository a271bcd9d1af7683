from types import SimpleNamespace
import pytest
from fastapi import HTTPException
from app.ratelimit import RateLimiter
from conftest import FakeClock


def request_from(ip):
    return SimpleNamespace(client=SimpleNamespace(host=ip))


def test_blocks_after_rate_within_window():
    limiter = RateLimiter(rate=2, period=60, clock=FakeClock())
    limiter(request_from("10.0.0.1"))
    limiter(request_from("10.0.0.1"))
    with pytest.raises(HTTPException) as exc:
        limiter(request_from("10.0.0.1"))
    assert exc.value.status_code == 429

    # Other clients have their own budget.
    limiter(request_from("10.0.0.2"))


def test_window_reopens_after_period():
    clock = FakeClock()
    limiter = RateLimiter(rate=1, period=60, clock=clock)
    limiter(request_from("10.0.0.1"))
    clock.advance(61)
    limiter(request_from("10.0.0.1"))


def test_idle_clients_are_forgotten():
    clock = FakeClock()
    limiter = RateLimiter(rate=5, period=60, clock=clock)
    for i in range(10):
        limiter(request_from(f"10.0.0.{i}"))
    assert len(limiter.clients) == 10

    clock.advance(61)
    limiter(request_from("10.0.1.1"))
    assert list(limiter.clients) == ["10.0.1.1"]
