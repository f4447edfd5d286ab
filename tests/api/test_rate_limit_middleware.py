"""Rate Limit Middleware — 429 envelope once a client's bucket is empty."""

from costing_master.infrastructure import rate_limit as rate_limit_module
from costing_master.infrastructure.rate_limit import RateLimiter


class _FrozenClock:
    def __call__(self) -> float:
        return 0.0


async def test_third_request_throttled(client, monkeypatch):
    monkeypatch.setattr(
        rate_limit_module, "rate_limiter",
        RateLimiter(burst=2, per_second=1.0, clock=_FrozenClock()),
    )
    first = await client.get("/api/v1/uoms/KG")
    second = await client.get("/api/v1/uoms/KG")
    third = await client.get("/api/v1/uoms/KG")

    assert first.status_code == 200
    assert second.status_code == 200
    assert third.status_code == 429
    base = third.json()["base"]
    assert base["status_code"] == "429"
    assert base["is_success"] is False
    assert base["message"] == "Rate limit exceeded"


async def test_health_is_never_throttled(client, monkeypatch):
    monkeypatch.setattr(
        rate_limit_module, "rate_limiter",
        RateLimiter(burst=1, per_second=1.0, clock=_FrozenClock()),
    )
    for _ in range(3):
        response = await client.get("/api/v1/health/")
        assert response.status_code == 200
