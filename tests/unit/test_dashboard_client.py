from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx
import pytest

from wealthmanager.dashboard import client as client_module
from wealthmanager.dashboard.client import ApiRequestError, PortfolioApiClient


@pytest.fixture
def recorded_sleeps(monkeypatch) -> list[float]:
    sleeps: list[float] = []

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    monkeypatch.setattr(client_module, "asyncio", SimpleNamespace(sleep=fake_sleep))
    return sleeps


def _run(coro):
    return asyncio.run(coro)


async def _get_with(handler, path: str, **kwargs):
    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport, base_url="http://api.test") as http:
        return await PortfolioApiClient(http=http, **kwargs).get_json(path)


def test_get_json_returns_payload_on_first_success(recorded_sleeps) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json={"riskLevel": "Moderate"})

    assert _run(_get_with(handler, "summary")) == {"riskLevel": "Moderate"}
    assert seen == ["/api/portfolio/summary"]
    assert recorded_sleeps == []


def test_get_json_retries_with_exponential_backoff(recorded_sleeps) -> None:
    attempts = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        if attempts["count"] < 3:
            return httpx.Response(503, json={"message": "busy"})
        return httpx.Response(200, json=[{"symbol": "INFY"}])

    assert _run(_get_with(handler, "holdings")) == [{"symbol": "INFY"}]
    assert attempts["count"] == 3
    assert recorded_sleeps == [1.0, 2.0]


def test_get_json_gives_up_after_budget(recorded_sleeps) -> None:
    attempts = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiRequestError) as exc_info:
        _run(_get_with(handler, "allocation", retry_delay_seconds=0.5))

    assert attempts["count"] == 3
    assert exc_info.value.attempts == 3
    assert recorded_sleeps == [0.5, 1.0]


def test_not_found_is_retried_like_any_non_2xx(recorded_sleeps) -> None:
    attempts = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        return httpx.Response(404, json={"message": "No holdings found."})

    with pytest.raises(ApiRequestError):
        _run(_get_with(handler, "holdings", max_attempts=2))

    assert attempts["count"] == 2
    assert recorded_sleeps == [1.0]


def test_cancel_abandons_pending_retry() -> None:
    attempts = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        return httpx.Response(500)

    async def scenario() -> None:
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, base_url="http://api.test") as http:
            api = PortfolioApiClient(http=http, retry_delay_seconds=60)
            task = asyncio.create_task(api.get_json("performance"))
            await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

    _run(scenario())
    assert attempts["count"] == 1
