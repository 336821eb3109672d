from __future__ import annotations

import asyncio

import pytest

from wealthmanager.dashboard.client import ApiRequestError
from wealthmanager.dashboard.loader import DashboardLoadError, load_dashboard
from wealthmanager.seed.sample_data import load_sample_data

_META = {"id": 1, "createdAt": "2025-01-01T00:00:00", "updatedAt": "2025-01-01T00:00:00"}


class FakePortfolioClient:
    def __init__(
        self,
        fail: set[str] | None = None,
        slow: set[str] | None = None,
        crash: set[str] | None = None,
    ) -> None:
        sample = load_sample_data().model_dump(by_alias=True, mode="json")
        self.payloads = {
            "holdings": [{**item, **_META, "id": idx} for idx, item in enumerate(sample["holdings"], start=1)],
            "allocation": {**sample["allocation"], **_META},
            "performance": {**sample["performance"], **_META},
            "summary": {**sample["summary"], **_META},
        }
        self.fail = fail or set()
        self.slow = slow or set()
        self.crash = crash or set()
        self.cancelled: set[str] = set()

    async def _read(self, name: str):
        try:
            if name in self.slow:
                await asyncio.sleep(60)
            await asyncio.sleep(0)
        except asyncio.CancelledError:
            self.cancelled.add(name)
            raise
        if name in self.fail:
            raise ApiRequestError(path=name, attempts=3, message=f"{name} failed")
        if name in self.crash:
            raise KeyError(name)
        return self.payloads[name]

    async def get_holdings(self):
        return await self._read("holdings")

    async def get_allocation(self):
        return await self._read("allocation")

    async def get_performance(self):
        return await self._read("performance")

    async def get_summary(self):
        return await self._read("summary")


def test_load_dashboard_returns_all_four_resources() -> None:
    data = asyncio.run(load_dashboard(FakePortfolioClient()))

    assert len(data.holdings) == 15
    assert data.summary.risk_level == "Moderate"
    assert data.allocation.by_sector[0].name == "Technology"
    assert len(data.performance.timeline) == 12


def test_one_failure_fails_whole_load_and_cancels_the_rest() -> None:
    client = FakePortfolioClient(fail={"summary"}, slow={"holdings", "allocation"})

    with pytest.raises(DashboardLoadError):
        asyncio.run(load_dashboard(client))

    assert client.cancelled == {"holdings", "allocation"}


def test_deadline_cancels_outstanding_reads() -> None:
    client = FakePortfolioClient(slow={"performance"})

    with pytest.raises(DashboardLoadError):
        asyncio.run(load_dashboard(client, timeout_seconds=0.05))

    assert client.cancelled == {"performance"}


def test_malformed_payload_is_a_load_failure() -> None:
    client = FakePortfolioClient()
    client.payloads["summary"] = {"unexpected": True}

    with pytest.raises(DashboardLoadError):
        asyncio.run(load_dashboard(client))


def test_unexpected_read_error_is_a_load_failure() -> None:
    client = FakePortfolioClient(crash={"allocation"}, slow={"summary"})

    with pytest.raises(DashboardLoadError):
        asyncio.run(load_dashboard(client))

    assert client.cancelled == {"summary"}
