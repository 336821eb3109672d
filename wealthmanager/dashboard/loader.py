from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from pydantic import TypeAdapter, ValidationError

from wealthmanager.dashboard.client import PortfolioApiClient
from wealthmanager.models.schemas import AllocationResponse, HoldingResponse, PerformanceResponse, SummaryResponse

logger = logging.getLogger(__name__)

_HOLDINGS_ADAPTER = TypeAdapter(list[HoldingResponse])

LOAD_ERROR_MESSAGE = "Failed to fetch data. Please ensure the backend is running and accessible."


class DashboardLoadError(RuntimeError):
    pass


@dataclass(frozen=True)
class DashboardData:
    holdings: list[HoldingResponse]
    allocation: AllocationResponse
    performance: PerformanceResponse
    summary: SummaryResponse


async def _cancel_all(tasks: list[asyncio.Task]) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


async def load_dashboard(client: PortfolioApiClient, timeout_seconds: float | None = None) -> DashboardData:
    """Fetch the four portfolio reads concurrently, all or nothing.

    The first failed read cancels the others. Hitting ``timeout_seconds``
    or cancelling the caller cancels every outstanding read as well.
    """
    tasks = [
        asyncio.create_task(client.get_holdings(), name="holdings"),
        asyncio.create_task(client.get_allocation(), name="allocation"),
        asyncio.create_task(client.get_performance(), name="performance"),
        asyncio.create_task(client.get_summary(), name="summary"),
    ]

    try:
        done, pending = await asyncio.wait(tasks, timeout=timeout_seconds, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        await _cancel_all(tasks)
        raise

    if pending:
        await _cancel_all(list(pending))

    for task in tasks:
        if task not in done:
            continue
        exc = task.exception()
        if exc is not None:
            logger.error("Dashboard read failed", extra={"resource": task.get_name(), "error": str(exc)})
            raise DashboardLoadError(LOAD_ERROR_MESSAGE) from exc

    if pending:
        logger.error("Dashboard load timed out", extra={"timeout_seconds": timeout_seconds})
        raise DashboardLoadError(LOAD_ERROR_MESSAGE)

    holdings_raw, allocation_raw, performance_raw, summary_raw = (task.result() for task in tasks)
    try:
        return DashboardData(
            holdings=_HOLDINGS_ADAPTER.validate_python(holdings_raw),
            allocation=AllocationResponse.model_validate(allocation_raw),
            performance=PerformanceResponse.model_validate(performance_raw),
            summary=SummaryResponse.model_validate(summary_raw),
        )
    except ValidationError as exc:
        logger.error("Dashboard payload did not match the portfolio schema", extra={"error": str(exc)})
        raise DashboardLoadError(LOAD_ERROR_MESSAGE) from exc
