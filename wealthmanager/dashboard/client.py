from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

PORTFOLIO_API_PREFIX = "/api/portfolio"


class ApiRequestError(RuntimeError):
    def __init__(self, path: str, attempts: int, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.attempts = attempts


class PortfolioApiClient:
    """Reads the portfolio endpoints with exponential-backoff retries.

    Transport failures and non-2xx responses are retried up to
    ``max_attempts`` times in total, sleeping ``retry_delay_seconds * 2**n``
    after the n-th failed attempt. Sleeps are asyncio sleeps, so cancelling
    the calling task abandons any retry still pending.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        max_attempts: int = 3,
        retry_delay_seconds: float = 1.0,
        prefix: str = PORTFOLIO_API_PREFIX,
    ) -> None:
        self.http = http
        self.max_attempts = max(1, int(max_attempts))
        self.retry_delay_seconds = max(0.0, float(retry_delay_seconds))
        self.prefix = prefix.rstrip("/")

    async def get_json(self, path: str) -> Any:
        url = f"{self.prefix}/{path.lstrip('/')}"
        last_error: Exception | None = None

        for attempt in range(self.max_attempts):
            try:
                response = await self.http.get(url)
                response.raise_for_status()
                return response.json()
            except (httpx.HTTPError, ValueError) as exc:
                last_error = exc
                logger.warning(
                    "Portfolio API request failed",
                    extra={"url": url, "attempt": attempt + 1, "error": str(exc)},
                )
                if attempt >= self.max_attempts - 1:
                    break
                await asyncio.sleep(self.retry_delay_seconds * (2**attempt))

        raise ApiRequestError(
            path=url,
            attempts=self.max_attempts,
            message=f"Request to {url} failed after {self.max_attempts} attempts: {last_error}",
        )

    async def get_holdings(self) -> list[dict[str, Any]]:
        return await self.get_json("holdings")

    async def get_allocation(self) -> dict[str, Any]:
        return await self.get_json("allocation")

    async def get_performance(self) -> dict[str, Any]:
        return await self.get_json("performance")

    async def get_summary(self) -> dict[str, Any]:
        return await self.get_json("summary")
