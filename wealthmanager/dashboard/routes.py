from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from wealthmanager.config import get_settings
from wealthmanager.dashboard.client import PortfolioApiClient
from wealthmanager.dashboard.loader import DashboardLoadError, load_dashboard
from wealthmanager.dashboard.views import (
    SORTABLE_COLUMNS,
    SortState,
    allocation_charts,
    format_inr,
    format_signed_percent,
    line_series,
    next_sort_state,
    overview_cards,
    returns_cards,
    table_rows,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["dashboard"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))
templates.env.filters["inr"] = format_inr
templates.env.filters["signed_percent"] = format_signed_percent


async def get_portfolio_client(request: Request) -> AsyncGenerator[PortfolioApiClient, None]:
    settings = get_settings()
    if settings.dashboard_api_base_url:
        http = httpx.AsyncClient(base_url=settings.dashboard_api_base_url, timeout=10.0)
    else:
        http = httpx.AsyncClient(transport=httpx.ASGITransport(app=request.app), base_url="http://dashboard.local")
    async with http:
        yield PortfolioApiClient(
            http=http,
            max_attempts=settings.dashboard_retry_attempts,
            retry_delay_seconds=settings.dashboard_retry_delay_seconds,
        )


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    q: str = Query(""),
    sort: str | None = Query(default=None),
    direction: str | None = Query(default=None),
    client: PortfolioApiClient = Depends(get_portfolio_client),
):
    try:
        data = await load_dashboard(client, timeout_seconds=get_settings().dashboard_timeout_seconds)
    except DashboardLoadError as exc:
        logger.warning("Dashboard load failed", extra={"error": str(exc.__cause__ or exc)})
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {"error": str(exc)},
            status_code=503,
        )

    sort_state = SortState.from_params(sort, direction)
    context = {
        "error": None,
        "search": q,
        "sort": sort_state,
        "sort_links": {column: next_sort_state(sort_state, column) for column in SORTABLE_COLUMNS},
        "overview": overview_cards(data.summary, holdings_count=len(data.holdings)),
        "allocation": allocation_charts(data.allocation),
        "timeline": line_series(data.performance),
        "returns": returns_cards(data.performance),
        "rows": table_rows(data.holdings, search_term=q, sort=sort_state),
        "summary": data.summary,
    }
    return templates.TemplateResponse(request, "dashboard.html", context)
