from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import pandas as pd

from wealthmanager.models.schemas import (
    RETURN_HORIZONS,
    RETURN_SERIES,
    AllocationBucket,
    AllocationResponse,
    HoldingResponse,
    PerformanceResponse,
    SummaryResponse,
)

SortDirection = Literal["asc", "desc"]
Tone = Literal["positive", "negative"]

# Wire name -> DataFrame column for every sortable table column.
SORTABLE_COLUMNS: dict[str, str] = {
    "symbol": "symbol",
    "name": "name",
    "value": "value",
    "gainLoss": "gain_loss",
    "gainLossPercent": "gain_loss_percent",
}

SERIES_LABELS: dict[str, str] = dict(zip(RETURN_SERIES, ("Portfolio", "Nifty 50", "Gold")))

HORIZON_LABELS: dict[str, str] = {
    "1month": "1 Month",
    "3months": "3 Months",
    "1year": "1 Year",
}


def tone_for(value: float) -> Tone:
    return "positive" if value >= 0 else "negative"


@dataclass(frozen=True)
class SortState:
    column: str | None = None
    direction: SortDirection = "asc"

    @classmethod
    def from_params(cls, column: str | None, direction: str | None) -> SortState:
        if column not in SORTABLE_COLUMNS:
            return cls()
        return cls(column=column, direction="desc" if direction == "desc" else "asc")


def next_sort_state(current: SortState, column: str) -> SortState:
    if column not in SORTABLE_COLUMNS:
        raise ValueError(f"Column is not sortable: {column}")
    if current.column == column:
        return SortState(column=column, direction="desc" if current.direction == "asc" else "asc")
    return SortState(column=column, direction="asc")


def holdings_frame(holdings: list[HoldingResponse]) -> pd.DataFrame:
    return pd.DataFrame([holding.model_dump() for holding in holdings])


def filter_holdings(frame: pd.DataFrame, search_term: str | None) -> pd.DataFrame:
    needle = (search_term or "").lower()
    if frame.empty or not needle:
        return frame
    mask = frame["name"].str.lower().str.contains(needle, regex=False) | frame["symbol"].str.lower().str.contains(
        needle, regex=False
    )
    return frame[mask]


def _sort_key(column: pd.Series) -> pd.Series:
    # Text columns compare case-insensitively.
    if pd.api.types.is_string_dtype(column):
        return column.str.lower()
    return column


def sort_holdings(frame: pd.DataFrame, sort: SortState) -> pd.DataFrame:
    if frame.empty or sort.column is None:
        return frame
    ordered = frame.sort_values(SORTABLE_COLUMNS[sort.column], kind="stable", key=_sort_key)
    if sort.direction == "desc":
        return ordered.iloc[::-1]
    return ordered


def table_rows(
    holdings: list[HoldingResponse],
    search_term: str | None = None,
    sort: SortState | None = None,
) -> list[HoldingResponse]:
    frame = holdings_frame(holdings)
    frame = sort_holdings(filter_holdings(frame, search_term), sort or SortState())
    return [holdings[idx] for idx in frame.index]


@dataclass(frozen=True)
class PieSlice:
    name: str
    value: float
    percentage: float

    @property
    def label(self) -> str:
        return f"{self.name} {self.percentage:.1f}%"


def pie_slices(buckets: list[AllocationBucket]) -> list[PieSlice]:
    return [PieSlice(name=bucket.name, value=bucket.value, percentage=bucket.percentage) for bucket in buckets]


def allocation_charts(allocation: AllocationResponse) -> dict[str, list[PieSlice]]:
    return {
        "bySector": pie_slices(allocation.by_sector),
        "byMarketCap": pie_slices(allocation.by_market_cap),
    }


@dataclass(frozen=True)
class LineChart:
    labels: list[str]
    series: dict[str, list[float]] = field(default_factory=dict)


def line_series(performance: PerformanceResponse) -> LineChart:
    if not performance.timeline:
        return LineChart(labels=[], series={key: [] for key in RETURN_SERIES})
    frame = pd.DataFrame([point.model_dump() for point in performance.timeline])
    labels = pd.to_datetime(frame["date"]).dt.strftime("%b %Y").tolist()
    return LineChart(
        labels=labels,
        series={key: [float(v) for v in frame[key].tolist()] for key in RETURN_SERIES},
    )


@dataclass(frozen=True)
class ReturnEntry:
    series: str
    label: str
    value: float
    tone: Tone


@dataclass(frozen=True)
class ReturnsCard:
    horizon: str
    label: str
    entries: list[ReturnEntry]


def returns_cards(performance: PerformanceResponse) -> list[ReturnsCard]:
    cards: list[ReturnsCard] = []
    for horizon in RETURN_HORIZONS:
        entries = []
        for series in RETURN_SERIES:
            value = getattr(performance.returns, series).for_horizon(horizon)
            entries.append(ReturnEntry(series=series, label=SERIES_LABELS[series], value=value, tone=tone_for(value)))
        cards.append(ReturnsCard(horizon=horizon, label=HORIZON_LABELS[horizon], entries=entries))
    return cards


@dataclass(frozen=True)
class OverviewCard:
    title: str
    value: float
    kind: Literal["currency", "percent", "count"]
    tone: Tone | None = None


def overview_cards(summary: SummaryResponse, holdings_count: int) -> list[OverviewCard]:
    return [
        OverviewCard(title="Total Portfolio Value", value=summary.total_value, kind="currency"),
        OverviewCard(
            title="Total Gain/Loss",
            value=summary.total_gain_loss,
            kind="currency",
            tone=tone_for(summary.total_gain_loss),
        ),
        OverviewCard(
            title="Performance % (Total)",
            value=summary.total_gain_loss_percent,
            kind="percent",
            tone=tone_for(summary.total_gain_loss_percent),
        ),
        OverviewCard(title="Number of Holdings", value=holdings_count, kind="count"),
    ]


def format_inr(value: float, decimals: int = 2) -> str:
    """Group digits the Indian way (12,34,567.89) and prefix the rupee sign."""
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.{decimals}f}".partition(".")
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail]) if groups else tail
    fraction = fraction.rstrip("0")
    return f"{sign}₹{grouped}" + (f".{fraction}" if fraction else "")


def format_signed_percent(value: float, decimals: int = 2) -> str:
    return f"{'+' if value >= 0 else ''}{value:.{decimals}f}%"
