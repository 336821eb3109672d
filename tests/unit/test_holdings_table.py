from __future__ import annotations

from datetime import datetime

import pytest

from wealthmanager.dashboard.views import SortState, next_sort_state, table_rows
from wealthmanager.models.schemas import HoldingResponse


def _holding(idx: int, symbol: str, name: str, value: float, gain_loss: float = 0.0) -> HoldingResponse:
    stamp = datetime(2025, 1, 1)
    return HoldingResponse(
        id=idx,
        symbol=symbol,
        name=name,
        quantity=10,
        avg_price=100.0,
        current_price=value / 10,
        sector="Technology",
        market_cap="Large",
        value=value,
        gain_loss=gain_loss,
        gain_loss_percent=gain_loss / 10,
        created_at=stamp,
        updated_at=stamp,
    )


@pytest.fixture
def holdings() -> list[HoldingResponse]:
    return [
        _holding(1, "INFY", "Infosys Limited", 201075, 21075),
        _holding(2, "HDFCBANK", "HDFC Bank Limited", 126424, -5576),
        _holding(3, "TCS", "Tata Consultan", 258768.8, 18768.75),
        _holding(4, "AXISBANK", "Axis Bank Limited", 126424, 6786),
        _holding(5, "WIPRO", "Wipro Limited", 72840, 5340),
    ]


def _symbols(rows: list[HoldingResponse]) -> list[str]:
    return [row.symbol for row in rows]


def test_default_order_is_insertion_order(holdings) -> None:
    assert _symbols(table_rows(holdings)) == ["INFY", "HDFCBANK", "TCS", "AXISBANK", "WIPRO"]


def test_filter_is_case_insensitive_on_name_or_symbol(holdings) -> None:
    assert _symbols(table_rows(holdings, search_term="BaNk")) == ["HDFCBANK", "AXISBANK"]
    assert _symbols(table_rows(holdings, search_term="tata")) == ["TCS"]
    assert _symbols(table_rows(holdings, search_term="wip")) == ["WIPRO"]
    assert table_rows(holdings, search_term="nothing-matches") == []


def test_filter_treats_term_literally(holdings) -> None:
    assert table_rows(holdings, search_term=".*") == []


def test_numeric_sort_is_stable(holdings) -> None:
    rows = table_rows(holdings, sort=SortState(column="value", direction="asc"))

    # HDFCBANK and AXISBANK tie on value and keep their insertion order.
    assert _symbols(rows) == ["WIPRO", "HDFCBANK", "AXISBANK", "INFY", "TCS"]


def test_string_sort_is_lexicographic(holdings) -> None:
    rows = table_rows(holdings, sort=SortState(column="symbol", direction="asc"))

    assert _symbols(rows) == ["AXISBANK", "HDFCBANK", "INFY", "TCS", "WIPRO"]


def test_string_sort_ignores_case() -> None:
    rows = [
        _holding(1, "ITC", "ITC Limited", 100),
        _holding(2, "INFY", "Infosys Limited", 200),
        _holding(3, "ASIANPAINT", "Asian Paints Limited", 300),
    ]

    ordered = table_rows(rows, sort=SortState(column="name", direction="asc"))

    assert _symbols(ordered) == ["ASIANPAINT", "INFY", "ITC"]


def test_second_click_reverses_filtered_order(holdings) -> None:
    first = next_sort_state(SortState(), "gainLoss")
    second = next_sort_state(first, "gainLoss")

    assert first == SortState(column="gainLoss", direction="asc")
    assert second == SortState(column="gainLoss", direction="desc")

    asc = table_rows(holdings, search_term="limited", sort=first)
    desc = table_rows(holdings, search_term="limited", sort=second)
    assert _symbols(desc) == list(reversed(_symbols(asc)))


def test_descending_with_ties_is_exact_reverse(holdings) -> None:
    asc = table_rows(holdings, sort=SortState(column="value", direction="asc"))
    desc = table_rows(holdings, sort=SortState(column="value", direction="desc"))

    assert _symbols(desc) == list(reversed(_symbols(asc)))


def test_selecting_new_column_resets_to_ascending() -> None:
    current = SortState(column="value", direction="desc")

    assert next_sort_state(current, "name") == SortState(column="name", direction="asc")


def test_unknown_sort_params_fall_back_to_unsorted() -> None:
    assert SortState.from_params("quantity", "desc") == SortState()
    assert SortState.from_params("value", "sideways") == SortState(column="value", direction="asc")

    with pytest.raises(ValueError):
        next_sort_state(SortState(), "sector")


def test_empty_holdings_produce_no_rows() -> None:
    assert table_rows([], search_term="x", sort=SortState(column="value")) == []
