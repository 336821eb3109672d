from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wealthmanager.models.schemas import (
    AllocationBucket,
    AllocationResponse,
    HoldingResponse,
    PerformanceResponse,
    PerformanceReturns,
    Performer,
    SummaryResponse,
    TimelinePoint,
)
from wealthmanager.models.tables import Allocation, Holding, Performance, PerformancePoint, Summary
from wealthmanager.services.errors import NotFoundError, StoreError
from wealthmanager.storage.repository import PortfolioRepository

logger = logging.getLogger(__name__)


class PortfolioService:
    """Read-only access to the seeded portfolio records.

    Stored figures are returned as-is; value, gain/loss and the summary
    aggregates are never recomputed from quantities and prices.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = PortfolioRepository(db=db)

    def get_holdings(self) -> list[HoldingResponse]:
        try:
            rows = self.repo.list_holdings()
        except SQLAlchemyError as exc:
            raise StoreError("Server error fetching holdings.") from exc
        if not rows:
            raise NotFoundError("No holdings found.")
        return [self.holding_to_response(row) for row in rows]

    def get_allocation(self) -> AllocationResponse:
        try:
            row = self.repo.first_allocation()
        except SQLAlchemyError as exc:
            raise StoreError("Server error fetching allocation data.") from exc
        if row is None:
            raise NotFoundError("Allocation data not found.")
        return self.allocation_to_response(row)

    def get_performance(self) -> PerformanceResponse:
        try:
            row = self.repo.first_performance()
            points = self.repo.timeline_for(row.id) if row is not None else []
        except SQLAlchemyError as exc:
            raise StoreError("Server error fetching performance data.") from exc
        if row is None:
            raise NotFoundError("Performance data not found.")
        return self.performance_to_response(row, points)

    def get_summary(self) -> SummaryResponse:
        try:
            row = self.repo.first_summary()
        except SQLAlchemyError as exc:
            raise StoreError("Server error fetching summary data.") from exc
        if row is None:
            raise NotFoundError("Summary data not found.")
        return self.summary_to_response(row)

    @staticmethod
    def holding_to_response(row: Holding) -> HoldingResponse:
        return HoldingResponse(
            id=row.id,
            symbol=row.symbol,
            name=row.name,
            quantity=row.quantity,
            avg_price=row.avg_price,
            current_price=row.current_price,
            sector=row.sector,
            market_cap=row.market_cap,
            value=row.value,
            gain_loss=row.gain_loss,
            gain_loss_percent=row.gain_loss_percent,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def allocation_to_response(row: Allocation) -> AllocationResponse:
        return AllocationResponse(
            id=row.id,
            by_sector=[AllocationBucket.model_validate(item) for item in row.by_sector_json or []],
            by_market_cap=[AllocationBucket.model_validate(item) for item in row.by_market_cap_json or []],
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def performance_to_response(row: Performance, points: list[PerformancePoint]) -> PerformanceResponse:
        return PerformanceResponse(
            id=row.id,
            timeline=[
                TimelinePoint(date=point.date, portfolio=point.portfolio, nifty50=point.nifty50, gold=point.gold)
                for point in points
            ],
            returns=PerformanceReturns.model_validate(row.returns_json or {}),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def summary_to_response(row: Summary) -> SummaryResponse:
        return SummaryResponse(
            id=row.id,
            total_value=row.total_value,
            total_invested=row.total_invested,
            total_gain_loss=row.total_gain_loss,
            total_gain_loss_percent=row.total_gain_loss_percent,
            top_performer=Performer(
                symbol=row.top_performer_symbol,
                name=row.top_performer_name,
                gain_percent=row.top_performer_gain_percent,
            ),
            worst_performer=Performer(
                symbol=row.worst_performer_symbol,
                name=row.worst_performer_name,
                gain_percent=row.worst_performer_gain_percent,
            ),
            diversification_score=row.diversification_score,
            risk_level=row.risk_level,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
