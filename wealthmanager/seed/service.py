from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wealthmanager.models.schemas import SampleData
from wealthmanager.models.tables import Allocation, Holding, Performance, PerformancePoint, Summary
from wealthmanager.seed.sample_data import load_sample_data
from wealthmanager.services.errors import StoreError
from wealthmanager.storage.repository import PortfolioRepository

logger = logging.getLogger(__name__)


class SeedService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = PortfolioRepository(db=db)

    def import_sample_data(self, sample: SampleData | None = None) -> dict[str, int]:
        """Replace every portfolio collection with ``sample``.

        Deletion and insertion share one transaction, so a failed import
        leaves the previous data in place.
        """
        data = sample or load_sample_data()
        try:
            self.repo.clear_portfolio()

            self.repo.add_all(
                [
                    Holding(
                        symbol=item.symbol,
                        name=item.name,
                        quantity=item.quantity,
                        avg_price=item.avg_price,
                        current_price=item.current_price,
                        sector=item.sector,
                        market_cap=item.market_cap,
                        value=item.value,
                        gain_loss=item.gain_loss,
                        gain_loss_percent=item.gain_loss_percent,
                    )
                    for item in data.holdings
                ]
            )
            self.repo.add_all(
                [
                    Allocation(
                        by_sector_json=[bucket.model_dump() for bucket in data.allocation.by_sector],
                        by_market_cap_json=[bucket.model_dump() for bucket in data.allocation.by_market_cap],
                    )
                ]
            )

            performance = Performance(returns_json=data.performance.returns.model_dump(by_alias=True))
            self.repo.add_all([performance])
            self.db.flush()
            self.repo.add_all(
                [
                    PerformancePoint(
                        performance_id=performance.id,
                        position=position,
                        date=point.date,
                        portfolio=point.portfolio,
                        nifty50=point.nifty50,
                        gold=point.gold,
                    )
                    for position, point in enumerate(data.performance.timeline)
                ]
            )

            summary = data.summary
            self.repo.add_all(
                [
                    Summary(
                        total_value=summary.total_value,
                        total_invested=summary.total_invested,
                        total_gain_loss=summary.total_gain_loss,
                        total_gain_loss_percent=summary.total_gain_loss_percent,
                        top_performer_symbol=summary.top_performer.symbol,
                        top_performer_name=summary.top_performer.name,
                        top_performer_gain_percent=summary.top_performer.gain_percent,
                        worst_performer_symbol=summary.worst_performer.symbol,
                        worst_performer_name=summary.worst_performer.name,
                        worst_performer_gain_percent=summary.worst_performer.gain_percent,
                        diversification_score=summary.diversification_score,
                        risk_level=summary.risk_level,
                    )
                ]
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Sample data import failed", extra={"error": str(exc)})
            raise StoreError(f"Error importing data: {exc}") from exc

        counts = {
            "holdings": len(data.holdings),
            "allocations": 1,
            "performance": 1,
            "timeline_points": len(data.performance.timeline),
            "summaries": 1,
        }
        logger.info("Sample data imported", extra=counts)
        return counts

    def destroy_data(self) -> dict[str, int]:
        try:
            deleted = self.repo.clear_portfolio()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Portfolio data destroy failed", extra={"error": str(exc)})
            raise StoreError(f"Error destroying data: {exc}") from exc

        logger.info("Portfolio data destroyed", extra=deleted)
        return deleted

    def seed_if_empty(self) -> bool:
        try:
            has_holdings = self.repo.count_holdings() > 0
        except SQLAlchemyError as exc:
            raise StoreError("Server error checking holdings.") from exc
        if has_holdings:
            return False
        self.import_sample_data()
        return True
