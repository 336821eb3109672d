from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from wealthmanager.models.tables import Allocation, Holding, Performance, PerformancePoint, Summary, Transaction


class PortfolioRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_holdings(self) -> list[Holding]:
        return list(self.db.execute(select(Holding).order_by(Holding.id.asc())).scalars().all())

    def count_holdings(self) -> int:
        return int(self.db.execute(select(func.count(Holding.id))).scalar_one())

    def first_allocation(self) -> Allocation | None:
        return self.db.execute(select(Allocation).order_by(Allocation.id.asc()).limit(1)).scalar_one_or_none()

    def first_performance(self) -> Performance | None:
        return self.db.execute(select(Performance).order_by(Performance.id.asc()).limit(1)).scalar_one_or_none()

    def timeline_for(self, performance_id: int) -> list[PerformancePoint]:
        stmt = (
            select(PerformancePoint)
            .where(PerformancePoint.performance_id == performance_id)
            .order_by(PerformancePoint.position.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def first_summary(self) -> Summary | None:
        return self.db.execute(select(Summary).order_by(Summary.id.asc()).limit(1)).scalar_one_or_none()

    def clear_portfolio(self) -> dict[str, int]:
        # Timeline points first; SQLite does not enforce ON DELETE CASCADE by default.
        deleted: dict[str, int] = {}
        for key, model in (
            ("timeline_points", PerformancePoint),
            ("holdings", Holding),
            ("allocations", Allocation),
            ("performance", Performance),
            ("summaries", Summary),
        ):
            result = self.db.execute(delete(model))
            deleted[key] = int(result.rowcount or 0)
        return deleted

    def add_all(self, rows: list[Any]) -> None:
        self.db.add_all(rows)


class TransactionRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_all(self) -> list[Transaction]:
        return list(self.db.execute(select(Transaction).order_by(Transaction.id.asc())).scalars().all())

    def add(self, title: str, amount: float) -> Transaction:
        row = Transaction(title=title, amount=float(amount))
        self.db.add(row)
        return row
