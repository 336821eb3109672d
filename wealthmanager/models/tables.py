from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from wealthmanager.models.db import Base
from wealthmanager.utils.time import utc_now

MARKET_CAP_CHOICES = ("Large", "Mid", "Small")


class Holding(Base):
    __tablename__ = "holdings"
    __table_args__ = (
        CheckConstraint(
            "market_cap IN (" + ", ".join(f"'{choice}'" for choice in MARKET_CAP_CHOICES) + ")",
            name="ck_holdings_market_cap",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    symbol: Mapped[str] = mapped_column(String(30), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    avg_price: Mapped[float] = mapped_column(Float, nullable=False)
    current_price: Mapped[float] = mapped_column(Float, nullable=False)
    sector: Mapped[str] = mapped_column(String(60), nullable=False, index=True)
    market_cap: Mapped[str] = mapped_column(String(10), nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    gain_loss: Mapped[float] = mapped_column(Float, nullable=False)
    gain_loss_percent: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)


class Allocation(Base):
    __tablename__ = "allocations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Ordered lists of {"name", "value", "percentage"} buckets.
    by_sector_json: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    by_market_cap_json: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)


class Performance(Base):
    __tablename__ = "performance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    returns_json: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)


class PerformancePoint(Base):
    __tablename__ = "performance_points"
    __table_args__ = (UniqueConstraint("performance_id", "position", name="uq_performance_point_position"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    performance_id: Mapped[int] = mapped_column(
        ForeignKey("performance.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    portfolio: Mapped[float] = mapped_column(Float, nullable=False)
    nifty50: Mapped[float] = mapped_column(Float, nullable=False)
    gold: Mapped[float] = mapped_column(Float, nullable=False)


class Summary(Base):
    __tablename__ = "summaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    total_value: Mapped[float] = mapped_column(Float, nullable=False)
    total_invested: Mapped[float] = mapped_column(Float, nullable=False)
    total_gain_loss: Mapped[float] = mapped_column(Float, nullable=False)
    total_gain_loss_percent: Mapped[float] = mapped_column(Float, nullable=False)
    top_performer_symbol: Mapped[str] = mapped_column(String(30), nullable=False)
    top_performer_name: Mapped[str] = mapped_column(String(120), nullable=False)
    top_performer_gain_percent: Mapped[float] = mapped_column(Float, nullable=False)
    worst_performer_symbol: Mapped[str] = mapped_column(String(30), nullable=False)
    worst_performer_name: Mapped[str] = mapped_column(String(120), nullable=False)
    worst_performer_gain_percent: Mapped[float] = mapped_column(Float, nullable=False)
    diversification_score: Mapped[float] = mapped_column(Float, nullable=False)
    risk_level: Mapped[str] = mapped_column(String(30), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)
