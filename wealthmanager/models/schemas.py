from __future__ import annotations

import datetime as dt
import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wealthmanager.utils.time import as_utc


MarketCap = Literal["Large", "Mid", "Small"]
ReturnHorizon = Literal["1month", "3months", "1year"]

RETURN_HORIZONS: tuple[ReturnHorizon, ...] = ("1month", "3months", "1year")
RETURN_SERIES: tuple[str, ...] = ("portfolio", "nifty50", "gold")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordMeta(CamelModel):
    id: int
    created_at: dt.datetime
    updated_at: dt.datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def stamps_in_utc(cls, value: dt.datetime) -> dt.datetime:
        return as_utc(value)


class HoldingData(CamelModel):
    symbol: str = Field(min_length=1)
    name: str = Field(min_length=1)
    quantity: float
    avg_price: float
    current_price: float
    sector: str
    market_cap: MarketCap
    value: float
    gain_loss: float
    gain_loss_percent: float


class HoldingResponse(HoldingData, RecordMeta):
    pass


class AllocationBucket(CamelModel):
    name: str
    value: float
    percentage: float


class AllocationData(CamelModel):
    by_sector: list[AllocationBucket]
    by_market_cap: list[AllocationBucket]


class AllocationResponse(AllocationData, RecordMeta):
    pass


class TimelinePoint(CamelModel):
    date: dt.date
    portfolio: float
    nifty50: float
    gold: float


class HorizonReturns(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    one_month: float = Field(alias="1month")
    three_months: float = Field(alias="3months")
    one_year: float = Field(alias="1year")

    def for_horizon(self, horizon: ReturnHorizon) -> float:
        return self.model_dump(by_alias=True)[horizon]


class PerformanceReturns(CamelModel):
    portfolio: HorizonReturns
    nifty50: HorizonReturns
    gold: HorizonReturns


class PerformanceData(CamelModel):
    timeline: list[TimelinePoint]
    returns: PerformanceReturns


class PerformanceResponse(PerformanceData, RecordMeta):
    pass


class Performer(CamelModel):
    symbol: str
    name: str
    gain_percent: float


class SummaryData(CamelModel):
    total_value: float
    total_invested: float
    total_gain_loss: float
    total_gain_loss_percent: float
    top_performer: Performer
    worst_performer: Performer
    diversification_score: float
    risk_level: str


class SummaryResponse(SummaryData, RecordMeta):
    pass


class TransactionCreateRequest(CamelModel):
    title: str
    amount: float

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def amount_not_bool(cls, value):
        if isinstance(value, bool):
            raise ValueError("amount must be a number")
        return value

    @field_validator("amount")
    @classmethod
    def amount_finite(cls, value: float) -> float:
        if math.isnan(value) or math.isinf(value):
            raise ValueError("amount must be a finite number")
        return value


class TransactionResponse(RecordMeta):
    title: str
    amount: float


class SampleData(CamelModel):
    holdings: list[HoldingData]
    allocation: AllocationData
    performance: PerformanceData
    summary: SummaryData


class MessageResponse(BaseModel):
    message: str
    errors: Optional[list[dict]] = None
