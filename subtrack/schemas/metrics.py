from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Amount(BaseModel):
    value: float
    formatted: str


class SpendingSummaryOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    monthly_spend: Amount
    yearly_spend: Amount
    active_count: int
    upcoming_count: int
    horizon_days: int


class CategorySpendOut(BaseModel):
    category: str
    amount: Amount


class TrendPointOut(BaseModel):
    month: str
    amount: Amount
