from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from subtrack.api.dependencies import get_app_settings, get_current_user, get_storage
from subtrack.config import Settings
from subtrack.models import User
from subtrack.schemas.metrics import Amount, CategorySpendOut, SpendingSummaryOut, TrendPointOut
from subtrack.services import spending
from subtrack.storage import MemoryStorage

router = APIRouter()


def _amount(value: Decimal, symbol: str) -> Amount:
    return Amount(
        value=float(spending.round_money(value)),
        formatted=spending.format_currency(value, symbol),
    )


@router.get("", response_model=SpendingSummaryOut)
async def spending_overview(
    horizon_days: Optional[int] = Query(default=None, alias="horizonDays", ge=0, le=366),
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> SpendingSummaryOut:
    """Dashboard cards: monthly and yearly spend, active and upcoming counts."""
    subs = await storage.get_subscriptions_by_user(user.id)
    horizon = settings.upcoming_horizon_days if horizon_days is None else horizon_days
    summary = spending.spending_summary(subs, horizon_days=horizon)
    symbol = settings.currency_symbol
    return SpendingSummaryOut(
        monthly_spend=_amount(summary.monthly_spend, symbol),
        yearly_spend=_amount(summary.yearly_spend, symbol),
        active_count=summary.active_count,
        upcoming_count=summary.upcoming_count,
        horizon_days=summary.horizon_days,
    )


@router.get("/categories", response_model=List[CategorySpendOut])
async def spending_by_category(
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> List[CategorySpendOut]:
    subs = await storage.get_subscriptions_by_user(user.id)
    return [
        CategorySpendOut(category=category, amount=_amount(amount, settings.currency_symbol))
        for category, amount in spending.category_breakdown(subs)
    ]


@router.get("/trend", response_model=List[TrendPointOut])
async def spending_trend(
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> List[TrendPointOut]:
    subs = await storage.get_subscriptions_by_user(user.id)
    return [
        TrendPointOut(month=label, amount=_amount(amount, settings.currency_symbol))
        for label, amount in spending.monthly_trend(subs)
    ]
