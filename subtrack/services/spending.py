"""
Spending aggregation over a user's subscriptions.

Every function here is a pure projection over the list it is given: nothing
is cached and nothing is written back, so the results are always derived from
the current collection and the module is safe to call from concurrent
requests. Paused subscriptions are listed by the API but never contribute to
any figure computed here.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from subtrack.core.logger import get_logger
from subtrack.models import Frequency, Subscription

logger = get_logger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# (multiplier, divisor) applied to the billing-cycle price.
MONTHLY_FACTORS: dict[Frequency, tuple[int, int]] = {
    Frequency.WEEKLY: (4, 1),
    Frequency.MONTHLY: (1, 1),
    Frequency.QUARTERLY: (1, 3),
    Frequency.YEARLY: (1, 12),
}
YEARLY_FACTORS: dict[Frequency, tuple[int, int]] = {
    Frequency.WEEKLY: (52, 1),
    Frequency.MONTHLY: (12, 1),
    Frequency.QUARTERLY: (4, 1),
    Frequency.YEARLY: (1, 1),
}


@dataclass(frozen=True)
class SpendingSummary:
    monthly_spend: Decimal
    yearly_spend: Decimal
    active_count: int
    upcoming_count: int
    horizon_days: int


def _label(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _coerce_frequency(value: Any) -> Optional[Frequency]:
    if isinstance(value, Frequency):
        return value
    try:
        return Frequency(value)
    except ValueError:
        return None


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _normalize(price: Any, frequency: Any, factors: dict[Frequency, tuple[int, int]]) -> Decimal:
    freq = _coerce_frequency(frequency)
    if freq is None:
        logger.warning("Unknown billing frequency %r counted as zero", frequency)
        return ZERO
    multiplier, divisor = factors[freq]
    amount = _as_decimal(price) * multiplier
    return amount / divisor if divisor != 1 else amount


def monthly_equivalent(price: Any, frequency: Any) -> Decimal:
    """Price normalized to one month; unknown frequencies yield zero."""
    return _normalize(price, frequency, MONTHLY_FACTORS)


def yearly_equivalent(price: Any, frequency: Any) -> Decimal:
    """Price normalized to one year; unknown frequencies yield zero."""
    return _normalize(price, frequency, YEARLY_FACTORS)


def _active(subs: Iterable[Subscription]) -> list[Subscription]:
    return [s for s in subs if not s.is_paused]


def total_monthly_spend(subs: Iterable[Subscription]) -> Decimal:
    return sum((monthly_equivalent(s.price, s.frequency) for s in _active(subs)), ZERO)


def total_yearly_spend(subs: Iterable[Subscription]) -> Decimal:
    return sum((yearly_equivalent(s.price, s.frequency) for s in _active(subs)), ZERO)


def category_breakdown(subs: Iterable[Subscription]) -> list[tuple[str, Decimal]]:
    """
    Monthly spend per category, largest first.

    Categories keep the order they were first seen in when amounts tie.
    """
    totals: dict[str, Decimal] = {}
    for sub in _active(subs):
        key = _label(sub.category)
        totals[key] = totals.get(key, ZERO) + monthly_equivalent(sub.price, sub.frequency)
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def monthly_trend(subs: Iterable[Subscription]) -> list[tuple[str, Decimal]]:
    """
    Twelve month buckets, Jan to Dec.

    Subscriptions carry no payment history, so each bucket repeats the
    current monthly total.
    """
    current = total_monthly_spend(subs)
    return [(label, current) for label in MONTH_LABELS]


def active_count(subs: Iterable[Subscription]) -> int:
    return len(_active(subs))


def _today(now: date | datetime | None) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def upcoming_count(
    subs: Iterable[Subscription],
    horizon_days: int = 7,
    now: date | datetime | None = None,
) -> int:
    """Active subscriptions due on or before today + horizon_days, overdue ones included."""
    cutoff = _today(now) + timedelta(days=horizon_days)
    return sum(1 for s in _active(subs) if s.next_payment <= cutoff)


def spending_summary(
    subs: Sequence[Subscription],
    horizon_days: int = 7,
    now: date | datetime | None = None,
) -> SpendingSummary:
    return SpendingSummary(
        monthly_spend=total_monthly_spend(subs),
        yearly_spend=total_yearly_spend(subs),
        active_count=active_count(subs),
        upcoming_count=upcoming_count(subs, horizon_days=horizon_days, now=now),
        horizon_days=horizon_days,
    )


def round_money(amount: Any) -> Decimal:
    return _as_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Any, symbol: str = "₹") -> str:
    """Format an amount with a fixed symbol and two decimals, e.g. '₹1234.56'."""
    return f"{symbol}{round_money(amount):.2f}"
