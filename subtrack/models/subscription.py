"""Subscription record and the enumerations it is validated against."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class Frequency(str, Enum):
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    YEARLY = "Yearly"


class Category(str, Enum):
    ENTERTAINMENT = "Entertainment"
    NEWS = "News"
    FOOD = "Food"
    HEALTH = "Health"
    SOFTWARE = "Software"
    OTHER = "Other"


@dataclass
class Subscription:
    id: int
    user_id: str
    name: str
    category: Category
    price: Decimal
    frequency: Frequency
    next_payment: date
    notifications_enabled: bool = True
    is_paused: bool = False
