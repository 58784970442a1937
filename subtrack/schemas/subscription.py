from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from subtrack.models import Category, Frequency, Subscription


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubscriptionPayload(CamelModel):
    """Request body shared by create and update."""

    name: str = Field(min_length=1, max_length=200)
    category: Category
    price: Decimal = Field(ge=0, max_digits=16)
    frequency: Frequency
    next_payment: date
    notifications_enabled: Optional[bool] = None
    is_paused: Optional[bool] = None


class SubscriptionOut(CamelModel):
    id: int
    user_id: str
    name: str
    category: str
    price: Decimal
    frequency: str
    next_payment: date
    notifications_enabled: bool
    is_paused: bool

    @classmethod
    def from_record(cls, record: Subscription) -> "SubscriptionOut":
        return cls(
            id=record.id,
            user_id=record.user_id,
            name=record.name,
            category=getattr(record.category, "value", record.category),
            price=record.price,
            frequency=getattr(record.frequency, "value", record.frequency),
            next_payment=record.next_payment,
            notifications_enabled=record.notifications_enabled,
            is_paused=record.is_paused,
        )
