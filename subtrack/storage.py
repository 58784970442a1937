"""
In-memory storage for users and subscriptions.

One MemoryStorage instance is built per application and handed to request
handlers through the get_storage dependency. Records live in plain dicts for
the lifetime of the process. Writes to the same subscription id are last
write wins; there is no locking.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from fastapi import Request

from subtrack.core.logger import get_logger
from subtrack.models import Subscription, User
from subtrack.schemas.subscription import SubscriptionPayload

logger = get_logger(__name__)


class MemoryStorage:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.subscriptions: dict[int, Subscription] = {}
        self._next_subscription_id = 1

    async def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def create_user(self, user_id: str, email: str = "") -> User:
        user = User(id=user_id, email=email)
        self.users[user_id] = user
        logger.info("Created user record", extra={"user_id": user_id})
        return user

    async def get_subscriptions_by_user(
        self, user_id: str, category: Optional[str] = None
    ) -> list[Subscription]:
        subs = [s for s in self.subscriptions.values() if s.user_id == user_id]
        if category:
            subs = [s for s in subs if s.category == category]
        return subs

    def _owned(self, user_id: str, sub_id: int) -> Optional[Subscription]:
        sub = self.subscriptions.get(sub_id)
        if sub is None or sub.user_id != user_id:
            return None
        return sub

    async def get_subscription(self, user_id: str, sub_id: int) -> Optional[Subscription]:
        return self._owned(user_id, sub_id)

    async def create_subscription(self, user_id: str, data: SubscriptionPayload) -> Subscription:
        sub_id = self._next_subscription_id
        self._next_subscription_id += 1
        sub = Subscription(
            id=sub_id,
            user_id=user_id,
            name=data.name,
            category=data.category,
            price=data.price,
            frequency=data.frequency,
            next_payment=data.next_payment,
            notifications_enabled=True if data.notifications_enabled is None else data.notifications_enabled,
            is_paused=False if data.is_paused is None else data.is_paused,
        )
        self.subscriptions[sub_id] = sub
        logger.info("Created subscription %s", sub_id, extra={"user_id": user_id})
        return sub

    async def update_subscription(
        self, user_id: str, sub_id: int, data: SubscriptionPayload
    ) -> Optional[Subscription]:
        existing = self._owned(user_id, sub_id)
        if existing is None:
            return None
        changes: dict[str, Any] = {
            "name": data.name,
            "category": data.category,
            "price": data.price,
            "frequency": data.frequency,
            "next_payment": data.next_payment,
        }
        if data.notifications_enabled is not None:
            changes["notifications_enabled"] = data.notifications_enabled
        if data.is_paused is not None:
            changes["is_paused"] = data.is_paused
        updated = replace(existing, **changes)
        self.subscriptions[sub_id] = updated
        return updated

    async def delete_subscription(self, user_id: str, sub_id: int) -> bool:
        if self._owned(user_id, sub_id) is None:
            return False
        del self.subscriptions[sub_id]
        logger.info("Deleted subscription %s", sub_id, extra={"user_id": user_id})
        return True

    async def toggle_pause_subscription(self, user_id: str, sub_id: int) -> Optional[Subscription]:
        existing = self._owned(user_id, sub_id)
        if existing is None:
            return None
        updated = replace(existing, is_paused=not existing.is_paused)
        self.subscriptions[sub_id] = updated
        return updated

    def stats(self) -> dict[str, int]:
        return {"users": len(self.users), "subscriptions": len(self.subscriptions)}


def get_storage(request: Request) -> MemoryStorage:
    """
    Dependency returning the application's storage instance.
    """
    return request.app.state.storage
