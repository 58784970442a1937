"""
Subscriptions API Routes
CRUD and pause toggling for the caller's subscriptions
"""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from subtrack.api.dependencies import get_current_user, get_storage
from subtrack.models import Category, User
from subtrack.schemas.subscription import SubscriptionOut, SubscriptionPayload
from subtrack.storage import MemoryStorage

router = APIRouter()

NOT_FOUND = "Subscription not found"


@router.get("", response_model=List[SubscriptionOut])
async def list_subscriptions(
    category: Optional[Category] = None,
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
) -> List[SubscriptionOut]:
    """
    List the caller's subscriptions, paused ones included
    """
    subs = await storage.get_subscriptions_by_user(user.id, category=category)
    return [SubscriptionOut.from_record(s) for s in subs]


@router.post("", response_model=SubscriptionOut, status_code=status.HTTP_201_CREATED)
async def create_subscription(
    payload: SubscriptionPayload,
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
) -> SubscriptionOut:
    sub = await storage.create_subscription(user.id, payload)
    return SubscriptionOut.from_record(sub)


@router.get("/{subscription_id}", response_model=SubscriptionOut)
async def get_subscription(
    subscription_id: int,
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
) -> SubscriptionOut:
    sub = await storage.get_subscription(user.id, subscription_id)
    if not sub:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return SubscriptionOut.from_record(sub)


@router.patch("/{subscription_id}", response_model=SubscriptionOut)
async def update_subscription(
    subscription_id: int,
    payload: SubscriptionPayload,
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
) -> SubscriptionOut:
    """
    Replace every editable field; omitted flags keep their current value
    """
    sub = await storage.update_subscription(user.id, subscription_id, payload)
    if not sub:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return SubscriptionOut.from_record(sub)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscription(
    subscription_id: int,
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
) -> Response:
    removed = await storage.delete_subscription(user.id, subscription_id)
    if not removed:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{subscription_id}/pause", response_model=SubscriptionOut)
async def toggle_pause(
    subscription_id: int,
    user: User = Depends(get_current_user),
    storage: MemoryStorage = Depends(get_storage),
) -> SubscriptionOut:
    sub = await storage.toggle_pause_subscription(user.id, subscription_id)
    if not sub:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return SubscriptionOut.from_record(sub)
