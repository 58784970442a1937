from __future__ import annotations

from fastapi import APIRouter, Depends

from subtrack.api.dependencies import get_current_user
from subtrack.models import User
from subtrack.schemas.user import UserOut

router = APIRouter()


@router.get("/user", response_model=UserOut)
async def me(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut(id=user.id, email=user.email)
