"""
Health API Routes
"""
from fastapi import APIRouter, Depends

from subtrack.api.dependencies import get_app_settings, get_storage
from subtrack.config import Settings
from subtrack.storage import MemoryStorage

router = APIRouter()


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    storage: MemoryStorage = Depends(get_storage),
) -> dict:
    """Application and storage health"""
    return {
        "status": "healthy",
        "environment": settings.app_env,
        "storage": storage.stats(),
    }
