"""Shared API dependencies."""
from fastapi import Request

from subtrack.config import Settings
from subtrack.core.security import get_current_user
from subtrack.storage import get_storage


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


__all__ = ["get_app_settings", "get_current_user", "get_storage"]
