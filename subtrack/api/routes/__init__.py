"""
API Routes Package
"""
from . import (
    health,
    metrics,
    subscriptions,
    users,
)
