"""
Domain records for SubTrack.
"""
from .subscription import Category, Frequency, Subscription
from .user import User

__all__ = ["Category", "Frequency", "Subscription", "User"]
