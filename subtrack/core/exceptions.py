"""Custom exception types for domain and API layers."""


class AppError(Exception):
    """Base app exception."""


class AuthenticationError(AppError):
    """Bearer credential missing, malformed, expired or otherwise rejected."""
