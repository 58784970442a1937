"""Bearer-token verification against the identity provider's signing key."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from subtrack.config import Settings, get_settings
from subtrack.core.exceptions import AuthenticationError
from subtrack.core.logger import get_logger
from subtrack.models import User
from subtrack.storage import MemoryStorage, get_storage

logger = get_logger(__name__)

AUTH_SCHEME = HTTPBearer(auto_error=False)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Identity:
    uid: str
    email: str = ""


class TokenVerifier:
    """Validates identity-provider JWTs and extracts the caller identity."""

    def __init__(
        self,
        key: str,
        algorithm: str = "HS256",
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
    ) -> None:
        self.key = key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenVerifier":
        return cls(
            key=settings.auth_secret_key.get_secret_value(),
            algorithm=settings.auth_algorithm,
            issuer=settings.auth_issuer,
            audience=settings.auth_audience,
        )

    def verify(self, token: str) -> Identity:
        options = {"require": ["exp", "sub"], "verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options=options,
            )
        except jwt.PyJWTError as exc:
            raise AuthenticationError(f"{type(exc).__name__}: {exc}") from exc

        uid = str(payload.get("uid") or payload.get("sub") or "").strip()
        if not uid:
            raise AuthenticationError("Token has no subject")
        return Identity(uid=uid, email=str(payload.get("email") or ""))


def create_access_token(
    subject: str,
    email: str = "",
    settings: Optional[Settings] = None,
    ttl_minutes: Optional[int] = None,
    extra: Dict[str, Any] | None = None,
) -> str:
    """Mint a token the verifier accepts; used for local development and tests."""
    settings = settings or get_settings()
    ttl = settings.auth_token_ttl_minutes if ttl_minutes is None else ttl_minutes
    payload: Dict[str, Any] = {
        "sub": subject,
        "email": email,
        "iat": int(now_utc().timestamp()),
        "exp": int((now_utc() + timedelta(minutes=ttl)).timestamp()),
    }
    if settings.auth_issuer:
        payload["iss"] = settings.auth_issuer
    if settings.auth_audience:
        payload["aud"] = settings.auth_audience
    if extra:
        payload.update(extra)
    return jwt.encode(payload, settings.auth_secret_key.get_secret_value(), algorithm=settings.auth_algorithm)


def get_verifier(request: Request) -> TokenVerifier:
    return request.app.state.verifier


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(AUTH_SCHEME),
    verifier: TokenVerifier = Depends(get_verifier),
    storage: MemoryStorage = Depends(get_storage),
) -> User:
    if creds is None or not creds.credentials:
        logger.warning("Missing bearer token", extra={"path": request.url.path})
        raise _unauthorized()
    try:
        identity = verifier.verify(creds.credentials)
    except AuthenticationError as exc:
        logger.warning("Rejected bearer token: %s", exc, extra={"path": request.url.path})
        raise _unauthorized()

    user = await storage.get_user(identity.uid)
    if user is None:
        user = await storage.create_user(identity.uid, identity.email)
    return user
