"""
SubTrack - FastAPI Application
Subscription tracking and spending metrics API
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from subtrack.api.errors import validation_exception_handler
from subtrack.api.routes import health, metrics, subscriptions, users
from subtrack.config import Settings, get_settings
from subtrack.core.logger import configure_logging, get_logger
from subtrack.core.security import TokenVerifier
from subtrack.storage import MemoryStorage

logger = get_logger(__name__)


def create_app(
    storage: Optional[MemoryStorage] = None,
    verifier: Optional[TokenVerifier] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle startup and shutdown events."""
        configure_logging(settings.log_level, json_output=settings.log_json)
        logger.info("Starting %s in %s environment", settings.app_name, settings.app_env)
        yield
        logger.info("Shutting down %s, %s", settings.app_name, app.state.storage.stats())

    app = FastAPI(
        title=settings.app_name,
        description="Track recurring subscriptions and what they cost",
        version="1.0.0",
        debug=settings.app_debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = storage or MemoryStorage()
    app.state.verifier = verifier or TokenVerifier.from_settings(settings)

    # Respect forwarded proto/host when running behind a proxy.
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/")
    async def root() -> dict:
        return {
            "name": settings.app_name,
            "environment": settings.app_env,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    prefix = settings.api_prefix
    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, prefix=prefix, tags=["Users"])
    app.include_router(subscriptions.router, prefix=f"{prefix}/subscriptions", tags=["Subscriptions"])
    app.include_router(metrics.router, prefix=f"{prefix}/metrics", tags=["Metrics"])
    return app


app = create_app()
