# File: src/tailordesk/main.py
"""FastAPI application factory: the server entry point."""

import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from tailordesk.bootstrap.server import bootstrap_server
from tailordesk.core.cookies import is_development
from tailordesk.core.logging import configure_logging, get_logger
from tailordesk.core.session import SESSION_MAX_AGE, CookieSessionBackend, SessionBackend

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for startup and shutdown events."""
    app.state.started_at = datetime.now()
    logger.info(
        "app.startup",
        message="TailorDesk starting up",
        handles=app.state.context.handles,
    )

    yield

    logger.info("app.shutdown", message="TailorDesk shutting down gracefully")


def _setup_middleware(app: FastAPI, session_secret_key: str) -> None:
    """Configure all middleware in correct order."""
    # Last added = first executed: request ID, then session, then Sentry context
    from tailordesk.middleware.logging import RequestIDMiddleware
    from tailordesk.middleware.sentry import SentryContextMiddleware

    app.add_middleware(SentryContextMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret_key,
        max_age=int(SESSION_MAX_AGE.total_seconds()),
        https_only=not is_development(),
        same_site="lax",
    )
    app.add_middleware(RequestIDMiddleware)


def _register_routers(app: FastAPI) -> None:
    from tailordesk.api.auth import router as auth_router
    from tailordesk.api.health import router as health_router

    app.include_router(health_router)
    app.include_router(auth_router)


def create_app(session_backend: SessionBackend | None = None) -> FastAPI:
    """
    Application factory for TailorDesk.

    Bootstraps the server context before anything else so a missing session
    subsystem aborts startup here.
    """
    from tailordesk.core.exception_handlers import register_exception_handlers
    from tailordesk.core.sentry import init_sentry

    init_sentry()

    context = bootstrap_server(session_backend or CookieSessionBackend())

    app = FastAPI(
        title="TailorDesk API",
        description="Client and order management for tailoring businesses",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.context = context
    app.state.started_at = None

    register_exception_handlers(app)

    session_secret_key = os.getenv("SESSION_SECRET_KEY", "dev-secret-key-change-in-production")
    _setup_middleware(app, session_secret_key)
    _register_routers(app)

    logger.info("app.configured", message="FastAPI application created successfully")

    return app


def run() -> None:
    """Development server entrypoint."""
    uvicorn.run(
        "tailordesk.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
