"""Burner Link API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BurnerLinkError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One SessionStore per app, created with the app and held on app.state
    - Bodies above settings.max_request_bytes (declared or streamed) are refused with 413 before routing

Design Decisions:
    - create_app() factory: tests build isolated apps with their own settings and clock
    - Store created in the factory, not in lifespan: httpx ASGITransport does not run lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from burnerlink import __version__
from burnerlink.api.body_limit import BodySizeLimitMiddleware
from burnerlink.api.dependencies import build_store
from burnerlink.api.error_handlers import register_error_handlers
from burnerlink.api.routes import codes, health, messages, metrics, sessions
from burnerlink.config import Settings, get_settings
from burnerlink.core.session_store import SessionStore
from burnerlink.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, store: SessionStore | None = None,
) -> FastAPI:
    """Build the relay app with its own store."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info("Burner Link API started")
        yield
        logger.info("Burner Link API shutting down")

    app = FastAPI(title="Burner Link API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store or build_store(settings)

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_request_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(codes.router)
    app.include_router(sessions.router)
    app.include_router(messages.router)
    app.include_router(metrics.router)

    register_error_handlers(app)
    return app


app = create_app()
