"""
Currico - Application Entrypoint

Configures structlog, builds the FastAPI app and wires the application-
scoped services (database session factory, background dispatcher, rate
limiter, level service) onto app.state.

Run via:
    python -m currico.main
"""

from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from currico import __version__
from currico.api import api_router
from currico.config import settings
from currico.database import check_database, create_db_engine
from currico.errors import CurricoError, RateLimitExceededError
from currico.services.background import BackgroundDispatcher
from currico.services.notifications import NotificationService
from currico.services.rate_limit import SlidingWindowRateLimiter, run_periodic_cleanup
from currico.services.seller_level import SellerLevelService

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "INFO") -> None:
    """
    Set up structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    # Configure stdlib logging first (for uvicorn and SQLAlchemy)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Application Factory
# ---------------------------------------------------------------------------


def install_services(
    app: FastAPI, session_factory: async_sessionmaker[AsyncSession]
) -> None:
    """Construct the application-scoped services once and attach them to app.state."""
    dispatcher = BackgroundDispatcher()
    notifications = NotificationService(session_factory)

    app.state.session_factory = session_factory
    app.state.dispatcher = dispatcher
    app.state.rate_limiter = SlidingWindowRateLimiter()
    app.state.notification_service = notifications
    app.state.seller_level_service = SellerLevelService(
        session_factory, dispatcher, notifications
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CurricoError)
    async def _currico_error_handler(request: Request, exc: CurricoError) -> JSONResponse:
        headers = None
        if isinstance(exc, RateLimitExceededError):
            headers = {"Retry-After": str(exc.retry_after)}
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "code": exc.code},
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_error",
            method=request.method,
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Interner Serverfehler", "code": "INTERNAL_ERROR"},
        )


def create_app(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    """
    Build the Currico API.

    Args:
        session_factory: Pre-built session factory (tests). When omitted the
            lifespan creates an engine from settings.DATABASE_URL.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.LOG_LEVEL)
        logger.info("currico_startup_begin", version=__version__, env=settings.ENV)

        engine = None
        if getattr(app.state, "session_factory", None) is None:
            engine, factory = create_db_engine()
            try:
                await check_database(factory)
            except Exception as e:
                logger.error(
                    "database_health_check_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                await engine.dispose()
                raise
            logger.info("database_health_check_passed")
            install_services(app, factory)

        cleanup_shutdown = asyncio.Event()
        app.state.rate_limit_cleanup = asyncio.create_task(
            run_periodic_cleanup(app.state.rate_limiter, cleanup_shutdown),
            name="rate_limit_cleanup",
        )

        logger.info("currico_startup_complete")
        try:
            yield
        finally:
            cleanup_shutdown.set()
            await app.state.rate_limit_cleanup
            # Let in-flight cache writes and notifications finish
            await app.state.dispatcher.drain()
            if engine is not None:
                await engine.dispose()
            logger.info("currico_shutdown_complete")

    app = FastAPI(
        title="Currico API",
        version=__version__,
        docs_url=None if settings.ENV == "production" else "/docs",
        redoc_url=None,
        openapi_url=None if settings.ENV == "production" else "/openapi.json",
        lifespan=lifespan,
    )
    if session_factory is not None:
        install_services(app, session_factory)

    _register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# ---------------------------------------------------------------------------
# CLI Entry
# ---------------------------------------------------------------------------


def main() -> None:
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    main()
