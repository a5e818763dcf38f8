"""
ETTU Backend — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn imports `ettu.main:app`; tests call create_app() with their own Settings.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌────────┐ ┌──────┐  │
    │  │ Rate Limit*  │→│ Req ID   │→│ Logging│→│ CORS │  │
    │  └──────────────┘ └──────────┘ └────────┘ └──────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /health  /metrics  /api/v1/status  /api/v1/...     │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ Feature→403 │ DB down→503 │ →500  │
    └─────────────────────────────────────────────────────┘
    * only when RATE_LIMITING is enabled

Lifecycle:
    Startup:
    1. Initialize logging from settings
    2. Connect the database pool; on failure continue in database-less mode
    3. Run migrations; on failure log a warning and continue

    Shutdown:
    1. Close the database pool

Configuration errors are not handled here: get_settings() raises ConfigError
while this module is imported, and uvicorn exits.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ettu import __version__
from ettu.config import (
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    CORS_MAX_AGE,
    Settings,
    get_settings,
)
from ettu.database import Database
from ettu.exceptions import (
    DatabaseError,
    DatabaseUnavailableError,
    EttuError,
    FeatureDisabledError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from ettu.logging_config import setup_logging
from ettu.middleware.logging import RequestLoggingMiddleware
from ettu.middleware.rate_limit import RateLimitMiddleware
from ettu.middleware.request_id import RequestIDMiddleware, request_id_var
from ettu.routes import build_api_router, health, metrics

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Database Startup
# ══════════════════════════════════════════════════════════════════════════

async def connect_database(settings: Settings) -> Optional[Database]:
    """
    Connect and migrate, tolerating failure of either step.

    Returns:
        The connected Database, or None when the server must run database-less.
    """
    try:
        database = await Database.connect(settings.database_url, settings)
    except Exception as e:
        logger.warning("Database connection failed: %s. Running in database-less mode.", e)
        return None
    logger.info("Database connected successfully")

    try:
        await database.migrate()
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.warning(
            "Migration warning: %s. This may be normal if migrations are already applied.", e
        )
        logger.info("Continuing with current database state...")

    return database


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup before the yield, shutdown after it."""
    settings: Settings = app.state.settings
    setup_logging(settings)
    logger.info("Starting ETTU Backend Server (%s)", settings.environment)

    app.state.database = await connect_database(settings)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("ETTU Backend shutting down...")
    if app.state.database is not None:
        await app.state.database.close()
        app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside RequestIDMiddleware, after the
    # context variable is reset, so fall back to request.state
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    content = {"error": error, "message": message, "request_id": _request_id(request)}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and error bodies.

    Handler hierarchy:
        ValidationError           → 400
        FeatureDisabledError      → 403
        NotFoundError             → 404
        RateLimitExceededError    → 429 (+ Retry-After)
        DatabaseUnavailableError  → 503
        DatabaseError             → 500, generic message
        EttuError (base)          → 500
        Exception (fallback)      → 500, stack trace logged only
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return _error_response(request, 400, "validation_error", exc.message, exc.context)

    @app.exception_handler(FeatureDisabledError)
    async def handle_feature_disabled(request: Request, exc: FeatureDisabledError):
        return _error_response(request, 403, "feature_disabled", exc.message, exc.context)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(request, 404, "not_found", exc.message)

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return _error_response(
            request, 429, "rate_limit_exceeded", exc.message, exc.context,
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(DatabaseUnavailableError)
    async def handle_database_unavailable(request: Request, exc: DatabaseUnavailableError):
        logger.warning("Database requested in database-less mode: %s", request.url.path)
        return _error_response(request, 503, "database_unavailable", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return _error_response(
            request, 500, "server_error",
            "An internal error occurred. Please try again later.",
        )

    @app.exception_handler(EttuError)
    async def handle_app_error(request: Request, exc: EttuError):
        logger.error("Unhandled application error: %s | Context: %s", exc.message, exc.context)
        return _error_response(request, 500, "internal_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", exc, exc_info=True)
        return _error_response(
            request, 500, "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit settings (tests); defaults to get_settings().

    Raises:
        ConfigError: when settings come from the environment and are invalid.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="ETTU API",
        description="Backend for projects, tasks, notes and code snippets.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = None  # set by lifespan once connected
    app.state.started_at = time.monotonic()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RateLimit → RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
        expose_headers=["X-Request-ID", "Retry-After"],
        max_age=CORS_MAX_AGE,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    if settings.rate_limiting:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window,
        )

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(metrics.router)
    app.include_router(build_api_router())

    return app


def run() -> None:
    """Console entry point: serve the app on HOST:PORT."""
    settings = get_settings()
    uvicorn.run("ettu.main:app", host=settings.host, port=settings.port)


# uvicorn expects `ettu.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    run()
