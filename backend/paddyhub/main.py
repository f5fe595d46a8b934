"""
PaddyHub Backend: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn paddyhub.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware: CORS → Req ID → Logging → Body Limit → GZip │
    │                                                          │
    │  Routes:                                                 │
    │    /carArrival      → car store                          │
    │    /api/scans       → qr store                           │
    │    /api/stocks/...  → stock store                        │
    │    /, /health                                            │
    │                                                          │
    │  Exception Handlers:                                     │
    │    ValidationError→400 │ PayloadTooLarge→413 │ Store→5xx │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, optional table creation on each store
    Shutdown: dispose every store's engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from paddyhub import __version__
from paddyhub.config import settings
from paddyhub.database import create_collections, dispose_engines, stores
from paddyhub.exceptions import (
    PaddyHubError,
    PayloadTooLargeError,
    StoreError,
    ValidationError,
)
from paddyhub.middleware.body_limit import BodySizeLimitMiddleware
from paddyhub.middleware.logging import RequestLoggingMiddleware
from paddyhub.middleware.request_id import RequestIDMiddleware, request_id_var
from paddyhub.routes import car_arrival, health, root, scans, stocks

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise; our own access log covers it
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("PaddyHub Backend %s starting up...", __version__)

    for store in stores:
        logger.info("Store '%s' → %r", store.name, store.engine.url)

    if settings.auto_create_collections:
        await create_collections()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("PaddyHub Backend shutting down...")
    await dispose_engines()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs in ServerErrorMiddleware, after
    # RequestIDMiddleware has reset the ContextVar; request.state shares the
    # ASGI scope and still holds the ID there.
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one JSON error shape.

    Handler hierarchy:
        ValidationError       → 400
        PayloadTooLargeError  → 413
        StoreError            → exc.status_code (500 unless the route chose 400)
        PaddyHubError (base)  → 500
        Exception (fallback)  → 500, stack trace logged server-side only
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = _request_id(request)
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context or None,
                "request_id": rid,
            },
        )

    @app.exception_handler(PayloadTooLargeError)
    async def handle_payload_too_large(request: Request, exc: PayloadTooLargeError):
        rid = _request_id(request)
        return JSONResponse(
            status_code=413,
            content={
                "error": "payload_too_large",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        """Generic message unless the route opted into passing the reason on."""
        rid = _request_id(request)
        logger.error(
            "[%s] Store error: %s | Reason: %s | Context: %s",
            rid,
            exc.message,
            exc.reason,
            exc.context,
        )
        content = {
            "error": "store_error" if exc.status_code < 500 else "server_error",
            "message": exc.message,
            "request_id": rid,
        }
        if exc.passthrough and exc.reason:
            content["details"] = {"reason": exc.reason}
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(PaddyHubError)
    async def handle_app_error(request: Request, exc: PaddyHubError):
        rid = _request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="PaddyHub API",
        description=(
            "Backend of the paddy purchase dashboard: car-arrival board, "
            "QR scan archive and stock ledger with a weekday volume report."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = first to run).
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Outermost, so 413s and other early rejections still carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(car_arrival.router)
    app.include_router(scans.router)
    app.include_router(stocks.router)
    app.include_router(health.router)

    return app


app = create_app()
