"""
Noter Backend — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn noter.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────┐ ┌────────┐ ┌───────┐ │
    │  │ CORS pre │→│ CORS headers │→│ Req ID │→│ Log   │ │
    │  └──────────┘ └──────────────┘ └────────┘ └───────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌──────────────────┐  │
    │  │ /notes, /notes/{id}      │ │ GET /health      │  │
    │  └──────────────────────────┘ └──────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Fault→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, tables for SQLite record stores, startup banner
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from noter import __version__
from noter.config import settings
from noter.database import dispose_engine, init_models
from noter.exceptions import (
    NoterError,
    NotFoundError,
    ServerFaultError,
    ValidationError,
)
from noter.middleware.cors import cors_headers, install_cors
from noter.middleware.logging import RequestLoggingMiddleware
from noter.middleware.request_id import RequestIDMiddleware, request_id_var
from noter.routes import health, notes

logger = logging.getLogger(__name__)

BODY_MISSING = "Request body is missing"
BODY_INVALID_JSON = "Invalid JSON in request body"
GENERIC_FAULT = "Internal server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] noter.access: GET /notes 200 3.1ms ...
    Output goes to stdout, where the container runtime collects it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Noter Backend %s starting up...", __version__)

    if settings.is_sqlite:
        # PostgreSQL schemas are managed by Alembic
        await init_models()
        logger.info("SQLite record store ready")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Noter Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(request: Request, message: str, status_code: int) -> JSONResponse:
    """`{"error": message}` with the cross-origin headers every response carries."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=cors_headers(request.headers.get("origin")),
    )


def describe_request_errors(exc: RequestValidationError) -> str:
    """
    Collapse FastAPI's request-validation errors into one 400 message.

    An absent body and an unparsable body get fixed messages; anything else
    names the first offending field, e.g. "Invalid title: Input should be a
    valid string".
    """
    errors = exc.errors()
    for err in errors:
        if err.get("type") == "json_invalid":
            return BODY_INVALID_JSON
    for err in errors:
        if err.get("type") == "missing" and tuple(err.get("loc", ())) == ("body",):
            return BODY_MISSING
    if not errors:
        return "Invalid request"
    first = errors[0]
    field: Optional[str] = None
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    if loc:
        field = ".".join(loc)
    if field:
        return f"Invalid {field}: {first.get('msg', 'invalid value')}"
    return f"Invalid request body: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and `{"error": ...}` bodies.

    Handler hierarchy:
        RequestValidationError  → 400 (FastAPI would otherwise answer 422)
        ValidationError         → 400
        NotFoundError           → 404
        ServerFaultError        → 500, generic message
        NoterError (base)       → its status_code
        HTTPException           → its status code (unknown route, bad method)
        Exception (fallback)    → 500, generic message

    Internal details (exception text, SQL, context) are logged, never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = describe_request_errors(exc)
        logger.warning("[%s] Bad request: %s", request_id_var.get(""), message)
        return error_response(request, message, 400)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(request, exc.message, 400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, exc.message, 404)

    @app.exception_handler(ServerFaultError)
    async def handle_server_fault(request: Request, exc: ServerFaultError):
        logger.error(
            "[%s] Server fault: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(request, GENERIC_FAULT, 500)

    @app.exception_handler(NoterError)
    async def handle_noter_error(request: Request, exc: NoterError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        message = exc.message if exc.status_code < 500 else GENERIC_FAULT
        return error_response(request, message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        response = error_response(request, str(exc.detail), exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Runs outside the middleware stack, so the CORS headers are added
        here by error_response().
        """
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return error_response(request, GENERIC_FAULT, 500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    Tests build their own instance and override get_db_session.
    """
    app = FastAPI(
        title="Noter API",
        description="CRUD handlers for short text notes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition (last added = outermost):
    # CORS preflight → CORS headers → Request ID → Logging → route
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    install_cors(app)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `noter.main:app` to be importable
app = create_app()
