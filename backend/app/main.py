"""
WoofPoint Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Keeps middleware registration, route mounting, error translation, and
       lifecycle management in one place.
How:   create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn app.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────────┐ ┌──────────┐ ┌──────────┐ ┌──────────┐  │
    │  │ Rate Limit │→│ Req ID   │→│ Logging  │→│  CORS    │  │
    │  └────────────┘ └──────────┘ └──────────┘ └──────────┘  │
    │                                                          │
    │  Routes:                                                 │
    │  ┌───────────┐ ┌────────────┐ ┌──────────────┐ ┌──────┐ │
    │  │ /api/auth │ │ /api/owner │ │ /api/trainer │ │health│ │
    │  └───────────┘ └────────────┘ └──────────────┘ └──────┘ │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐ │
    │  │ WoofPointError → its status │ bad body → 400 │ 500 │ │
    │  └────────────────────────────────────────────────────┘ │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   logging → configuration check → ready
    Shutdown:  dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import RateLimitExceededError, WoofPointError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import RateLimitMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import auth, health, owner, trainer

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging once for the whole process.

    Format: 2026-01-15T12:00:00 [INFO] app.services.auth_service: User logged in: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO/DEBUG
    for noisy in ("uvicorn.access", "sqlalchemy.engine", "botocore", "boto3", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("WoofPoint API %s starting up (%s)", __version__, settings.environment)

    # Misconfiguration is reported loudly but does not stop the process, so
    # /health still answers and the problem is visible in the logs
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", e)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("WoofPoint API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(
    error: str, message: str, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

        WoofPointError 4xx       → exc.status_code, exc.error_code, exc.context as details
        WoofPointError 5xx       → 500 with a generic message; context logged only
        RequestValidationError   → 400 validation_error with the field errors
        Exception (fallback)     → 500 internal_server_error

    Outside production a 500 body also carries `details.exception` to speed
    up local debugging.
    """

    @app.exception_handler(WoofPointError)
    async def handle_woofpoint_error(request: Request, exc: WoofPointError):
        rid = request_id_var.get("")
        headers = {}
        if isinstance(exc, RateLimitExceededError):
            headers["Retry-After"] = str(exc.retry_after)

        if exc.status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context
            )
            details = None if settings.is_production else {"exception": exc.message}
            return JSONResponse(
                status_code=exc.status_code,
                content=_error_body(
                    exc.error_code,
                    "An internal error occurred. Please try again later.",
                    details,
                ),
            )

        logger.warning("[%s] %s on %s: %s", rid, exc.error_code, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, exc.message, exc.context),
            headers=headers or None,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed or incomplete request body: report as 400, not FastAPI's 422."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        logger.warning(
            "[%s] Request validation failed on %s: %s",
            request_id_var.get(""),
            request.url.path,
            errors,
        )
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder(
                _error_body("validation_error", "Request validation failed", {"errors": errors})
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        details = None if settings.is_production else {"exception": str(exc)}
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
                details,
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="WoofPoint API",
        description=(
            "Backend for the WoofPoint marketplace: dog owners manage their dogs and "
            "browse trainers; trainers publish their services and portfolio."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RateLimit → RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(owner.router)
    app.include_router(trainer.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
