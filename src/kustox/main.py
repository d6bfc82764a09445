"""
KustoX - Main Application.

FastAPI host for the results store, with feature flags and the standard error envelope.
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kustox import __version__
from kustox.config import get_settings
from kustox.exceptions import KustoxException
from kustox.modules.results.router import router as results_router
from kustox.observability import get_metrics_store
from kustox.schemas import HealthResponse

# Configure standard logging
logging.basicConfig(
    level=get_settings().app_log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("kustox")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        f"Starting KustoX API v{__version__} "
        f"[env={settings.app_env}] "
        f"[features={settings.features.to_dict()}] "
        f"[space={settings.results.scheme}://{settings.results.authority}/]"
    )
    yield
    logger.info("Shutting down KustoX API")


# Create FastAPI application
app = FastAPI(
    title="KustoX API",
    description="Session-only bridge exposing the latest query result as a virtual file.",
    version=__version__,
    lifespan=lifespan,
)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info(f"[{request_id}] {request.method} {request.url.path}")

    response = await call_next(request)

    logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code}")

    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(KustoxException)
async def kustox_exception_handler(request: Request, exc: KustoxException):
    """Handle KustoX custom exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.warning(f"KustoxException: {exc.code} - {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
                "request_id": request_id,
            }
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.error(f"Unhandled exception on {request.url.path}")
    logger.error(f"Exception type: {type(exc).__name__}")
    logger.error(f"Traceback:\n{traceback.format_exc()}")
    get_metrics_store().record_error("INTERNAL_ERROR")

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": str(exc) if get_settings().app_debug else "An unexpected error occurred",
                "request_id": request_id,
            }
        },
    )


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        features=settings.features.to_dict(),
        app_env=settings.app_env,
        is_production=settings.is_production,
    )


@app.get("/metrics", tags=["health"])
def get_metrics() -> dict:
    """
    Get current metrics summary.

    Example response:
    ```json
    {
      "uptime_seconds": 3600.5,
      "collected_at": "2025-12-25T19:00:00+00:00",
      "operations": {
        "read_file": {"call_count": 12, "p50_ms": 0.1, "errors": {"FILE_NOT_FOUND": 2}}
      },
      "global_errors": {"FILE_NOT_FOUND": 2}
    }
    ```
    """
    return get_metrics_store().get_summary()


# =============================================================================
# Register Module Routers
# =============================================================================

app.include_router(results_router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint redirect to docs."""
    return {"message": "Welcome to KustoX API", "docs": "/docs"}
