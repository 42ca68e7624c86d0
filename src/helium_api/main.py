"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from helium_api.config import get_settings
from helium_api.middleware import get_cors_headers, setup_middleware
from helium_api.routes import api_router, system_router
from helium_api.services import build_services
from helium_common.config.store_config import get_store_config
from helium_common.exceptions import StoreError

# Initialize settings
settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle application lifespan events."""
    # Startup
    logger.info(f"{settings.app_name} v{settings.app_version} started")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log level: {settings.log_level}")

    app.state.services = build_services(settings, get_store_config())

    yield

    # Shutdown
    logger.info(f"{settings.app_name} shutting down")
    await app.state.services.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Read-only API over the movies, actors and genres stored in Cosmos DB",
    version=settings.app_version,
    lifespan=lifespan,
    redirect_slashes=False,
    openapi_url="/swagger.json" if settings.docs_enabled else None,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url=None,
)

# Setup middleware (must be before exception handlers)
setup_middleware(app, ui_url=settings.ui_url, environment=settings.environment)


def _error_response(request: Request, status_code: int, detail: str) -> JSONResponse:
    """Build an error response that keeps the CORS headers."""
    origin = request.headers.get("origin")
    cors_headers = get_cors_headers(origin, ui_url=settings.ui_url, environment=settings.environment)
    return JSONResponse(status_code=status_code, content={"detail": detail}, headers=cors_headers)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Map document store failures to 500 responses."""
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    detail = str(exc) if settings.expose_store_errors else "Internal server error"
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, detail)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler to ensure CORS headers are present on all errors."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


# Include routers
app.include_router(api_router)
app.include_router(system_router)
