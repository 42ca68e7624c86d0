"""Middleware setup for the FastAPI application."""

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)


def get_allowed_origins(ui_url: str | None = None, environment: str = "development") -> list[str]:
    """Get list of allowed CORS origins based on configuration.

    Args:
        ui_url: URL of a UI allowed to call the API
        environment: Environment name (development, production, etc.)

    Returns:
        List of allowed origin URLs
    """
    allowed_origins: list[str] = []

    if ui_url:
        allowed_origins.append(ui_url.rstrip("/"))
        if ui_url.startswith("http://"):
            allowed_origins.append(ui_url.replace("http://", "https://", 1).rstrip("/"))
        if ui_url.startswith("https://"):
            allowed_origins.append(ui_url.replace("https://", "http://", 1).rstrip("/"))

    # Dev/local origins
    if environment.lower() in {"development", "dev", "local"}:
        allowed_origins.extend(
            [
                "http://localhost:4120",
                "http://127.0.0.1:4120",
                "http://localhost:3000",
                "http://127.0.0.1:3000",
            ]
        )

    # Deduplicate while preserving order
    return list(dict.fromkeys(allowed_origins))


def get_cors_headers(origin: str | None, ui_url: str | None = None, environment: str = "development") -> dict[str, str]:
    """Get CORS headers for a given origin.

    Args:
        origin: The origin from the request header
        ui_url: URL of a UI allowed to call the API
        environment: Environment name (development, production, etc.)

    Returns:
        Dictionary of CORS headers, empty if origin is not allowed
    """
    if not origin or origin not in get_allowed_origins(ui_url, environment):
        return {}

    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": "GET",
        "Access-Control-Allow-Headers": "*",
    }


async def log_requests(request: Request, call_next) -> Response:
    """Log every request with its status and duration."""
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = (time.perf_counter() - started) * 1000.0
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, status_code, duration_ms)


def setup_middleware(app: FastAPI, ui_url: str | None = None, environment: str = "development") -> None:
    """Setup middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        ui_url: URL of a UI allowed to call the API
        environment: Environment name (development, production, etc.)
    """
    allowed_origins = get_allowed_origins(ui_url, environment)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    logger.info("CORS enabled for origins: %s (environment=%s)", allowed_origins, environment)
