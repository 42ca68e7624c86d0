"""Route initialization module."""

from fastapi import APIRouter

from helium_api.routes.actors import router as actors_router
from helium_api.routes.genres import router as genres_router
from helium_api.routes.health import router as health_router
from helium_api.routes.movies import router as movies_router
from helium_api.routes.system import router as system_router

# Create main API router
api_router = APIRouter(prefix="/api")

# Include sub-routers
api_router.include_router(actors_router)
api_router.include_router(movies_router)
api_router.include_router(genres_router)
api_router.include_router(health_router)


__all__ = ["api_router", "system_router"]
