"""Root routers and middleware registration."""

from fastapi import APIRouter, FastAPI

from poll_map.api.middleware import SecurityHeadersMiddleware, setup_cors
from poll_map.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root router: the HTML page plus the versioned JSON API.

    Args:
        settings: Application settings.

    Returns:
        Configured router.
    """
    from poll_map.api.v1.maps import maps_router
    from poll_map.api.views import views_router

    api_router = APIRouter(prefix=settings.api_v1_prefix)
    api_router.include_router(maps_router)

    root_router = APIRouter()
    root_router.include_router(views_router)
    root_router.include_router(api_router)
    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app."""
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
