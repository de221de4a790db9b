"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live      → Health check endpoints
    /artisan/options            → Wizard choices and limits
    /artisan/draft...           → Draft lifecycle and publishing
    /artisan/draft/gallery      → Gallery upload and listing
    /artisan/gallery/{id}       → Feature / delete one image

Usage:
======
    from hestia.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from hestia.api.handlers import (
    artisan_handler,
    gallery_handler,
    health_handler,
)
from hestia.shared.schemas.common import ErrorResponse

# Documented error bodies for the authenticated artisan endpoints
ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 404, 409, 422, 502)
}


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Draft lifecycle endpoints
    app.include_router(
        artisan_handler.router,
        prefix="/artisan",
        tags=["Artisan"],
        responses=ERROR_RESPONSES,
    )

    # Gallery endpoints
    app.include_router(
        gallery_handler.router,
        prefix="/artisan",
        tags=["Gallery"],
        responses=ERROR_RESPONSES,
    )
