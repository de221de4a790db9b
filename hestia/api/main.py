"""
Hestia API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           HESTIA API                                        │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                    Middleware Stack                         │           │
│   │  ┌─────────────────────────────────────────────────────┐    │           │
│   │  │ CORS Middleware                                     │    │           │
│   │  │ Error Handler                                       │    │           │
│   │  └─────────────────────────────────────────────────────┘    │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                       Routers                               │           │
│   │  ┌──────────┐ ┌──────────────────┐ ┌──────────────────┐     │           │
│   │  │  Health  │ │ Artisan (draft)  │ │ Artisan (gallery)│     │           │
│   │  └──────────┘ └──────────────────┘ └──────────────────┘     │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                              │                                              │
│                              ▼                                              │
│   ┌─────────────────────────────────────────────────────────────┐           │
│   │                Dependencies (Injected)                      │           │
│   │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌──────────┐        │           │
│   │  │ Sessions │ │ Identity │ │ Storage  │ │  Cache   │        │           │
│   │  └──────────┘ └──────────┘ └──────────┘ └──────────┘        │           │
│   └─────────────────────────────────────────────────────────────┘           │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection verified
3. Application serves requests
4. Application stops → lifespan shutdown
5. Query cache pool and database connections closed

Usage:
======
    # Run with uvicorn
    uvicorn hestia.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or through the installed console script
    hestia-api

    # Or programmatically
    from hestia.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hestia.config.settings import settings
from hestia.shared.adapters.redis_adapter import get_query_cache
from hestia.shared.db import init_db, close_db
from hestia.shared.core.logging import logger
from hestia.api.middleware import setup_exception_handlers
from hestia.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify the database connection

    Shutdown:
    - Close the query cache connection pool
    - Close database connections
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting Hestia API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()

    logger.info("Hestia API started successfully")

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down Hestia API")

    await get_query_cache().close()
    await close_db()

    logger.info("Hestia API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance

    This factory function:
    1. Creates the FastAPI app with settings
    2. Adds middleware (CORS)
    3. Sets up exception handlers
    4. Registers all routes
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Artisan onboarding: drafts, gallery ingestion and publishing",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()


def run() -> None:
    """Console entry point: serve ``app`` on the configured host and port."""
    uvicorn.run(
        "hestia.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
