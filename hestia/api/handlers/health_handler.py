"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hestia.api.dependencies import DbSession, get_query_cache
from hestia.config.settings import settings
from hestia.shared.adapters.redis_adapter import QueryCache
from hestia.shared.core.logging import logger
from hestia.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready")
async def readiness_check(
    db: DbSession,
    cache: QueryCache = Depends(get_query_cache),
):
    """
    Readiness check for Kubernetes/load balancers.

    The database is required. The query cache is reported but does not
    fail readiness; publishing works without it.
    """
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("readiness_database_unavailable", error=str(e))
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "database": False},
        )

    return {"status": "ready", "database": True, "cache": await cache.ping()}


@router.get("/live")
async def liveness_check():
    """
    Liveness check for Kubernetes.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}
