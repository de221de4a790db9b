"""
Database Dependency

FastAPI dependencies for database access.

The onboarding services open their own short sessions, so most handlers
only need the session FACTORY. A request-scoped session is still available
for handlers that run a query directly (readiness probe).

Usage:
======
    from hestia.api.dependencies.database import DbSession, SessionFactory

    @router.get("/ready")
    async def readiness_check(db: DbSession):
        await db.execute(text("SELECT 1"))

    def get_draft_service(factory: SessionFactory) -> DraftProfileService:
        return DraftProfileService(factory, storage)
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hestia.shared.db import AsyncSessionLocal
from hestia.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a database session for the duration of the request.

    Committed on success, rolled back on exception, always closed.
    """
    async for session in _get_db():
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory handed to the services. Overridden in tests."""
    return AsyncSessionLocal


# Type aliases for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
