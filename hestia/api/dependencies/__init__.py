"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession, get_session_factory(), SessionFactory
- Identity: get_current_user_id(), CurrentUserId
- Services: get_*_service() and shared adapters

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(user_id: UUID = Depends(get_current_user_id)):

    # Write this:
    async def handler(user_id: CurrentUserId):
"""

from hestia.api.dependencies.database import (
    get_db,
    get_session_factory,
    DbSession,
    SessionFactory,
)
from hestia.api.dependencies.user import (
    get_current_user_id,
    CurrentUserId,
)
from hestia.api.dependencies.services import (
    get_storage,
    get_query_cache,
    get_normalizer,
    get_draft_service,
    get_publish_service,
)

__all__ = [
    # Database
    "get_db",
    "get_session_factory",
    "DbSession",
    "SessionFactory",
    # Identity
    "get_current_user_id",
    "CurrentUserId",
    # Services
    "get_storage",
    "get_query_cache",
    "get_normalizer",
    "get_draft_service",
    "get_publish_service",
]
