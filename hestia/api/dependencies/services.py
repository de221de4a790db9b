"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per request around process-wide collaborators:
- Session factory: one short session per service operation
- StorageAdapter: lazily created boto3 client, shared
- QueryCache: Redis connection pool, shared
- ImageNormalizer: stateless, shared

Tests replace any of these through ``app.dependency_overrides``.

Usage:
======
    from hestia.api.dependencies.services import get_draft_service

    @router.get("/draft")
    async def get_draft(
        user_id: CurrentUserId,
        drafts: DraftProfileService = Depends(get_draft_service),
    ):
        return await drafts.load_draft(user_id)
"""

import functools

from fastapi import Depends

from hestia.api.dependencies.database import SessionFactory
from hestia.shared.adapters.redis_adapter import QueryCache
from hestia.shared.adapters.redis_adapter import get_query_cache as _get_query_cache
from hestia.shared.adapters.storage_adapter import StorageAdapter
from hestia.shared.media.normalizer import ImageNormalizer
from hestia.shared.services.draft_profile_service import DraftProfileService
from hestia.shared.services.publish_service import PublishService


@functools.lru_cache(maxsize=1)
def get_storage() -> StorageAdapter:
    """Gallery object storage, built from settings once."""
    return StorageAdapter()


def get_query_cache() -> QueryCache:
    return _get_query_cache()


@functools.lru_cache(maxsize=1)
def get_normalizer() -> ImageNormalizer:
    return ImageNormalizer()


async def get_draft_service(
    session_factory: SessionFactory,
    storage: StorageAdapter = Depends(get_storage),
) -> DraftProfileService:
    """
    Dependency to get DraftProfileService instance.
    """
    return DraftProfileService(session_factory, storage)


async def get_publish_service(
    session_factory: SessionFactory,
    drafts: DraftProfileService = Depends(get_draft_service),
    cache: QueryCache = Depends(get_query_cache),
) -> PublishService:
    """
    Dependency to get PublishService instance.

    Shares the request's DraftProfileService so draft creation is
    serialized with other draft operations in the same request.
    """
    return PublishService(session_factory, drafts, cache)
