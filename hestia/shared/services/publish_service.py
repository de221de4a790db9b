"""
Publish Service

Validation gate and visibility transitions of an artisan profile.

PUBLISH FLOW:
1. Ensure a draft exists (creating it) and flush any pending form state
2. Run every completeness check; each contributes at most one error
3. Errors → nothing is written, the full list is returned
4. No errors → status=published, published_at stamped, role=artisan,
   cached "userRole" / "profile" views of the user invalidated

Usage:
======
    from hestia.shared.services.publish_service import PublishService

    service = PublishService(AsyncSessionLocal, drafts=draft_service, cache=get_query_cache())
    result = await service.publish(user_id, pending=DraftUpdate(bio=bio))
    if not result.success:
        print(result.errors)
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hestia.config.settings import settings
from hestia.shared.adapters.redis_adapter import QueryCache
from hestia.shared.core.exceptions import DraftNotFoundError
from hestia.shared.core.logging import get_logger
from hestia.shared.models.base import utcnow
from hestia.shared.models.enums import ArtisanStatus, ProfileRole
from hestia.shared.repositories.artisan_repository import ArtisanRepository
from hestia.shared.repositories.gallery_image_repository import GalleryImageRepository
from hestia.shared.repositories.profile_repository import ProfileRepository
from hestia.shared.schemas.artisan import CONTACT_FIELDS, DraftProfile, DraftUpdate, PublishResult
from hestia.shared.services.draft_profile_service import DraftProfileService, to_draft_profile

logger = get_logger(__name__)

# Query cache keys the UI holds per user
USER_ROLE_QUERY = "userRole"
PROFILE_QUERY = "profile"


def _filled(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def validate_for_publish(
    draft: DraftProfile,
    gallery_count: int,
    *,
    bio_min: Optional[int] = None,
    bio_max: Optional[int] = None,
    min_gallery: Optional[int] = None,
) -> list[str]:
    """
    Every completeness problem of ``draft``, in a fixed order.

    All checks run; an empty list means the draft can be published.
    """
    bio_min = settings.BIO_MIN_LENGTH if bio_min is None else bio_min
    bio_max = settings.BIO_MAX_LENGTH if bio_max is None else bio_max
    min_gallery = settings.MIN_GALLERY_IMAGES if min_gallery is None else min_gallery

    errors: list[str] = []

    if not _filled(draft.display_name):
        errors.append("Display name is required")

    if not _filled(draft.category):
        errors.append("Craft category is required")

    bio_length = len((draft.bio or "").strip())
    if not bio_min <= bio_length <= bio_max:
        errors.append(f"Bio must be between {bio_min} and {bio_max} characters")

    if not _filled(draft.location):
        errors.append("Location is required")

    if not any(_filled(getattr(draft, name)) for name in CONTACT_FIELDS):
        errors.append("At least one contact method is required")

    if gallery_count < min_gallery:
        errors.append(f"At least {min_gallery} gallery images are required")

    return errors


class PublishService:
    """
    Service for publishing and unpublishing artisan profiles.

    Handles:
    - The aggregated validation gate
    - draft → published and published → unpublished transitions
    - Role promotion and cache invalidation after publishing
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        drafts: DraftProfileService,
        cache: QueryCache,
    ) -> None:
        """
        Initialize PublishService.

        Args:
            session_factory: Opens one session per operation
            drafts: Draft store used to create / flush the draft first
            cache: Query cache invalidated after a visibility change
        """
        self._session_factory = session_factory
        self._drafts = drafts
        self._cache = cache

    async def publish(self, user_id: UUID, pending: Optional[DraftUpdate] = None) -> PublishResult:
        """
        Validate the user's draft and make it public.

        Args:
            user_id: Owner of the draft
            pending: Unsaved form state, written before validation

        Returns:
            PublishResult with success=True, or success=False and every error

        Raises:
            CreationFailedError: The draft could not be created
        """
        draft_id = await self._drafts.ensure_draft(user_id)
        if pending is not None:
            await self._drafts.update_draft(draft_id, pending)

        async with self._session_factory() as session:
            artisan = await ArtisanRepository(session).get_with_profile(draft_id)
            if not artisan:
                raise DraftNotFoundError(str(draft_id))

            gallery_count = await GalleryImageRepository(session).count_for_artisan(draft_id)
            errors = validate_for_publish(to_draft_profile(artisan), gallery_count)
            if errors:
                logger.info("publish_rejected", draft_id=str(draft_id), errors=errors)
                return PublishResult(success=False, errors=errors)

            artisan.status = ArtisanStatus.PUBLISHED
            artisan.published_at = utcnow()
            artisan.updated_at = artisan.published_at

            profile_repo = ProfileRepository(session)
            profile = await profile_repo.get_or_create(user_id)
            if profile.role != ProfileRole.ADMIN:
                await profile_repo.set_role(user_id, ProfileRole.ARTISAN)

            await session.commit()

        await self._cache.invalidate(user_id, USER_ROLE_QUERY, PROFILE_QUERY)
        logger.info("draft_published", draft_id=str(draft_id), user_id=str(user_id))
        return PublishResult(success=True, artisan_id=draft_id)

    async def unpublish(self, user_id: UUID) -> bool:
        """
        Hide a published profile.

        Returns:
            True if the profile went from published to unpublished, False if
            there was nothing published
        """
        async with self._session_factory() as session:
            artisan = await ArtisanRepository(session).get_by_user_id(user_id)
            if not artisan or artisan.status != ArtisanStatus.PUBLISHED:
                return False

            artisan.status = ArtisanStatus.UNPUBLISHED
            artisan.updated_at = utcnow()
            await session.commit()

        await self._cache.invalidate(user_id, USER_ROLE_QUERY, PROFILE_QUERY)
        logger.info("draft_unpublished", artisan_id=str(artisan.id), user_id=str(user_id))
        return True
