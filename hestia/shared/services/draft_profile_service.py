"""
Draft Profile Service

Create / read / update of an artisan draft and its gallery, against the
relational store and object storage.

DRAFT LIFECYCLE:
- No artisan row exists until the first real write (lazy creation)
- ensure_draft() is idempotent: it returns the existing id or creates one
- The unique constraint on artisans.user_id is the final arbiter when two
  callers race; the loser re-reads and returns the winner's id

UNITS OF WORK:
Each public method opens its own session from the injected factory and
commits or rolls back before returning. Autosave, uploads and publish can
overlap on the event loop, so nothing here shares a session between calls.

Usage:
======
    from hestia.shared.services.draft_profile_service import DraftProfileService

    service = DraftProfileService(AsyncSessionLocal, storage=StorageAdapter())
    draft_id = await service.ensure_draft(user_id)
    await service.update_draft(draft_id, DraftUpdate(bio="Hand-thrown stoneware..."))
"""

import asyncio
import time
import uuid
import weakref
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hestia.config.settings import settings
from hestia.shared.adapters.storage_adapter import StorageAdapter
from hestia.shared.core.exceptions import (
    CreationFailedError,
    DraftNotFoundError,
    FeaturedLimitExceededError,
    GalleryImageNotFoundError,
    StorageError,
    UploadFailedError,
)
from hestia.shared.core.logging import get_logger
from hestia.shared.models.artisan import Artisan
from hestia.shared.models.base import utcnow
from hestia.shared.models.enums import ArtisanStatus, ContactChannel
from hestia.shared.models.gallery_image import GalleryImage
from hestia.shared.repositories.artisan_repository import ArtisanRepository
from hestia.shared.repositories.gallery_image_repository import GalleryImageRepository
from hestia.shared.repositories.profile_repository import ProfileRepository
from hestia.shared.schemas.artisan import CONTACT_FIELDS, DraftProfile, DraftUpdate
from hestia.shared.schemas.gallery import GalleryAsset

logger = get_logger(__name__)

# Attempts at inserting a draft before giving up (the retry re-reads the winner)
CREATE_ATTEMPTS = 2

# DraftUpdate field → artisans column, where the names differ
FIELD_COLUMNS = {"category": "craft_type"}

# Non-nullable columns: an explicit null resets them to these values
COLUMN_RESET_VALUES: dict[str, Any] = {
    "contact_channel": ContactChannel.INSTAGRAM,
    "accepting_orders": False,
    "tags": [],
}


def to_draft_profile(artisan: Artisan) -> DraftProfile:
    """Artisan row (with profile loaded) → DraftProfile read model."""
    return DraftProfile(
        id=artisan.id,
        user_id=artisan.user_id,
        status=artisan.status,
        display_name=artisan.profile.full_name if artisan.profile else None,
        category=artisan.craft_type,
        bio=artisan.bio,
        location=artisan.location,
        contact_channel=artisan.contact_channel,
        contact_value=artisan.contact_value,
        email=artisan.email,
        phone=artisan.phone,
        instagram=artisan.instagram,
        whatsapp_url=artisan.whatsapp_url,
        telegram=artisan.telegram,
        external_shop_url=artisan.external_shop_url,
        accepting_orders=artisan.accepting_orders,
        hours=artisan.hours,
        tags=list(artisan.tags or []),
        published_at=artisan.published_at,
        created_at=artisan.created_at,
        updated_at=artisan.updated_at,
    )


def draft_columns(changes: DraftUpdate) -> dict[str, Any]:
    """
    Column values for the fields present in ``changes``.

    display_name is excluded (it lives on the base profile). Explicit empty
    contact values become NULL.
    """
    columns: dict[str, Any] = {}
    for name, value in changes.present_fields().items():
        if name == "display_name":
            continue
        if name in CONTACT_FIELDS and value == "":
            value = None
        column = FIELD_COLUMNS.get(name, name)
        if value is None and column in COLUMN_RESET_VALUES:
            value = COLUMN_RESET_VALUES[column]
        columns[column] = value
    return columns


def object_key(artisan_id: UUID, extension: str) -> str:
    """
    Storage key for a new gallery image.

    Format: ``{artisan_id}/{epoch_ms}-{random8}.{extension}``
    """
    return f"{artisan_id}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{extension}"


class DraftProfileService:
    """
    Service for the artisan draft and its gallery.

    Handles:
    - Lazy, idempotent draft creation
    - Partial (tri-state) draft updates
    - Gallery uploads, ordering, featuring and removal
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        storage: StorageAdapter,
        max_featured: Optional[int] = None,
        max_upload_bytes: Optional[int] = None,
    ) -> None:
        """
        Initialize DraftProfileService.

        Args:
            session_factory: Opens one session per operation
            storage: Object storage for gallery images
            max_featured: Featured images allowed per artisan
            max_upload_bytes: Largest accepted image
        """
        self._session_factory = session_factory
        self._storage = storage
        self.max_featured = settings.MAX_FEATURED_IMAGES if max_featured is None else max_featured
        self.max_upload_bytes = settings.MAX_UPLOAD_BYTES if max_upload_bytes is None else max_upload_bytes
        self._creation_locks: weakref.WeakValueDictionary[UUID, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # DRAFT
    # ═══════════════════════════════════════════════════════════════════════════

    async def ensure_draft(self, user_id: UUID) -> UUID:
        """
        Return the user's artisan id, creating a draft if none exists.

        Flow:
        1. Look up the artisan row by user_id
        2. If missing: insert base profile (if needed) + draft, commit
        3. On a unique violation: roll back and look up again

        Calls for the same user are serialized within this process; the
        unique constraint covers callers in other processes.

        Raises:
            CreationFailedError: Store unreachable, or the conflict could not
                be resolved by re-reading
        """
        lock = self._creation_locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._creation_locks[user_id] = lock

        async with lock:
            try:
                return await self._ensure_draft(user_id)
            except SQLAlchemyError as e:
                logger.error("draft_create_failed", user_id=str(user_id), error=str(e))
                raise CreationFailedError(details={"reason": str(e)}) from e

    async def _ensure_draft(self, user_id: UUID) -> UUID:
        for attempt in range(CREATE_ATTEMPTS):
            async with self._session_factory() as session:
                artisan_repo = ArtisanRepository(session)

                existing = await artisan_repo.get_by_user_id(user_id)
                if existing:
                    return existing.id

                try:
                    await ProfileRepository(session).get_or_create(user_id)
                    artisan = await artisan_repo.create(user_id=user_id, status=ArtisanStatus.DRAFT)
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    logger.info("draft_create_conflict", user_id=str(user_id), attempt=attempt)
                    continue

                logger.info("draft_created", user_id=str(user_id), draft_id=str(artisan.id))
                return artisan.id

        raise CreationFailedError(details={"user_id": str(user_id)})

    async def load_draft(self, user_id: UUID) -> Optional[DraftProfile]:
        """
        Full read of the user's artisan profile, display name included.

        Returns:
            DraftProfile, or None if the user never started onboarding
        """
        async with self._session_factory() as session:
            artisan = await ArtisanRepository(session).get_by_user_id(user_id)
            return to_draft_profile(artisan) if artisan else None

    async def update_draft(self, draft_id: UUID, changes: DraftUpdate) -> DraftProfile:
        """
        Write the fields present in ``changes``; absent fields are untouched.

        Always stamps updated_at, even for an empty payload.

        Raises:
            DraftNotFoundError: If the draft does not exist
        """
        async with self._session_factory() as session:
            artisan = await ArtisanRepository(session).get_with_profile(draft_id)
            if not artisan:
                raise DraftNotFoundError(str(draft_id))

            if "display_name" in changes.model_fields_set:
                await ProfileRepository(session).set_full_name(artisan.user_id, changes.display_name)

            columns = draft_columns(changes)
            for column, value in columns.items():
                setattr(artisan, column, value)
            artisan.updated_at = utcnow()

            await session.commit()

            logger.debug("draft_updated", draft_id=str(draft_id), fields=sorted(changes.model_fields_set))
            return to_draft_profile(artisan)

    # ═══════════════════════════════════════════════════════════════════════════
    # GALLERY
    # ═══════════════════════════════════════════════════════════════════════════

    async def attach_asset(
        self,
        draft_id: UUID,
        data: bytes,
        *,
        filename: Optional[str] = None,
        content_type: str = "image/webp",
        extension: str = "webp",
    ) -> GalleryAsset:
        """
        Upload a normalized image and append it to the gallery.

        The new image's position is the gallery size before the insert. If
        the insert fails the uploaded object is removed (best-effort).

        Raises:
            UploadFailedError: Too large, not an image, upload or insert failed
            DraftNotFoundError: If the draft does not exist
        """
        if len(data) > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes // (1024 * 1024)
            raise UploadFailedError(filename, f"Image must be less than {limit_mb}MB")
        if not content_type.lower().startswith("image/"):
            raise UploadFailedError(filename, "Only image files are allowed")

        async with self._session_factory() as session:
            if not await ArtisanRepository(session).get(draft_id):
                raise DraftNotFoundError(str(draft_id))

            key = object_key(draft_id, extension)
            try:
                url = await self._storage.upload(key, data, content_type)
            except StorageError as e:
                raise UploadFailedError(filename, "Failed to upload image") from e

            gallery_repo = GalleryImageRepository(session)
            try:
                position = await gallery_repo.count_for_artisan(draft_id)
                image = await gallery_repo.create(
                    artisan_id=draft_id,
                    image_url=url,
                    storage_path=key,
                    title=filename or f"Gallery Image {position + 1}",
                    position=position,
                    is_featured=False,
                )
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("gallery_insert_failed", draft_id=str(draft_id), key=key, error=str(e))
                await self._delete_object_quietly(key)
                raise UploadFailedError(filename, "Failed to save image") from e

            logger.info("asset_attached", draft_id=str(draft_id), asset_id=str(image.id), position=position)
            return GalleryAsset.model_validate(image)

    async def list_assets(self, draft_id: UUID) -> list[GalleryAsset]:
        """Gallery of a draft, ordered by position."""
        async with self._session_factory() as session:
            images = await GalleryImageRepository(session).list_for_artisan(draft_id)
            return [GalleryAsset.model_validate(image) for image in images]

    async def count_assets(self, draft_id: UUID) -> int:
        async with self._session_factory() as session:
            return await GalleryImageRepository(session).count_for_artisan(draft_id)

    async def set_featured(
        self,
        asset_id: UUID,
        featured: bool,
        *,
        draft_id: Optional[UUID] = None,
    ) -> GalleryAsset:
        """
        Feature or unfeature one gallery image.

        Featuring an already featured image is a no-op. Unfeaturing always
        succeeds.

        Args:
            asset_id: Gallery image id
            featured: Desired flag
            draft_id: When given, the image must belong to this draft

        Raises:
            GalleryImageNotFoundError: Unknown image (or not in ``draft_id``)
            FeaturedLimitExceededError: Cap reached; nothing changed
        """
        async with self._session_factory() as session:
            image = await self._get_image(session, asset_id, draft_id)
            gallery_repo = GalleryImageRepository(session)

            if featured and not image.is_featured:
                if not await gallery_repo.feature_within_limit(asset_id, image.artisan_id, self.max_featured):
                    await session.rollback()
                    logger.info("feature_rejected", asset_id=str(asset_id), limit=self.max_featured)
                    raise FeaturedLimitExceededError(self.max_featured)
            elif not featured:
                await gallery_repo.unfeature(asset_id, image.artisan_id)

            await session.commit()
            await session.refresh(image)
            return GalleryAsset.model_validate(image)

    async def remove_asset(self, asset_id: UUID, *, draft_id: Optional[UUID] = None) -> None:
        """
        Delete a gallery image.

        The row is always deleted; the stored object is removed best-effort.

        Raises:
            GalleryImageNotFoundError: Unknown image (or not in ``draft_id``)
        """
        async with self._session_factory() as session:
            image = await self._get_image(session, asset_id, draft_id)
            key = image.storage_path
            await GalleryImageRepository(session).delete(asset_id)
            await session.commit()

        logger.info("asset_removed", asset_id=str(asset_id))
        await self._delete_object_quietly(key)

    async def _get_image(
        self,
        session: AsyncSession,
        asset_id: UUID,
        draft_id: Optional[UUID],
    ) -> GalleryImage:
        gallery_repo = GalleryImageRepository(session)
        if draft_id is None:
            image = await gallery_repo.get(asset_id)
        else:
            image = await gallery_repo.get_for_artisan(asset_id, draft_id)
        if not image:
            raise GalleryImageNotFoundError(str(asset_id))
        return image

    async def _delete_object_quietly(self, key: str) -> None:
        try:
            await self._storage.delete(key)
        except StorageError as e:
            logger.warning("storage_cleanup_failed", key=key, error=e.message)
