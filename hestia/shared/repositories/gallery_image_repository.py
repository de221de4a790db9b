"""
GalleryImage repository for data access.

Featured Cap:
=============
Featuring an image is a single conditional UPDATE that only matches when
the artisan has fewer than ``limit`` featured images:

    UPDATE gallery_images SET is_featured = true
    WHERE id = :asset_id
      AND artisan_id = :artisan_id
      AND is_featured = false
      AND (SELECT count(*) FROM gallery_images AS g
           WHERE g.artisan_id = :artisan_id AND g.is_featured) < :limit

On PostgreSQL the owning artisan row is locked first (SELECT ... FOR UPDATE)
so two concurrent requests for the same artisan cannot both pass the count.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from hestia.shared.models.artisan import Artisan
from hestia.shared.models.gallery_image import GalleryImage
from hestia.shared.repositories.base import BaseRepository


class GalleryImageRepository(BaseRepository[GalleryImage]):
    """Repository for GalleryImage entity."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(GalleryImage, session)

    async def get_for_artisan(self, asset_id: UUID, artisan_id: UUID) -> Optional[GalleryImage]:
        """Image by id, only if it belongs to ``artisan_id``."""
        stmt = select(GalleryImage).where(
            GalleryImage.id == asset_id,
            GalleryImage.artisan_id == artisan_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_artisan(self, artisan_id: UUID) -> list[GalleryImage]:
        """All images of an artisan in display order."""
        stmt = (
            select(GalleryImage)
            .where(GalleryImage.artisan_id == artisan_id)
            .order_by(GalleryImage.position, GalleryImage.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_for_artisan(self, artisan_id: UUID) -> int:
        """Number of images attached to an artisan."""
        return await self.count(filters={"artisan_id": artisan_id})

    async def feature_within_limit(self, asset_id: UUID, artisan_id: UUID, limit: int) -> bool:
        """
        Mark an image featured unless the artisan already has ``limit`` featured.

        Returns:
            True if the row was updated, False if the cap was reached or the
            image was already featured / does not exist
        """
        lock = select(Artisan.id).where(Artisan.id == artisan_id).with_for_update()
        await self.session.execute(lock)

        counted = aliased(GalleryImage)
        featured_count = (
            select(func.count())
            .select_from(counted)
            .where(counted.artisan_id == artisan_id, counted.is_featured.is_(True))
            .scalar_subquery()
        )

        stmt = (
            update(GalleryImage)
            .where(
                GalleryImage.id == asset_id,
                GalleryImage.artisan_id == artisan_id,
                GalleryImage.is_featured.is_(False),
                featured_count < limit,
            )
            .values(is_featured=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def unfeature(self, asset_id: UUID, artisan_id: UUID) -> bool:
        """Clear the featured flag. Returns False if the image does not exist."""
        stmt = (
            update(GalleryImage)
            .where(GalleryImage.id == asset_id, GalleryImage.artisan_id == artisan_id)
            .values(is_featured=False)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
