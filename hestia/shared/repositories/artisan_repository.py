"""
Artisan repository for data access.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hestia.shared.models.artisan import Artisan
from hestia.shared.repositories.base import BaseRepository


class ArtisanRepository(BaseRepository[Artisan]):
    """Repository for Artisan entity."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Artisan, session)

    async def get_by_user_id(self, user_id: UUID) -> Optional[Artisan]:
        """The user's artisan record (any status), with the base profile loaded."""
        stmt = (
            select(Artisan)
            .where(Artisan.user_id == user_id)
            .options(selectinload(Artisan.profile))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_profile(self, artisan_id: UUID) -> Optional[Artisan]:
        """Artisan by id, with the base profile loaded."""
        stmt = (
            select(Artisan)
            .where(Artisan.id == artisan_id)
            .options(selectinload(Artisan.profile))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

