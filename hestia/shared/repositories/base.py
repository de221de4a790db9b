"""
Base Repository

Generic async data access shared by the Profile, Artisan and GalleryImage
repositories.

    get(id)          one row by primary key, or None
    count(filters)   COUNT(*) with equality filters
    create(**cols)   INSERT, flushed and refreshed
    delete(id)       hard DELETE, False if the row was already gone

Typed per model:

    class GalleryImageRepository(BaseRepository[GalleryImage]):
        def __init__(self, session):
            super().__init__(GalleryImage, session)

Transactions:
=============
Repositories only flush(). The service that opened the session commits or
rolls back, so several repository calls can form one unit of work.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from hestia.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    CRUD over one mapped model inside a caller-owned session.

    Attributes:
        model: Mapped class the queries target
        session: Session opened by the calling service
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Row with primary key ``record_id``.

        SQL Generated:
            SELECT * FROM artisans WHERE id = :record_id
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """
        Number of rows matching every ``column=value`` pair in ``filters``.

        Keys that are not columns of the model are ignored.

        SQL Generated:
            SELECT count(*) FROM gallery_images WHERE artisan_id = :artisan_id
        """
        query = select(sql_count()).select_from(self.model)

        for column, value in (filters or {}).items():
            if hasattr(self.model, column):
                query = query.where(getattr(self.model, column) == value)

        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Insert a row and return it with server defaults populated.

        Raises:
            sqlalchemy.exc.IntegrityError: On a constraint violation; the
                caller decides whether that means "already exists"
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, record_id: UUID) -> bool:
        """Delete the row; False when it did not exist."""
        instance = await self.get(record_id)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
