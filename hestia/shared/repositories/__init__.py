"""
Repository Pattern Implementations

This module provides the Repository pattern for database operations.
Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]           ← Generic CRUD operations
         │
         ├── ProfileRepository          ← Base profile (display name, role)
         ├── ArtisanRepository          ← Artisan lookup by owner
         └── GalleryImageRepository     ← Ordering, counts, featured cap

Usage Example:
==============
    from hestia.shared.repositories import ArtisanRepository, GalleryImageRepository

    async with session_factory() as session:
        artisan_repo = ArtisanRepository(session)
        gallery_repo = GalleryImageRepository(session)

        artisan = await artisan_repo.get_by_user_id(user_id)
        images = await gallery_repo.list_for_artisan(artisan.id)
"""

from hestia.shared.repositories.base import BaseRepository
from hestia.shared.repositories.profile_repository import ProfileRepository
from hestia.shared.repositories.artisan_repository import ArtisanRepository
from hestia.shared.repositories.gallery_image_repository import GalleryImageRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "ProfileRepository",
    "ArtisanRepository",
    "GalleryImageRepository",
]
